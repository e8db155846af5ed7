# domain/measure.py
import math

import numpy as np

from sharedstreets.domain.coords import get_coord, get_coords
from sharedstreets.domain.entities.geography import LineInput, PointInput

EARTH_RADIUS_M = 6371008.8  # mean radius
BEARING_OFFSET_M = 20.0


def _rad(deg):
    # degrees are reduced mod 360 before conversion, sign kept (fmod)
    return np.fmod(deg, 360.0) * np.pi / 180


def segment_lengths_m(coords) -> np.ndarray:
    """Haversine length of every consecutive pair of ``[lon, lat]`` positions, in meters."""
    deg = np.asarray(coords, dtype=float)[:, :2]
    dlon, dlat = _rad(np.diff(deg[:, 0])), _rad(np.diff(deg[:, 1]))
    lat = _rad(deg[:, 1])
    a = np.sin(dlat / 2) ** 2 + np.sin(dlon / 2) ** 2 * np.cos(lat[:-1]) * np.cos(lat[1:])
    return 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a)) * EARTH_RADIUS_M


def distance_m(a: PointInput, b: PointInput) -> float:
    return float(segment_lengths_m([get_coord(a), get_coord(b)])[0])


def line_length_m(line: LineInput) -> float:
    return float(segment_lengths_m(get_coords(line)).sum())


def bearing(start: PointInput, end: PointInput) -> float:
    """Initial great-circle bearing, degrees clockwise from north, in [0, 360)."""
    lon1, lat1 = (float(_rad(float(v))) for v in get_coord(start))
    lon2, lat2 = (float(_rad(float(v))) for v in get_coord(end))
    a = math.sin(lon2 - lon1) * math.cos(lat2)
    b = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    deg = math.atan2(a, b) * 180 / math.pi % 360.0
    return 0.0 if deg == 360.0 else deg


def destination(origin: PointInput, meters: float, bearing_deg: float) -> list[float]:
    """Point reached travelling ``meters`` from ``origin`` on the initial bearing."""
    lon1, lat1 = (math.radians(float(v)) for v in get_coord(origin))
    brg = math.radians(bearing_deg)
    d = meters / EARTH_RADIUS_M
    lat2 = math.asin(math.sin(lat1) * math.cos(d) + math.cos(lat1) * math.sin(d) * math.cos(brg))
    lon2 = lon1 + math.atan2(
        math.sin(brg) * math.sin(d) * math.cos(lat1),
        math.cos(d) - math.sin(lat1) * math.sin(lat2),
    )
    return [math.degrees(lon2), math.degrees(lat2)]


def along(line: LineInput, meters: float) -> list[float]:
    """
    Point ``meters`` along the line, following its segments.
    Clamps to the first/last position when outside [0, length].
    """
    coords = get_coords(line)
    if meters <= 0:
        return coords[0]
    lengths = segment_lengths_m(coords)
    travelled = np.cumsum(lengths)
    i = int(np.searchsorted(travelled, meters, side="left"))
    if i >= len(lengths):
        return coords[-1]
    if travelled[i] == meters:
        return coords[i + 1]
    start = coords[i]
    return destination(start, meters - (travelled[i] - lengths[i]), bearing(start, coords[i + 1]))


def offset_end(line: LineInput, meters: float = BEARING_OFFSET_M) -> list[float]:
    """
    Last position of the line shifted ``meters`` to the right of its final segment.

    The shift is planar in degrees: ``meters`` becomes an arc angle on the mean
    radius and is applied perpendicular to the segment's lon/lat direction.
    Trailing zero-length segments are skipped, so the direction comes from the
    last distinct position before the end. A line with no length is returned
    unshifted at its end.
    """
    coords = get_coords(line)
    off = meters / EARTH_RADIUS_M * 180 / math.pi
    x2, y2 = (float(v) for v in coords[-1])
    for prev in reversed(coords[:-1]):
        x1, y1 = (float(v) for v in prev)
        seg = math.sqrt((x1 - x2) * (x1 - x2) + (y1 - y2) * (y1 - y2))
        if seg > 0:
            return [x2 + off * (y2 - y1) / seg, y2 + off * (x1 - x2) / seg]
    return [x2, y2]


def outbound_bearing(line: LineInput) -> float:
    """Bearing from the line's start to its end shifted 20 m to the right (see ``offset_end``)."""
    coords = get_coords(line)
    return bearing(coords[0], offset_end(coords))


def inbound_bearing(line: LineInput) -> float:
    """Bearing from the line's end back to its start."""
    coords = get_coords(line)
    return bearing(coords[-1], coords[0])


def distance_to_next_ref(start: PointInput, end: PointInput) -> float:
    # meters / 100; the reference message truncates this value as-is
    return distance_m(start, end) / 100
