# domain/coords.py
from collections.abc import Mapping, Sequence
from math import isfinite
from typing import Any

from sharedstreets.domain.entities.geography import (
    Coordinate,
    GeoInterface,
    LineFeature,
    LineInput,
    PointFeature,
    PointInput,
    Position,
)
from sharedstreets.errors import InvalidGeometry


def _unwrap(obj, kind: str):
    """Return the ``coordinates`` member of a GeoJSON Feature / geometry of the given type."""
    t = obj.get("type")
    if t == "Feature":
        geom = obj.get("geometry")
        if geom is None:
            raise InvalidGeometry(f"{kind} geometry cannot be null")
        return _unwrap(geom, kind)
    if t != kind:
        raise InvalidGeometry(f"expected a GeoJSON {kind}, got {t!r}")
    if "coordinates" not in obj:
        raise InvalidGeometry(f"{kind} has no coordinates")
    return obj["coordinates"]


def _position(p) -> list:
    try:
        lon, lat = p[0], p[1]
    except (TypeError, IndexError, KeyError):
        raise InvalidGeometry(f"not a [lon, lat] position: {p!r}") from None
    try:
        finite = isfinite(float(lon)) and isfinite(float(lat))
    except (TypeError, ValueError):
        finite = False
    if not finite or isinstance(lon, (bool, str)) or isinstance(lat, (bool, str)):
        raise InvalidGeometry(f"not a [lon, lat] position: {p!r}")
    return [lon, lat]  # altitude, if any, is not part of the identity


def get_coords(line: LineInput) -> list[list[float]]:
    """
    Normalize any supported line input to a list of ``[lon, lat]`` positions.

    Accepts raw position sequences (lists, tuples, numpy arrays), ``LineFeature``,
    GeoJSON ``Feature``/``LineString`` mappings and ``__geo_interface__`` objects.
    """
    if line is None:
        raise InvalidGeometry("line geometry cannot be None")
    if isinstance(line, LineFeature):
        coords = line.coordinates
    elif isinstance(line, Mapping):
        coords = _unwrap(line, "LineString")
    elif isinstance(line, GeoInterface):
        coords = _unwrap(line.__geo_interface__, "LineString")
    else:
        coords = line
    if coords is None:
        raise InvalidGeometry("line geometry cannot be None")
    try:
        out = [_position(p) for p in coords]
    except TypeError:
        raise InvalidGeometry(f"not a sequence of positions: {coords!r}") from None
    if len(out) < 2:
        raise InvalidGeometry(f"a line needs at least 2 positions, got {len(out)}")
    return out


def get_coord(pt: PointInput) -> list[float]:
    """Normalize any supported point input to ``[lon, lat]``."""
    if pt is None:
        raise InvalidGeometry("point geometry cannot be None")
    if isinstance(pt, Coordinate):
        return [pt.lon, pt.lat]
    if isinstance(pt, PointFeature):
        return _position(pt.coordinate)
    if isinstance(pt, Mapping):
        return _position(_unwrap(pt, "Point"))
    if isinstance(pt, GeoInterface):
        return _position(_unwrap(pt.__geo_interface__, "Point"))
    return _position(pt)


def get_properties(obj) -> dict[str, Any]:
    """Feature properties of a structured input; raw sequences have none."""
    if isinstance(obj, (LineFeature, PointFeature)):
        return dict(obj.properties or {})
    if isinstance(obj, GeoInterface) and not isinstance(obj, Mapping):
        obj = obj.__geo_interface__
    if isinstance(obj, Mapping) and obj.get("type") == "Feature":
        return dict(obj.get("properties") or {})
    return {}


def lonlats_to_coords(lonlats: Sequence[float]) -> list[list[float]]:
    """[110, 45, 120, 55] -> [[110, 45], [120, 55]]"""
    if len(lonlats) % 2:
        raise InvalidGeometry(f"lonlats must have an even length, got {len(lonlats)}")
    return [[lonlats[i], lonlats[i + 1]] for i in range(0, len(lonlats), 2)]


def coords_to_lonlats(coords: Sequence[Position]) -> list[float]:
    """[[110, 45], [120, 55]] -> [110, 45, 120, 55]"""
    lonlats: list[float] = []
    for c in coords:
        lonlats.extend((c[0], c[1]))
    return lonlats
