# app/builders.py
"""
Public operations: content-addressed ids and the records built around them.

    >>> geometry_id([[110, 45], [115, 50], [120, 55]])
    'ce9c0ec1472c0a8bab3190ab075e9b21'
    >>> intersection_id([110, 45])
    '71f34691f182a467137b3d37265cb3b6'
"""

from collections.abc import Mapping, Sequence
from typing import Any

from sharedstreets.config.models import (
    GeometryOptions,
    IntersectionOptions,
    LocationReferenceOptions,
    resolve_options,
)
from sharedstreets.domain.coords import coords_to_lonlats, get_coord, get_coords, get_properties
from sharedstreets.domain.entities.classes import FormOfWay, RoadClass, as_form_of_way, as_road_class
from sharedstreets.domain.entities.geography import LineInput, PointInput
from sharedstreets.domain.entities.records import (
    Geometry,
    Intersection,
    LocationReference,
    Metadata,
    Reference,
)
from sharedstreets.domain.measure import distance_to_next_ref, inbound_bearing, outbound_bearing
from sharedstreets.encoding.hashing import generate_hash
from sharedstreets.encoding.messages import (
    geometry_message,
    intersection_message,
    reference_message,
)


# ------------- Ids --------------------


def geometry_id(line: LineInput) -> str:
    return generate_hash(geometry_message(line))


def intersection_id(pt: PointInput) -> str:
    return generate_hash(intersection_message(pt))


def reference_id(
    location_references: Sequence[LocationReference],
    form_of_way: FormOfWay | int | str = FormOfWay.Other,
) -> str:
    return generate_hash(reference_message(location_references, form_of_way))


# ------------- Records --------------------


def location_reference(
    pt: PointInput, options: LocationReferenceOptions | Mapping | None = None, **overrides
) -> LocationReference:
    """
    Bearings and distance_to_next_ref of 0 are treated as absent and left out.
    Raises InvalidReference when an outbound bearing comes without distance_to_next_ref,
    which includes a nonzero outbound bearing with a distance of 0.
    The intersection id defaults to the id of ``pt``.
    """
    opts = resolve_options(LocationReferenceOptions, options, overrides)
    lon, lat = get_coord(pt)
    return LocationReference(
        intersection_id=opts.intersection_id or intersection_id([lon, lat]),
        lon=lon,
        lat=lat,
        inbound_bearing=opts.inbound_bearing or None,
        outbound_bearing=opts.outbound_bearing or None,
        distance_to_next_ref=opts.distance_to_next_ref or None,
    )


def endpoint_references(line: LineInput) -> tuple[LocationReference, LocationReference]:
    """Start reference (outbound bearing + distance to the end) and end reference (inbound bearing)."""
    coords = get_coords(line)
    start, end = coords[0], coords[-1]
    first = location_reference(
        start,
        outbound_bearing=outbound_bearing(coords),
        distance_to_next_ref=distance_to_next_ref(start, end),
    )
    last = location_reference(end, inbound_bearing=inbound_bearing(coords))
    return first, last


def _classification(properties: Mapping[str, Any], key: str | None, convert, default):
    if key is None or properties.get(key) is None:
        return default
    return convert(properties[key])


def geometry_with_references(
    line: LineInput, options: GeometryOptions | Mapping | None = None, **overrides
) -> tuple[Geometry, Reference, Reference]:
    """Geometry plus its forward and back Reference records (same endpoints, reversed order)."""
    opts = resolve_options(GeometryOptions, options, overrides)
    coords = get_coords(line)
    properties = get_properties(line)

    form_of_way = _classification(properties, opts.form_of_way, as_form_of_way, FormOfWay.Undefined)
    road_class = _classification(properties, opts.road_class, as_road_class, RoadClass.Other)

    first, last = endpoint_references(coords)
    gid = geometry_id(coords)
    forward = reference(gid, [first, last], form_of_way)
    back = reference(gid, [last, first], form_of_way)
    geom = Geometry(
        id=gid,
        from_intersection_id=first.intersection_id,
        to_intersection_id=last.intersection_id,
        forward_reference_id=forward.id,
        back_reference_id=back.id,
        road_class=road_class.name,
        lonlats=tuple(coords_to_lonlats(coords)),
    )
    return geom, forward, back


def geometry(line: LineInput, options: GeometryOptions | Mapping | None = None, **overrides) -> Geometry:
    """
    Build the Geometry record for a line.

    ``options.form_of_way`` / ``options.road_class`` name feature properties holding
    the classification as a number or string; absent values fall back to
    FormOfWay.Undefined and RoadClass.Other.
    """
    return geometry_with_references(line, options, **overrides)[0]


def intersection(
    pt: PointInput, options: IntersectionOptions | Mapping | None = None, **overrides
) -> Intersection:
    """Reference lists may hold Reference records or reference ids."""
    opts = resolve_options(IntersectionOptions, options, overrides)
    lon, lat = get_coord(pt)
    return Intersection(
        id=intersection_id([lon, lat]),
        node_id=opts.node_id,
        lon=lon,
        lat=lat,
        inbound_reference_ids=tuple(opts.inbound_references),
        outbound_reference_ids=tuple(opts.outbound_references),
    )


def reference(
    geom: Geometry | str,
    location_references: Sequence[LocationReference],
    form_of_way: FormOfWay | int | str = FormOfWay.Other,
) -> Reference:
    fow = as_form_of_way(form_of_way)
    return Reference(
        id=reference_id(location_references, fow),
        geometry_id=geom if isinstance(geom, str) else geom.id,
        form_of_way=fow,
        location_references=tuple(location_references),
    )


def metadata(
    geom: Geometry | str,
    osm_metadata: Mapping[str, Any] | None = None,
    gis_metadata: Sequence[Mapping[str, Any]] | None = None,
) -> Metadata:
    return Metadata(
        geometry_id=geom if isinstance(geom, str) else geom.id,
        osm_metadata=dict(osm_metadata or {}),
        gis_metadata=[dict(m) for m in gis_metadata or ()],
    )
