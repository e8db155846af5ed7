# domain/entities/records.py
from dataclasses import dataclass, field
from typing import Any

from sharedstreets.domain.entities.classes import FormOfWay
from sharedstreets.errors import InvalidReference


@dataclass(frozen=True)
class LocationReference:
    """
    Directional waypoint at a path endpoint.
    Bearings are degrees clockwise from north; distance_to_next_ref is the
    great-circle distance to the next reference in meters / 100.
    """

    intersection_id: str
    lon: float
    lat: float
    inbound_bearing: float | None = None
    outbound_bearing: float | None = None
    distance_to_next_ref: float | None = None

    def __post_init__(self):
        if self.outbound_bearing is not None and self.distance_to_next_ref is None:
            raise InvalidReference("distance_to_next_ref is required if outbound_bearing is present")


@dataclass(frozen=True)
class Geometry:
    id: str
    from_intersection_id: str
    to_intersection_id: str
    forward_reference_id: str
    back_reference_id: str
    road_class: str
    lonlats: tuple[float, ...]  # lon0, lat0, lon1, lat1, ...


@dataclass(frozen=True)
class Intersection:
    id: str
    node_id: str
    lon: float
    lat: float
    inbound_reference_ids: tuple[str, ...] = ()
    outbound_reference_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Reference:
    id: str
    geometry_id: str
    form_of_way: FormOfWay
    location_references: tuple[LocationReference, ...]


# Plain association, not content-addressed
@dataclass(frozen=True)
class Metadata:
    geometry_id: str
    osm_metadata: dict[str, Any] = field(default_factory=dict)
    gis_metadata: list[dict[str, Any]] = field(default_factory=list)
