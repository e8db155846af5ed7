from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


# Core geometry types accepted by the builders
@dataclass(frozen=True)
class Coordinate:
    lon: float  # decimal degrees, WGS84
    lat: float

    def __iter__(self):
        yield self.lon
        yield self.lat


@dataclass(frozen=True)
class LineFeature:
    coordinates: Sequence[Sequence[float]]
    properties: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PointFeature:
    coordinate: Sequence[float]
    properties: Mapping[str, Any] = field(default_factory=dict)


@runtime_checkable
class GeoInterface(Protocol):
    """Anything exposing ``__geo_interface__`` (shapely, geojson, ...)."""

    @property
    def __geo_interface__(self) -> Mapping[str, Any]: ...


Position = Sequence[float]  # [lon, lat]
LineInput = LineFeature | Mapping[str, Any] | GeoInterface | Sequence[Position]
PointInput = Coordinate | PointFeature | Mapping[str, Any] | GeoInterface | Position
