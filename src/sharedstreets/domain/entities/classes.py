# domain/entities/classes.py
from enum import IntEnum
from numbers import Integral

from sharedstreets.errors import InvalidEnumValue


# Member names are the wire strings used by the rest of the ecosystem.
class RoadClass(IntEnum):
    Motorway = 0
    Trunk = 1
    Primary = 2
    Secondary = 3
    Tertiary = 4
    Residential = 5
    Unclassified = 6
    Service = 7
    Other = 8


class FormOfWay(IntEnum):
    Undefined = 0
    Motorway = 1
    MultipleCarriageway = 2
    SingleCarriageway = 3
    Roundabout = 4
    TrafficSquare = 5
    SlipRoad = 6
    Other = 7


def _from_number(enum: type[IntEnum], value) -> IntEnum:
    # bool is an int subclass; True must not silently become Trunk/Motorway
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidEnumValue(f"[{value!r}] unknown {enum.__name__} Number value")
    try:
        return enum(int(value))
    except ValueError:
        raise InvalidEnumValue(f"[{value!r}] unknown {enum.__name__} Number value") from None


def _from_string(enum: type[IntEnum], value) -> IntEnum:
    try:
        return enum[value]
    except (KeyError, TypeError):
        raise InvalidEnumValue(f"[{value!r}] unknown {enum.__name__} String value") from None


def road_class_to_string(value: int) -> str:
    """0 -> "Motorway", 5 -> "Residential"."""
    return _from_number(RoadClass, value).name


def road_class_to_number(value: str) -> int:
    """"Motorway" -> 0, "Residential" -> 5."""
    return int(_from_string(RoadClass, value))


def form_of_way_to_string(value: int | None) -> str:
    """0 (or None) -> "Undefined", 5 -> "TrafficSquare"."""
    if value is None:
        return FormOfWay.Undefined.name
    return _from_number(FormOfWay, value).name


def form_of_way_to_number(value: str | None) -> int:
    """"Undefined" (or None) -> 0, "TrafficSquare" -> 5."""
    if value is None:
        return int(FormOfWay.Undefined)
    return int(_from_string(FormOfWay, value))


def as_road_class(value) -> RoadClass:
    """Accept a RoadClass, its number or its string name."""
    if isinstance(value, RoadClass):
        return value
    if isinstance(value, str):
        return _from_string(RoadClass, value)
    return _from_number(RoadClass, value)


def as_form_of_way(value) -> FormOfWay:
    """Accept a FormOfWay, its number or its string name."""
    if isinstance(value, FormOfWay):
        return value
    if isinstance(value, str):
        return _from_string(FormOfWay, value)
    return _from_number(FormOfWay, value)
