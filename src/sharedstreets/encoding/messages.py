# encoding/messages.py
"""
Canonical messages hashed into identifiers.

Field order and the single-space separator are part of the identifier
contract; any change yields different ids for the same input.
"""

import math
from collections.abc import Iterable

from sharedstreets.domain.coords import get_coord, get_coords
from sharedstreets.domain.entities.classes import FormOfWay, as_form_of_way
from sharedstreets.domain.entities.geography import LineInput, PointInput
from sharedstreets.domain.entities.records import LocationReference
from sharedstreets.encoding.numeric import round_fixed


def geometry_message(line: LineInput) -> str:
    """``Geometry 110.000000 45.000000 115.000000 50.000000``"""
    coords = get_coords(line)
    return "Geometry " + " ".join(f"{round_fixed(x)} {round_fixed(y)}" for x, y in coords)


def intersection_message(pt: PointInput) -> str:
    lon, lat = get_coord(pt)
    return f"Intersection {round_fixed(lon)} {round_fixed(lat)}"


def reference_message(
    location_references: Iterable[LocationReference],
    form_of_way: FormOfWay | int | str = FormOfWay.Other,
) -> str:
    parts = ["Reference", str(int(as_form_of_way(form_of_way)))]
    for lr in location_references:
        parts += [round_fixed(lr.lon), round_fixed(lr.lat)]
        if lr.outbound_bearing is not None and lr.distance_to_next_ref is not None:
            parts += [str(math.trunc(lr.outbound_bearing)), str(math.trunc(lr.distance_to_next_ref))]
    return " ".join(parts)
