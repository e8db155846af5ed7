# tests/domain/test_measure.py
import math

import pytest

from sharedstreets.domain.measure import (
    BEARING_OFFSET_M,
    EARTH_RADIUS_M,
    along,
    bearing,
    destination,
    distance_m,
    distance_to_next_ref,
    inbound_bearing,
    line_length_m,
    offset_end,
    outbound_bearing,
)

ONE_DEG_M = EARTH_RADIUS_M * math.pi / 180  # one degree of arc


# ---------- Distance


def test_distance_one_degree_on_equator():
    assert abs(distance_m([0, 0], [1, 0]) - ONE_DEG_M) < 1e-6
    assert abs(distance_m([0, 0], [0, 1]) - ONE_DEG_M) < 1e-6
    assert distance_m([5, 5], [5, 5]) == 0.0


def test_distance_to_next_ref_is_meters_over_100():
    assert abs(distance_to_next_ref([0, 0], [1, 0]) - ONE_DEG_M / 100) < 1e-9
    assert abs(distance_to_next_ref([110, 45], [120, 55]) * 100 - distance_m([110, 45], [120, 55])) < 1e-6


def test_line_length_sums_segments():
    line = [[0, 0], [1, 0], [1, 1]]
    assert abs(line_length_m(line) - 2 * ONE_DEG_M) < 1e-5


# ---------- Bearing (degrees clockwise from north, [0, 360))


@pytest.mark.parametrize(
    "end, expected",
    [([0, 1], 0.0), ([1, 0], 90.0), ([0, -1], 180.0), ([-1, 0], 270.0)],
)
def test_bearing_cardinal_directions(end, expected):
    assert abs(bearing([0, 0], end) - expected) < 1e-9


def test_bearing_is_normalized():
    for end in ([-1, 1], [-1, -1], [-0.0001, 1]):
        b = bearing([0, 0], end)
        assert 0.0 <= b < 360.0
    assert abs(bearing([0, 0], [-1, 1]) - 315.0) < 0.01


def test_bearing_of_identical_points_is_zero():
    assert bearing([3, 4], [3, 4]) == 0.0


def test_destination_matches_distance_and_bearing():
    p = destination([10, 20], 1500.0, 33.0)
    assert abs(distance_m([10, 20], p) - 1500.0) < 1e-6
    assert abs(bearing([10, 20], p) - 33.0) < 1e-6


# ---------- Along


def test_along_clamps_to_ends():
    line = [[0, 0], [0.0001, 0]]
    assert along(line, 0) == [0, 0]
    assert along(line, -5) == [0, 0]
    assert along(line, 1e6) == [0.0001, 0]


def test_along_follows_the_path_round_corners():
    line = [[0, 0], [1, 0], [1, 1]]
    p = along(line, 1.5 * ONE_DEG_M)
    assert abs(p[0] - 1.0) < 1e-6
    assert abs(p[1] - 0.5) < 1e-6


def test_along_exact_vertex():
    line = [[0, 0], [1, 0], [1, 1]]
    p = along(line, float(line_length_m(line[:2])))
    assert p == [1, 0]


# ---------- Inbound / outbound

OFFSET_DEG = BEARING_OFFSET_M / EARTH_RADIUS_M * 180 / math.pi


def test_offset_end_shifts_right_of_the_last_segment():
    east = offset_end([[0, 0], [1, 0]])
    assert east[0] == 1.0
    assert abs(east[1] + OFFSET_DEG) < 1e-15
    north = offset_end([[5, 5], [3, 0], [3, 2]])
    assert abs(north[0] - (3 + OFFSET_DEG)) < 1e-15
    assert north[1] == 2.0
    diagonal = offset_end([[115, 50], [120, 55]])
    step = OFFSET_DEG / math.sqrt(2)
    assert abs(diagonal[0] - (120 + step)) < 1e-12
    assert abs(diagonal[1] - (55 - step)) < 1e-12


def test_offset_end_skips_trailing_repeated_positions():
    assert offset_end([[0, 0], [1, 0], [1, 0], [1, 0]]) == offset_end([[0, 0], [1, 0]])
    assert offset_end([[2, 2], [2, 2]]) == [2.0, 2.0]


def test_outbound_bearing_known_line():
    line = [[110, 45], [115, 50], [120, 55]]
    b = outbound_bearing(line)
    assert abs(b - 28.9836) < 1e-3
    assert math.trunc(b) == 28
    # aimed at the shifted end, not at a point near the start
    assert abs(b - bearing(line[0], along(line, 20.0))) > 3.0


def test_outbound_and_inbound_on_straight_line():
    line = [[0, 0], [1, 0]]
    assert 90.0 < outbound_bearing(line) < 90.02
    assert abs(inbound_bearing(line) - 270.0) < 1e-9


def test_outbound_on_curved_line_uses_the_last_segment():
    # ~11.1 m east then north: the end is shifted east
    line = [[0, 0], [0.0001, 0], [0.0001, 0.001]]
    b = outbound_bearing(line)
    assert BEARING_OFFSET_M == 20.0
    assert abs(b - bearing([0, 0], [0.0001 + OFFSET_DEG, 0.001])) < 1e-9
    assert 15.0 < b < 16.5
    # inbound is end -> start, not a local sample
    assert abs(inbound_bearing(line) - bearing([0.0001, 0.001], [0, 0])) < 1e-12


def test_outbound_on_line_shorter_than_offset_is_defined():
    line = [[0, 0], [0.0001, 0]]  # ~11 m, shift ~20 m south of the end
    b = outbound_bearing(line)
    assert math.isfinite(b)
    assert 150.0 < b < 152.0


def test_outbound_on_zero_length_line_is_defined():
    assert outbound_bearing([[1, 1], [1, 1]]) == 0.0
    assert inbound_bearing([[1, 1], [1, 1]]) == 0.0
    assert outbound_bearing([[0, 0], [1, 0], [1, 0]]) == outbound_bearing([[0, 0], [1, 0]])
