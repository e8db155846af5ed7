# tests/encoding/test_numeric.py
from decimal import Decimal

import numpy as np
import pytest

from sharedstreets.encoding.numeric import round_fixed


def test_integers_and_floats_get_six_places():
    assert round_fixed(110) == "110.000000"
    assert round_fixed(45.0) == "45.000000"
    assert round_fixed(-74.0048213) == "-74.004821"


def test_ties_round_half_up_on_the_shortest_decimal_form():
    # binary doubles for these sit just below the tie; the decimal form decides
    assert round_fixed(40.7416415) == "40.741642"
    assert round_fixed(40.7408505) == "40.740851"
    assert round_fixed(1.0000005) == "1.000001"


def test_negative_ties_round_away_from_zero():
    assert round_fixed(-74.0051265) == "-74.005127"
    assert round_fixed(-5e-7) == "-0.000001"
    assert round_fixed(-2.5, 0) == "-3"
    assert round_fixed(2.5, 0) == "3"


def test_zero_and_tiny_values():
    assert round_fixed(0) == "0.000000"
    assert round_fixed(-0.0) == "0.000000"
    assert round_fixed(1e-7) == "0.000000"
    assert round_fixed(-1e-7) == "-0.000000"
    assert round_fixed(5e-7) == "0.000001"


def test_no_scientific_notation():
    assert round_fixed(1e21) == "1000000000000000000000.000000"
    assert round_fixed(0.1 + 0.2) == "0.300000"


def test_numpy_and_decimal_inputs():
    assert round_fixed(np.float64(40.7416415)) == "40.741642"
    assert round_fixed(np.int64(-3)) == "-3.000000"
    assert round_fixed(Decimal("1.23456749")) == "1.234567"


def test_custom_places():
    assert round_fixed(12.3456789, 2) == "12.35"
    assert round_fixed(12.3456789, 0) == "12"


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf"), Decimal("NaN")])
def test_non_finite_values_are_rejected(bad):
    with pytest.raises(ValueError):
        round_fixed(bad)


def test_negative_places_are_rejected():
    with pytest.raises(ValueError):
        round_fixed(1.0, -1)
