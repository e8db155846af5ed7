# encoding/numeric.py
from decimal import ROUND_HALF_UP, Decimal, localcontext
from math import isfinite
from numbers import Real

DECIMAL_PLACES = 6


def _to_decimal(num: Real | Decimal) -> Decimal:
    if isinstance(num, Decimal):
        return num
    if isinstance(num, bool):
        raise TypeError("bool is not a coordinate value")
    if isinstance(num, int):
        return Decimal(num)
    x = float(num)
    if not isfinite(x):
        raise ValueError(f"cannot format non-finite value {x!r}")
    # repr() is the shortest string that round-trips the double, which is what
    # every other producer of these ids starts from.
    return Decimal(repr(x))


def round_fixed(num: Real | Decimal, decimal_places: int = DECIMAL_PLACES) -> str:
    """
    Render ``num`` as a fixed-point string with exactly ``decimal_places`` digits.

    Rounding is half-up (ties away from zero) on the shortest decimal form of the
    value, never on its binary expansion: ``40.7416415`` -> ``"40.741642"``.
    Exact zero renders unsigned; a negative value that rounds to zero keeps its
    sign (``-1e-7`` -> ``"-0.000000"``).
    """
    if decimal_places < 0:
        raise ValueError("decimal_places must be >= 0")
    d = _to_decimal(num)
    if not d.is_finite():
        raise ValueError(f"cannot format non-finite value {num!r}")
    if d.is_zero():
        d = d.copy_abs()
    with localcontext() as ctx:
        ctx.prec = max(28, d.adjusted() + decimal_places + 2)
        q = d.quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_HALF_UP)
    return format(q, "f")
