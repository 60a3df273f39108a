from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal
from functools import partial
import math
from typing import Callable, Literal


TickFormat = Literal["significant", "integer"]
TickFormatter = Callable[[float], str]

NAN_LABEL = "-"


def to_significant_digit_string(value: float, significant_digits: int) -> str:
    """Render ``value`` in plain decimal notation with a fixed number of significant digits.

    Rounding is done on the shortest decimal representation of the float with
    half-up semantics, so ``0.125`` rounds to ``0.13`` rather than falling on the
    wrong side of the tie in binary. When rounding leaves fewer digits than
    requested, trailing zeros are appended (``4.0`` with 3 digits is ``"4.00"``).
    ``significant_digits == 0`` keeps every digit. NaN renders as ``"-"``.
    """
    if significant_digits < 0:
        raise ValueError(f"significant_digits must be >= 0, got {significant_digits}")
    if math.isnan(value):
        return NAN_LABEL
    if math.isinf(value):
        raise ValueError("cannot format an infinite value")

    # -0.0 + 0.0 is 0.0, so negative zero never prints as "-0".
    d = Decimal(repr(float(value) + 0.0))
    if significant_digits > 0:
        d = Context(prec=significant_digits, rounding=ROUND_HALF_UP).plus(d)
    sign, digits, exponent = d.as_tuple()
    missing = significant_digits - len(digits)
    if missing > 0:
        d = Decimal((sign, digits + (0,) * missing, exponent - missing))
    return format(d, "f")


def floor_integer_label(value: float) -> str:
    """Label for integer-valued axes: fractional values are truncated downward, not rounded."""
    return str(int(math.floor(value)))


def resolve_tick_formatter(kind: TickFormat, significant_digits: int) -> TickFormatter:
    if kind == "significant":
        return partial(to_significant_digit_string, significant_digits=significant_digits)
    if kind == "integer":
        return floor_integer_label
    raise ValueError(f"unknown tick format: {kind}")
