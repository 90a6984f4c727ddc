#!/usr/bin/env python3
# mapgeom/util.py
"""
Numeric helpers shared by the geometry and geo packages.

Python raises on float division by zero, math.exp overflow and log(0), where
the coordinate math expects IEEE754 infinities and NaN to flow through.
The helpers here restore that behaviour without adding validation.
"""

from __future__ import annotations

import math
from typing import Sequence

__all__ = [
    "wrap_num",
    "format_num",
    "num_to_str",
    "ieee_div",
    "ieee_exp",
    "ieee_log",
    "round_half_up",
    "floor",
    "ceil",
    "trunc",
]


def wrap_num(x: float, rng: Sequence[float], include_max: bool = False) -> float:
    """
    Fold x into [min, max). x == max is kept as-is when include_max is set.
    """
    lo, hi = rng[0], rng[1]
    d = hi - lo
    if x == hi and include_max:
        return x
    return ((x - lo) % d + d) % d + lo


def format_num(num: float, digits: int = 6) -> float:
    """Round num to the given number of decimals (half rounds up)."""
    if not math.isfinite(num):
        return num
    p = 10 ** digits
    return math.floor(num * p + 0.5) / p


def num_to_str(num: float, digits: int = 6) -> str:
    """format_num, printed without a trailing '.0' for integral values."""
    v = format_num(num, digits)
    if math.isfinite(v) and float(v).is_integer():
        return str(int(v))
    return repr(float(v))


def ieee_div(a: float, b: float) -> float:
    """a / b, yielding +-inf or NaN for a zero divisor instead of raising."""
    try:
        return a / b
    except ZeroDivisionError:
        if math.isnan(a) or a == 0:
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def ieee_exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def ieee_log(x: float) -> float:
    if x > 0:
        return math.log(x)
    if x == 0:
        return -math.inf
    return math.nan


# Rounding helpers. Non-finite values pass through untouched.

def round_half_up(v: float) -> float:
    return float(math.floor(v + 0.5)) if math.isfinite(v) else v


def floor(v: float) -> float:
    return float(math.floor(v)) if math.isfinite(v) else v


def ceil(v: float) -> float:
    return float(math.ceil(v)) if math.isfinite(v) else v


def trunc(v: float) -> float:
    return float(math.trunc(v)) if math.isfinite(v) else v
