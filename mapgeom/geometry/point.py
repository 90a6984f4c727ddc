#!/usr/bin/env python3
# mapgeom/geometry/point.py
"""
Point: a 2D pixel / planar coordinate.

Every operation has an immutable form that returns a new Point and, for the
hot loops of projection and clipping, an *_in_place form that mutates and
returns the receiver. The plain operators (+ - * /) map to the immutable API
and the augmented ones (+= -= *= /=) to the in-place API.

Division by zero is not guarded: it yields inf / NaN coordinates.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any, Optional

from mapgeom import util

__all__ = ["Point", "to_point"]


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x: float, y: float, round_: bool = False):
        self.x = util.round_half_up(x) if round_ else x
        self.y = util.round_half_up(y) if round_ else y

    def clone(self) -> Point:
        return Point(self.x, self.y)

    # ------------- immutable arithmetic -------------

    def add(self, other: Any) -> Point:
        return self.clone().add_in_place(to_point(other))

    def subtract(self, other: Any) -> Point:
        return self.clone().subtract_in_place(to_point(other))

    def multiply_by(self, num: float) -> Point:
        return self.clone().multiply_by_in_place(num)

    def divide_by(self, num: float) -> Point:
        return self.clone().divide_by_in_place(num)

    def scale_by(self, other: Any) -> Point:
        """Multiply component-wise by another point."""
        other = to_point(other)
        return Point(self.x * other.x, self.y * other.y)

    def unscale_by(self, other: Any) -> Point:
        """Inverse of scale_by."""
        other = to_point(other)
        return Point(util.ieee_div(self.x, other.x), util.ieee_div(self.y, other.y))

    def round(self) -> Point:
        return self.clone().round_in_place()

    def floor(self) -> Point:
        return self.clone().floor_in_place()

    def ceil(self) -> Point:
        return self.clone().ceil_in_place()

    def trunc(self) -> Point:
        """Round towards zero."""
        return self.clone().trunc_in_place()

    # ------------- in-place arithmetic -------------

    def add_in_place(self, other: Point) -> Point:
        self.x += other.x
        self.y += other.y
        return self

    def subtract_in_place(self, other: Point) -> Point:
        self.x -= other.x
        self.y -= other.y
        return self

    def multiply_by_in_place(self, num: float) -> Point:
        self.x *= num
        self.y *= num
        return self

    def divide_by_in_place(self, num: float) -> Point:
        self.x = util.ieee_div(self.x, num)
        self.y = util.ieee_div(self.y, num)
        return self

    def round_in_place(self) -> Point:
        self.x = util.round_half_up(self.x)
        self.y = util.round_half_up(self.y)
        return self

    def floor_in_place(self) -> Point:
        self.x = util.floor(self.x)
        self.y = util.floor(self.y)
        return self

    def ceil_in_place(self) -> Point:
        self.x = util.ceil(self.x)
        self.y = util.ceil(self.y)
        return self

    def trunc_in_place(self) -> Point:
        self.x = util.trunc(self.x)
        self.y = util.trunc(self.y)
        return self

    # ------------- queries -------------

    def distance_to(self, other: Any) -> float:
        other = to_point(other)
        return math.hypot(other.x - self.x, other.y - self.y)

    def equals(self, other: Any) -> bool:
        other = to_point(other)
        if other is None:
            return False
        return other.x == self.x and other.y == self.y

    def contains(self, other: Any) -> bool:
        """True if both coordinates of other are <= ours in absolute value."""
        other = to_point(other)
        return abs(other.x) <= abs(self.x) and abs(other.y) <= abs(self.y)

    # ------------- operators -------------

    def __add__(self, other: Any) -> Point:
        return self.add(other)

    def __sub__(self, other: Any) -> Point:
        return self.subtract(other)

    def __mul__(self, num: float) -> Point:
        return self.multiply_by(num)

    __rmul__ = __mul__

    def __truediv__(self, num: float) -> Point:
        return self.divide_by(num)

    def __iadd__(self, other: Any) -> Point:
        return self.add_in_place(to_point(other))

    def __isub__(self, other: Any) -> Point:
        return self.subtract_in_place(to_point(other))

    def __imul__(self, num: float) -> Point:
        return self.multiply_by_in_place(num)

    def __itruediv__(self, num: float) -> Point:
        return self.divide_by_in_place(num)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    # Mutable through the in-place API, so not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point({util.num_to_str(self.x)}, {util.num_to_str(self.y)})"


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def to_point(x: Any, y: Optional[float] = None, round_: bool = False) -> Optional[Point]:
    """
    Coerce loose input into a Point.

    Accepts a Point (returned unchanged), an [x, y] sequence, a mapping with
    'x' and 'y' keys, or two numbers. Returns None for None or any other shape.
    """
    if isinstance(x, Point):
        return x
    if x is None:
        return None
    if isinstance(x, Sequence) and not isinstance(x, str):
        if len(x) >= 2 and _is_number(x[0]) and _is_number(x[1]):
            return Point(x[0], x[1])
        return None
    if isinstance(x, Mapping):
        if "x" in x and "y" in x:
            return Point(x["x"], x["y"])
        return None
    if _is_number(x) and _is_number(y):
        return Point(x, y, round_)
    return None
