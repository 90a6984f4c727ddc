#!/usr/bin/env python3
# mapgeom/geometry/bounds.py
"""
Axis-aligned rectangle in pixel / planar space.

A Bounds starts out invalid (no min/max) and grows through extend(); the
first extension sets both corners to copies of the point.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Union

from mapgeom.geometry.point import Point, to_point

__all__ = ["Bounds", "to_bounds"]


class Bounds:
    """Rectangle defined by its min (top-left) and max (bottom-right) corners."""

    __slots__ = ("min", "max")

    def __init__(self, a: Any = None, b: Any = None):
        self.min: Optional[Point] = None
        self.max: Optional[Point] = None
        if a is None:
            return
        if b is not None:
            points: Iterable[Any] = [a, b]
        else:
            # A lone point, or an iterable of points.
            points = [a] if to_point(a) is not None else a
        for p in points:
            self.extend(p)

    def extend(self, point: Any) -> Bounds:
        """Grow the rectangle so it contains point."""
        p = to_point(point)
        if self.min is None or self.max is None:
            self.min = p.clone()
            self.max = p.clone()
            return self

        self.min.x = min(p.x, self.min.x)
        self.max.x = max(p.x, self.max.x)
        self.min.y = min(p.y, self.min.y)
        self.max.y = max(p.y, self.max.y)
        return self

    def is_valid(self) -> bool:
        return self.min is not None and self.max is not None

    # ------------- corners -------------

    def get_center(self, round_: bool = False) -> Point:
        return Point((self.min.x + self.max.x) / 2, (self.min.y + self.max.y) / 2, round_)

    def get_bottom_left(self) -> Point:
        return Point(self.min.x, self.max.y)

    def get_top_right(self) -> Point:
        return Point(self.max.x, self.min.y)

    def get_top_left(self) -> Point:
        return self.min

    def get_bottom_right(self) -> Point:
        return self.max

    def get_size(self) -> Point:
        return self.max.subtract(self.min)

    # ------------- relations -------------

    def contains(self, obj: Union[Bounds, Any]) -> bool:
        """True if obj (a Bounds or a point) lies within the rectangle, edges included."""
        if not self.is_valid():
            return False
        if isinstance(obj, Bounds):
            if not obj.is_valid():
                return False
            lo, hi = obj.min, obj.max
        else:
            lo = hi = to_point(obj)
        return (
            lo.x >= self.min.x
            and hi.x <= self.max.x
            and lo.y >= self.min.y
            and hi.y <= self.max.y
        )

    def intersects(self, bounds: Any) -> bool:
        """True if the two rectangles share at least one point."""
        bounds = to_bounds(bounds)
        if not (self.is_valid() and bounds.is_valid()):
            return False
        x_ok = bounds.max.x >= self.min.x and bounds.min.x <= self.max.x
        y_ok = bounds.max.y >= self.min.y and bounds.min.y <= self.max.y
        return x_ok and y_ok

    def overlaps(self, bounds: Any) -> bool:
        """True if the intersection of the two rectangles has an area."""
        bounds = to_bounds(bounds)
        if not (self.is_valid() and bounds.is_valid()):
            return False
        x_ok = bounds.max.x > self.min.x and bounds.min.x < self.max.x
        y_ok = bounds.max.y > self.min.y and bounds.min.y < self.max.y
        return x_ok and y_ok

    def pad(self, ratio: float) -> Bounds:
        """Return a copy grown (or shrunk, for negative ratio) by ratio of its size on each side."""
        dx = abs(self.min.x - self.max.x) * ratio
        dy = abs(self.min.y - self.max.y) * ratio
        return Bounds(
            Point(self.min.x - dx, self.min.y - dy),
            Point(self.max.x + dx, self.max.y + dy),
        )

    def equals(self, bounds: Any) -> bool:
        bounds = to_bounds(bounds)
        if bounds is None or not (self.is_valid() and bounds.is_valid()):
            return False
        return self.min.equals(bounds.min) and self.max.equals(bounds.max)

    def __repr__(self) -> str:
        if not self.is_valid():
            return "Bounds()"
        return f"Bounds({self.min!r}, {self.max!r})"


def to_bounds(a: Any, b: Any = None) -> Optional[Bounds]:
    """Return a as-is if it is a Bounds or None, otherwise build one from the corners / points."""
    if a is None or isinstance(a, Bounds):
        return a
    return Bounds(a, b)
