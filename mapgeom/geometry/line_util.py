#!/usr/bin/env python3
# mapgeom/geometry/line_util.py
"""
Polyline processing used right before drawing.

- closest point / distance from a point to a segment
- simplify(): radial vertex reduction followed by Douglas-Peucker
- Cohen-Sutherland segment clipping (clip_segment, SegmentClipper)
- clip_polyline(): split a polyline into its visible parts

Outcodes: 1 = left of bounds, 2 = right, 4 = below (y < min.y), 8 = above (y > max.y).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple

from mapgeom.geometry.bounds import Bounds
from mapgeom.geometry.point import Point

__all__ = [
    "simplify",
    "closest_point_on_segment",
    "sq_point_to_segment_distance",
    "point_to_segment_distance",
    "get_bit_code",
    "get_edge_intersection",
    "clip_segment",
    "SegmentClipper",
    "clip_polyline",
    "is_flat",
]

LEFT = 1
RIGHT = 2
BOTTOM = 4
TOP = 8

Segment = Tuple[Point, Point]


# -------------------------
# Point / segment distance
# -------------------------

def _sq_dist(p1: Point, p2: Point) -> float:
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    return dx * dx + dy * dy


def _closest_xy(p: Point, p1: Point, p2: Point) -> Tuple[float, float]:
    x, y = p1.x, p1.y
    dx = p2.x - x
    dy = p2.y - y
    dot = dx * dx + dy * dy

    if dot > 0:
        t = ((p.x - x) * dx + (p.y - y) * dy) / dot
        if t > 1:
            x, y = p2.x, p2.y
        elif t > 0:
            x += dx * t
            y += dy * t
    return x, y


def closest_point_on_segment(p: Point, p1: Point, p2: Point) -> Point:
    """Closest point to p on the segment p1-p2."""
    return Point(*_closest_xy(p, p1, p2))


def sq_point_to_segment_distance(p: Point, p1: Point, p2: Point) -> float:
    """Squared distance from p to the segment p1-p2."""
    x, y = _closest_xy(p, p1, p2)
    dx = p.x - x
    dy = p.y - y
    return dx * dx + dy * dy


def point_to_segment_distance(p: Point, p1: Point, p2: Point) -> float:
    return math.sqrt(sq_point_to_segment_distance(p, p1, p2))


# -------------------------
# Simplification
# -------------------------

def _reduce_points(points: Sequence[Point], sq_tolerance: float) -> List[Point]:
    # Drop points closer than the tolerance to the last kept one.
    reduced = [points[0]]
    prev = 0
    n = len(points)
    for i in range(1, n):
        if _sq_dist(points[i], points[prev]) > sq_tolerance:
            reduced.append(points[i])
            prev = i
    if prev < n - 1:
        reduced.append(points[n - 1])
    return reduced


def _simplify_dp(points: Sequence[Point], sq_tolerance: float) -> List[Point]:
    n = len(points)
    markers = bytearray(n)
    markers[0] = markers[n - 1] = 1

    # Iterative, tracks can have more points than the recursion limit.
    stack = [(0, n - 1)]
    while stack:
        first, last = stack.pop()
        max_sq_dist = 0.0
        index = None
        for i in range(first + 1, last):
            d = sq_point_to_segment_distance(points[i], points[first], points[last])
            if d > max_sq_dist:
                index = i
                max_sq_dist = d

        if index is not None and max_sq_dist > sq_tolerance:
            markers[index] = 1
            stack.append((first, index))
            stack.append((index, last))

    return [p for p, keep in zip(points, markers) if keep]


def simplify(points: Sequence[Point], tolerance: float) -> List[Point]:
    """
    Reduce the number of points in a polyline while keeping its shape.

    Vertex reduction drops points within tolerance of the previously kept
    point, then Douglas-Peucker drops points within tolerance of the chord.
    The first and last points always survive. A falsy tolerance or an empty
    input returns a plain copy.
    """
    if not tolerance or not points:
        return list(points)

    sq_tolerance = tolerance * tolerance
    reduced = _reduce_points(points, sq_tolerance)
    return _simplify_dp(reduced, sq_tolerance)


# -------------------------
# Clipping
# -------------------------

def get_bit_code(p: Point, bounds: Bounds) -> int:
    code = 0
    if p.x < bounds.min.x:
        code |= LEFT
    elif p.x > bounds.max.x:
        code |= RIGHT

    if p.y < bounds.min.y:
        code |= BOTTOM
    elif p.y > bounds.max.y:
        code |= TOP
    return code


def get_edge_intersection(a: Point, b: Point, code: int, bounds: Bounds, round_: bool = False) -> Point:
    """
    Intersection of segment a-b with the single boundary line picked from code,
    checked in the order top, bottom, right, left.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    lo = bounds.min
    hi = bounds.max
    x = y = 0.0

    if code & TOP:
        x = a.x + dx * (hi.y - a.y) / dy
        y = hi.y
    elif code & BOTTOM:
        x = a.x + dx * (lo.y - a.y) / dy
        y = lo.y
    elif code & RIGHT:
        x = hi.x
        y = a.y + dy * (hi.x - a.x) / dx
    elif code & LEFT:
        x = lo.x
        y = a.y + dy * (lo.x - a.x) / dx

    return Point(x, y, round_)


def _clip(a: Point, b: Point, code_a: int, code_b: int, bounds: Bounds, round_: bool) -> Optional[Segment]:
    start, end = a, b
    while code_a | code_b:
        if code_a & code_b:
            return None

        code_out = code_a or code_b
        # Outcodes come from exact intersections; a rounded point may sit
        # outside bounds with fractional edges.
        p = get_edge_intersection(a, b, code_out, bounds)
        new_code = get_bit_code(p, bounds)

        if code_out == code_a:
            a, code_a = p, new_code
        else:
            b, code_b = p, new_code

    if round_:
        if a is not start:
            a.round_in_place()
        if b is not end:
            b.round_in_place()
    return a, b


def clip_segment(a: Point, b: Point, bounds: Bounds, round_: bool = False) -> Optional[Segment]:
    """
    Clip segment a-b to bounds (Cohen-Sutherland).

    Returns the visible (a, b) pair, with endpoints replaced by boundary
    intersections where they were outside, or None if nothing is visible.
    The input points are never modified.
    """
    return _clip(a, b, get_bit_code(a, bounds), get_bit_code(b, bounds), bounds, round_)


class SegmentClipper:
    """
    Clips the consecutive segments of one polyline against fixed bounds.

    The outcode of each segment's end point is remembered so that the next
    segment, which starts at that point, can skip recomputing it
    (use_last_code=True). One clipper walks one polyline at a time; call
    reset() or pass use_last_code=False when starting a new one.
    """

    def __init__(self, bounds: Bounds, round_: bool = False):
        self.bounds = bounds
        self.round_ = round_
        self._last_code: Optional[int] = None

    @property
    def last_code(self) -> Optional[int]:
        return self._last_code

    def reset(self) -> None:
        self._last_code = None

    def clip(self, a: Point, b: Point, use_last_code: bool = False) -> Optional[Segment]:
        if use_last_code:
            if self._last_code is None:
                raise ValueError("use_last_code requires a previous clip() call")
            code_a = self._last_code
        else:
            code_a = get_bit_code(a, self.bounds)
        code_b = get_bit_code(b, self.bounds)
        self._last_code = code_b
        return _clip(a, b, code_a, code_b, self.bounds, self.round_)


def clip_polyline(points: Sequence[Point], bounds: Bounds, round_: bool = False) -> List[List[Point]]:
    """
    Clip a polyline to bounds, returning its visible parts.

    A new part starts whenever the line leaves the bounds and comes back.
    """
    clipper = SegmentClipper(bounds, round_)
    parts: List[List[Point]] = []
    current: List[Point] = []
    n = len(points)

    for i in range(n - 1):
        segment = clipper.clip(points[i], points[i + 1], use_last_code=i > 0)
        if segment is None:
            continue
        current.append(segment[0])
        # Segment leaves the screen or this is the last one: close the part.
        if segment[1] is not points[i + 1] or i == n - 2:
            current.append(segment[1])
            parts.append(current)
            current = []
    return parts


def is_flat(latlngs: Sequence[Any]) -> bool:
    """True if latlngs is a flat list of coordinates rather than a list of rings."""
    if not latlngs:
        return True
    first = latlngs[0]
    if not isinstance(first, (list, tuple)):
        return True
    if not first:
        return False
    return not isinstance(first[0], (list, tuple, Mapping)) and not hasattr(first[0], "lat")
