#!/usr/bin/env python3
# mapgeom/geometry/poly_util.py
"""
Polygon clipping (Sutherland-Hodgman) against a rectangle.

Polygons need a different algorithm than polylines: the ring is clipped
against each half-plane in turn, every pass consuming the ring produced by
the previous one.
"""

from __future__ import annotations

from typing import List, Sequence

from mapgeom.geometry.bounds import Bounds
from mapgeom.geometry.line_util import BOTTOM, LEFT, RIGHT, TOP, get_bit_code, get_edge_intersection
from mapgeom.geometry.point import Point

__all__ = ["clip_polygon"]

# left, bottom, right, top
_EDGES = (LEFT, BOTTOM, RIGHT, TOP)


def clip_polygon(points: Sequence[Point], bounds: Bounds, round_: bool = False) -> List[Point]:
    """
    Clip the closed ring `points` to bounds.

    Returns a new list; it is empty when the polygon lies entirely outside.
    """
    ring: List[Point] = list(points)
    codes: List[int] = [get_bit_code(p, bounds) for p in ring]

    for edge in _EDGES:
        clipped: List[Point] = []
        clipped_codes: List[int] = []
        n = len(ring)
        j = n - 1
        for i in range(n):
            a, b = ring[i], ring[j]
            a_code, b_code = codes[i], codes[j]

            if not (a_code & edge):
                # b -> a enters the window
                if b_code & edge:
                    p = get_edge_intersection(b, a, edge, bounds, round_)
                    clipped.append(p)
                    clipped_codes.append(get_bit_code(p, bounds))
                clipped.append(a)
                clipped_codes.append(a_code)
            elif not (b_code & edge):
                # b -> a leaves the window
                p = get_edge_intersection(b, a, edge, bounds, round_)
                clipped.append(p)
                clipped_codes.append(get_bit_code(p, bounds))
            j = i

        ring, codes = clipped, clipped_codes

    return ring
