#!/usr/bin/env python3
# mapgeom/geometry/transformation.py
"""
Affine transformation (x, y) -> (scale * (a*x + b), scale * (c*y + d)).

This is how every CRS maps projected units into pixels at a zoom-dependent
scale. The coefficients are not validated; a zero a or c makes untransform
produce infinities.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from mapgeom import util
from mapgeom.geometry.point import Point

__all__ = ["Transformation", "to_transformation"]


class Transformation:
    __slots__ = ("_a", "_b", "_c", "_d")

    def __init__(self, a: float, b: float, c: float, d: float):
        self._a = a
        self._b = b
        self._c = c
        self._d = d

    @property
    def coefficients(self) -> Tuple[float, float, float, float]:
        return self._a, self._b, self._c, self._d

    def transform(self, point: Point, scale: float = 1) -> Point:
        """Return a transformed copy of point, multiplied by scale."""
        return self.transform_in_place(point.clone(), scale)

    def transform_in_place(self, point: Point, scale: float = 1) -> Point:
        point.x = scale * (self._a * point.x + self._b)
        point.y = scale * (self._c * point.y + self._d)
        return point

    def untransform(self, point: Point, scale: float = 1) -> Point:
        """Reverse of transform, divided by scale."""
        return Point(
            util.ieee_div(util.ieee_div(point.x, scale) - self._b, self._a),
            util.ieee_div(util.ieee_div(point.y, scale) - self._d, self._c),
        )

    def transform_array(self, xs: np.ndarray, ys: np.ndarray, scale: float = 1) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorised transform over coordinate arrays."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        return scale * (self._a * xs + self._b), scale * (self._c * ys + self._d)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transformation):
            return NotImplemented
        return self.coefficients == other.coefficients

    def __hash__(self) -> int:
        return hash(self.coefficients)

    def __repr__(self) -> str:
        return "Transformation({}, {}, {}, {})".format(*self.coefficients)


def to_transformation(
    a: Union[float, Sequence[float]],
    b: Optional[float] = None,
    c: Optional[float] = None,
    d: Optional[float] = None,
) -> Transformation:
    """Build a Transformation from four numbers or a 4-item sequence."""
    if b is None:
        a, b, c, d = a
    return Transformation(a, b, c, d)
