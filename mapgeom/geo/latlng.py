#!/usr/bin/env python3
# mapgeom/geo/latlng.py
"""
Geographical point: latitude / longitude in degrees, optional altitude in meters.

No range clamping happens here; wrapping into a CRS's range is done by
CRS.wrap_lat_lng.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any, Optional

from mapgeom import util
from mapgeom.errors import InvalidCoordinate

__all__ = ["LatLng", "to_lat_lng", "DEFAULT_MAX_MARGIN"]

DEFAULT_MAX_MARGIN = 1.0e-9


def _coerce(v: Any) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return math.nan


class LatLng:
    __slots__ = ("lat", "lng", "alt")

    def __init__(self, lat: float, lng: float, alt: Optional[float] = None):
        la = _coerce(lat)
        ln = _coerce(lng)
        if not (math.isfinite(la) and math.isfinite(ln)):
            raise InvalidCoordinate(f"Invalid LatLng object: ({lat!r}, {lng!r})")
        al = _coerce(alt) if alt is not None else None
        if al is not None and not math.isfinite(al):
            raise InvalidCoordinate(f"Invalid LatLng altitude: {alt!r}")
        self.lat = la
        self.lng = ln
        self.alt: Optional[float] = al

    def clone(self) -> LatLng:
        return LatLng(self.lat, self.lng, self.alt)

    def equals(self, other: Any, max_margin: Optional[float] = None) -> bool:
        """
        True if other is at the same position within max_margin degrees
        (on the larger of the two axis differences).
        """
        if other is None:
            return False
        other = to_lat_lng(other)
        if other is None:
            return False
        margin = max(abs(self.lat - other.lat), abs(self.lng - other.lng))
        return margin <= (DEFAULT_MAX_MARGIN if max_margin is None else max_margin)

    def to_string(self, precision: int = 6) -> str:
        return f"LatLng({util.num_to_str(self.lat, precision)}, {util.num_to_str(self.lng, precision)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LatLng):
            return NotImplemented
        return self.equals(other)

    # Equality is approximate.
    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self.alt is None:
            return f"LatLng({self.lat!r}, {self.lng!r})"
        return f"LatLng({self.lat!r}, {self.lng!r}, {self.alt!r})"


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def to_lat_lng(a: Any, b: Optional[float] = None, c: Optional[float] = None) -> Optional[LatLng]:
    """
    Coerce loose input into a LatLng.

    Accepts a LatLng (returned unchanged), a [lat, lng] or [lat, lng, alt]
    sequence, a mapping with 'lat' and 'lng' (or 'lon') keys, or separate
    numbers. Returns None for None and for unrecognised shapes. Malformed
    numbers inside a recognised shape still raise InvalidCoordinate.
    """
    if isinstance(a, LatLng):
        return a
    if a is None:
        return None
    if isinstance(a, Sequence) and not isinstance(a, str):
        if not a or not _is_number(a[0]):
            return None
        if len(a) == 3:
            return LatLng(a[0], a[1], a[2])
        if len(a) == 2:
            return LatLng(a[0], a[1])
        return None
    if isinstance(a, Mapping):
        if "lat" not in a:
            return None
        lng = a["lng"] if "lng" in a else a.get("lon")
        return LatLng(a["lat"], lng, a.get("alt"))
    if b is None:
        return None
    if _is_number(a):
        return LatLng(a, b, c)
    return None
