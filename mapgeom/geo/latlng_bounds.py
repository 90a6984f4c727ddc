#!/usr/bin/env python3
# mapgeom/geo/latlng_bounds.py
"""
Rectangular geographical area, stored as south-west / north-east corners.

The antimeridian is not handled: an area crossing it must be given with
corners outside the [-180, 180] longitude range.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

from mapgeom.geo.latlng import LatLng, to_lat_lng

__all__ = ["LatLngBounds", "to_lat_lng_bounds"]


class LatLngBounds:
    __slots__ = ("_south_west", "_north_east")

    def __init__(self, corner1: Any = None, corner2: Any = None):
        self._south_west: Optional[LatLng] = None
        self._north_east: Optional[LatLng] = None
        if corner1 is None:
            return
        if corner2 is not None:
            latlngs = [corner1, corner2]
        else:
            single = isinstance(corner1, LatLngBounds) or to_lat_lng(corner1) is not None
            latlngs = [corner1] if single else corner1
        for ll in latlngs:
            self.extend(ll)

    @property
    def south_west(self) -> Optional[LatLng]:
        return self._south_west

    @property
    def north_east(self) -> Optional[LatLng]:
        return self._north_east

    def extend(self, obj: Any) -> LatLngBounds:
        """Extend to contain a point or another bounds. Loose literals are coerced first."""
        if isinstance(obj, LatLng):
            sw2 = ne2 = obj
        elif isinstance(obj, LatLngBounds):
            sw2, ne2 = obj._south_west, obj._north_east
            if sw2 is None or ne2 is None:
                return self
        else:
            if not obj:
                return self
            coerced = to_lat_lng(obj)
            if coerced is None:
                if isinstance(obj, (str, bytes)) or not isinstance(obj, Iterable):
                    return self
                coerced = to_lat_lng_bounds(obj)
            return self.extend(coerced)

        sw, ne = self._south_west, self._north_east
        if sw is None or ne is None:
            self._south_west = LatLng(sw2.lat, sw2.lng)
            self._north_east = LatLng(ne2.lat, ne2.lng)
        else:
            self._south_west = LatLng(min(sw2.lat, sw.lat), min(sw2.lng, sw.lng))
            self._north_east = LatLng(max(ne2.lat, ne.lat), max(ne2.lng, ne.lng))
        return self

    def is_valid(self) -> bool:
        return self._south_west is not None and self._north_east is not None

    def pad(self, buffer_ratio: float) -> LatLngBounds:
        """
        Return bounds grown by buffer_ratio of the current height / width in
        each direction (0.5 grows by 50%). Negative ratios shrink.
        """
        sw, ne = self._south_west, self._north_east
        height_buffer = abs(sw.lat - ne.lat) * buffer_ratio
        width_buffer = abs(sw.lng - ne.lng) * buffer_ratio
        return LatLngBounds(
            LatLng(sw.lat - height_buffer, sw.lng - width_buffer),
            LatLng(ne.lat + height_buffer, ne.lng + width_buffer),
        )

    def get_center(self) -> LatLng:
        return LatLng(
            (self._south_west.lat + self._north_east.lat) / 2,
            (self._south_west.lng + self._north_east.lng) / 2,
        )

    def get_west(self) -> float:
        return self._south_west.lng

    def get_south(self) -> float:
        return self._south_west.lat

    def get_east(self) -> float:
        return self._north_east.lng

    def get_north(self) -> float:
        return self._north_east.lat

    def get_south_west(self) -> LatLng:
        return self._south_west

    def get_north_east(self) -> LatLng:
        return self._north_east

    def get_north_west(self) -> LatLng:
        return LatLng(self.get_north(), self.get_west())

    def get_south_east(self) -> LatLng:
        return LatLng(self.get_south(), self.get_east())

    def __repr__(self) -> str:
        if not self.is_valid():
            return "LatLngBounds()"
        return f"LatLngBounds({self._south_west!r}, {self._north_east!r})"


def to_lat_lng_bounds(a: Any, b: Any = None) -> LatLngBounds:
    if isinstance(a, LatLngBounds):
        return a
    return LatLngBounds(a, b)
