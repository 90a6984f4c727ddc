#!/usr/bin/env python3
# mapgeom/geo/crs.py
"""
Coordinate reference systems.

A CRS pairs a Projection (LatLng -> projected units) with a Transformation
(projected units -> pixels at scale 1), a zoom <-> scale law and a distance
metric. The concrete systems are module-level singletons shared by every
caller and never mutated:

    EPSG3857    spherical Mercator (the web map default)
    EPSG900913  same as EPSG3857 under its legacy code
    EPSG3395    ellipsoidal Mercator
    EPSG4326    plate carree
    Simple      flat, unbounded plane for non-geographic maps

Usage:
    from mapgeom.geo.crs import EPSG3857, get_crs
    px = EPSG3857.lat_lng_to_point(LatLng(50.5, 30.5), zoom=4)
    crs = get_crs("EPSG:4326")
"""

from __future__ import annotations

import copy
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from mapgeom import util
from mapgeom.geo.latlng import LatLng
from mapgeom.geo.latlng_bounds import LatLngBounds
from mapgeom.geo.projection import LonLat, Mercator, Projection, SphericalMercator
from mapgeom.geometry.bounds import Bounds
from mapgeom.geometry.point import Point
from mapgeom.geometry.transformation import Transformation

__all__ = [
    "CRS",
    "Earth",
    "EPSG3857",
    "EPSG900913",
    "EPSG3395",
    "EPSG4326",
    "Simple",
    "get_crs",
    "available_codes",
    "crs_from_config",
]

log = logging.getLogger(__name__)

DEFAULT_TILE_SIZE = 256


class CRS(ABC):
    code: Optional[str] = None
    wrap_lng: Optional[Tuple[float, float]] = None
    wrap_lat: Optional[Tuple[float, float]] = None
    infinite: bool = False

    def __init__(self, projection: Projection, transformation: Transformation, tile_size: int = DEFAULT_TILE_SIZE):
        self.projection = projection
        self.transformation = transformation
        self.tile_size = tile_size

    @abstractmethod
    def distance(self, latlng1: LatLng, latlng2: LatLng) -> float:
        """Distance between two geographical points."""

    # ------------- pixel space -------------

    def lat_lng_to_point(self, latlng: LatLng, zoom: float) -> Point:
        """Project geographical coordinates to pixel coordinates at zoom."""
        projected = self.projection.project(latlng)
        return self.transformation.transform_in_place(projected, self.scale(zoom))

    def point_to_lat_lng(self, point: Point, zoom: float) -> LatLng:
        """Inverse of lat_lng_to_point."""
        untransformed = self.transformation.untransform(point, self.scale(zoom))
        return self.projection.unproject(untransformed)

    def lat_lngs_to_points(self, coords: np.ndarray, zoom: float) -> np.ndarray:
        """
        Vectorised lat_lng_to_point.

        coords is an (N, 2) array-like of [lat, lng] rows; returns an (N, 2)
        float64 array of [x, y] pixel rows.
        """
        arr = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        xs, ys = self.projection.project_array(arr[:, 0], arr[:, 1])
        xs, ys = self.transformation.transform_array(xs, ys, self.scale(zoom))
        return np.column_stack((xs, ys))

    # ------------- projected units -------------

    def project(self, latlng: LatLng) -> Point:
        """Projected coordinates in the CRS's units (e.g. meters for EPSG:3857)."""
        return self.projection.project(latlng)

    def unproject(self, point: Point) -> LatLng:
        return self.projection.unproject(point)

    # ------------- zoom -------------

    def scale(self, zoom: float) -> float:
        """Pixels per projected unit at scale 1, e.g. 256 * 2^zoom."""
        return self.tile_size * 2.0 ** zoom

    def zoom(self, scale: float) -> float:
        """Inverse of scale()."""
        return util.ieee_log(scale / self.tile_size) / math.log(2)

    def get_projected_bounds(self, zoom: float) -> Optional[Bounds]:
        """Projection bounds in pixels at zoom; None for infinite systems."""
        if self.infinite:
            return None
        b = self.projection.bounds
        s = self.scale(zoom)
        return Bounds(self.transformation.transform(b.min, s), self.transformation.transform(b.max, s))

    # ------------- wrapping -------------

    def wrap_lat_lng(self, latlng: LatLng) -> LatLng:
        """Fold lat / lng into wrap_lat / wrap_lng where those are set."""
        lng = util.wrap_num(latlng.lng, self.wrap_lng, True) if self.wrap_lng else latlng.lng
        lat = util.wrap_num(latlng.lat, self.wrap_lat, True) if self.wrap_lat else latlng.lat
        return LatLng(lat, lng, latlng.alt)

    def wrap_lat_lng_bounds(self, bounds: LatLngBounds) -> LatLngBounds:
        """
        Shift bounds so its center lies within the wrap range, keeping its
        size. Returns bounds itself when no shift is needed.
        """
        center = bounds.get_center()
        new_center = self.wrap_lat_lng(center)
        lat_shift = center.lat - new_center.lat
        lng_shift = center.lng - new_center.lng

        if lat_shift == 0 and lng_shift == 0:
            return bounds

        sw = bounds.get_south_west()
        ne = bounds.get_north_east()
        return LatLngBounds(
            LatLng(sw.lat - lat_shift, sw.lng - lng_shift),
            LatLng(ne.lat - lat_shift, ne.lng - lng_shift),
        )

    # ------------- variants -------------

    def with_tile_size(self, tile_size: int) -> CRS:
        """Copy of this CRS using a different tile size; self is left unchanged."""
        if tile_size == self.tile_size:
            return self
        clone = copy.copy(self)
        clone.tile_size = tile_size
        return clone

    def __repr__(self) -> str:
        return f"<{type(self).__name__} code={self.code!r} tile_size={self.tile_size}>"


class Earth(CRS):
    """Base for geographic systems: longitude wraps and distance is great-circle."""

    wrap_lng = (-180.0, 180.0)

    # Mean Earth radius (IUGG), meters
    R = 6371000.0

    def distance(self, latlng1: LatLng, latlng2: LatLng) -> float:
        """Haversine distance in meters."""
        lat1 = latlng1.lat * math.pi / 180
        lat2 = latlng2.lat * math.pi / 180
        sin_dlat = math.sin((latlng2.lat - latlng1.lat) * math.pi / 360)
        sin_dlng = math.sin((latlng2.lng - latlng1.lng) * math.pi / 360)
        # Rounding can push a just past 1 for antipodal points.
        a = min(sin_dlat * sin_dlat + math.cos(lat1) * math.cos(lat2) * sin_dlng * sin_dlng, 1.0)
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return self.R * c


def _mercator_transformation(radius: float) -> Transformation:
    # Maps [-pi*R, pi*R] onto [0, 1], y pointing down.
    scale = 0.5 / (math.pi * radius)
    return Transformation(scale, 0.5, -scale, 0.5)


class EPSG3857CRS(Earth):
    code = "3857"

    def __init__(self):
        super().__init__(SphericalMercator, _mercator_transformation(SphericalMercator.R))


class EPSG900913CRS(EPSG3857CRS):
    code = "900913"


class EPSG3395CRS(Earth):
    code = "3395"

    def __init__(self):
        super().__init__(Mercator, _mercator_transformation(Mercator.R))


class EPSG4326CRS(Earth):
    code = "4326"

    def __init__(self):
        super().__init__(LonLat, Transformation(1 / 180, 1, -1 / 180, 0.5))


class SimpleCRS(CRS):
    """
    Flat plane: lng is x and lat is y, inverted so y grows downwards.
    Unbounded; at zoom 0 one unit is one pixel. distance() is Euclidean.
    """

    infinite = True

    def __init__(self):
        super().__init__(LonLat, Transformation(1, 0, -1, 0), tile_size=1)

    def distance(self, latlng1: LatLng, latlng2: LatLng) -> float:
        dx = latlng2.lng - latlng1.lng
        dy = latlng2.lat - latlng1.lat
        return math.sqrt(dx * dx + dy * dy)


EPSG3857 = EPSG3857CRS()
EPSG900913 = EPSG900913CRS()
EPSG3395 = EPSG3395CRS()
EPSG4326 = EPSG4326CRS()
Simple = SimpleCRS()

_REGISTRY: Dict[str, CRS] = {
    "3857": EPSG3857,
    "900913": EPSG900913,
    "3395": EPSG3395,
    "4326": EPSG4326,
    "simple": Simple,
}


def available_codes() -> Tuple[str, ...]:
    return tuple(_REGISTRY)


def get_crs(code: str) -> Optional[CRS]:
    """
    Look up a CRS singleton by code: "3857", "EPSG:3857", "epsg3857",
    "900913", "3395", "4326" or "simple". Unknown codes return None.
    """
    key = str(code).strip().lower()
    if key.startswith("epsg"):
        key = key[4:].lstrip(":")
    crs = _REGISTRY.get(key)
    if crs is None:
        log.debug("Unknown CRS code %r", code)
    return crs


def crs_from_config(cfg: Mapping[str, Any]) -> CRS:
    """
    Resolve the configured default CRS (cfg["crs"]["default"]) and apply the
    configured tile size. Infinite systems keep their own tile size.
    """
    section = cfg["crs"]
    crs = get_crs(section.get("default", "3857")) or EPSG3857
    tile_size = int(section.get("tile_size", DEFAULT_TILE_SIZE))
    if crs.infinite:
        return crs
    return crs.with_tile_size(tile_size)
