#!/usr/bin/env python3
# mapgeom/geo/projection.py
"""
Map projections: geographic LatLng <-> planar Point in the projection's units.

- SphericalMercator: Web Mercator on a sphere (EPSG:3857), meters.
- Mercator: Mercator on the WGS84 ellipsoid (EPSG:3395), meters; the inverse
  is iterative.
- LonLat: plate carree, x = lng and y = lat, degrees (EPSG:4326, Simple).

Projections are stateless; the module-level instances are shared by every CRS.
Each one also offers project_array() for projecting numpy coordinate arrays
in a single pass.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from mapgeom import util
from mapgeom.geo.latlng import LatLng
from mapgeom.geometry.bounds import Bounds
from mapgeom.geometry.point import Point

__all__ = [
    "Projection",
    "SphericalMercatorProjection",
    "MercatorProjection",
    "LonLatProjection",
    "SphericalMercator",
    "Mercator",
    "LonLat",
    "EARTH_RADIUS",
    "EARTH_RADIUS_MINOR",
    "MAX_LATITUDE",
]

log = logging.getLogger(__name__)

# WGS84 semi-major / semi-minor axes, meters
EARTH_RADIUS = 6378137.0
EARTH_RADIUS_MINOR = 6356752.314245179

# Latitude at which the spherical Mercator square ends
MAX_LATITUDE = 85.0511287798

_D2R = math.pi / 180
_R2D = 180 / math.pi


class Projection(ABC):
    """Interface shared by all projections."""

    bounds: Bounds

    @abstractmethod
    def project(self, latlng: LatLng) -> Point:
        ...

    @abstractmethod
    def unproject(self, point: Point) -> LatLng:
        ...

    @abstractmethod
    def project_array(self, lats: np.ndarray, lngs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SphericalMercatorProjection(Projection):
    R = EARTH_RADIUS
    MAX_LATITUDE = MAX_LATITUDE

    def __init__(self):
        d = self.R * math.pi
        self.bounds = Bounds([-d, -d], [d, d])

    def project(self, latlng: LatLng) -> Point:
        lat = max(min(self.MAX_LATITUDE, latlng.lat), -self.MAX_LATITUDE)
        sin = math.sin(lat * _D2R)
        return Point(
            self.R * latlng.lng * _D2R,
            self.R * math.log((1 + sin) / (1 - sin)) / 2,
        )

    def unproject(self, point: Point) -> LatLng:
        return LatLng(
            (2 * math.atan(util.ieee_exp(point.y / self.R)) - math.pi / 2) * _R2D,
            point.x * _R2D / self.R,
        )

    def project_array(self, lats: np.ndarray, lngs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        lats = np.clip(np.asarray(lats, dtype=np.float64), -self.MAX_LATITUDE, self.MAX_LATITUDE)
        lngs = np.asarray(lngs, dtype=np.float64)
        sin = np.sin(lats * _D2R)
        return self.R * lngs * _D2R, self.R * np.log((1 + sin) / (1 - sin)) / 2


class MercatorProjection(Projection):
    """
    Elliptical Mercator. Forward is closed form; the inverse refines the
    latitude by fixed-point iteration, up to MAX_ITERATIONS steps or until a
    step moves less than TOLERANCE radians. Running out of iterations is not
    an error: the last estimate is returned.
    """

    R = EARTH_RADIUS
    R_MINOR = EARTH_RADIUS_MINOR
    MAX_ITERATIONS = 15
    TOLERANCE = 1e-7

    def __init__(self):
        tmp = self.R_MINOR / self.R
        self.e = math.sqrt(1 - tmp * tmp)
        self.bounds = Bounds(
            [-20037508.34279, -15496570.73972],
            [20037508.34279, 18764656.23138],
        )

    def project(self, latlng: LatLng) -> Point:
        e = self.e
        y = latlng.lat * _D2R
        con = e * math.sin(y)
        ts = math.tan(math.pi / 4 - y / 2) / ((1 - con) / (1 + con)) ** (e / 2)
        y = -self.R * math.log(max(ts, 1e-10))
        return Point(latlng.lng * _D2R * self.R, y)

    def unproject(self, point: Point) -> LatLng:
        e = self.e
        ts = util.ieee_exp(-point.y / self.R)
        phi = math.pi / 2 - 2 * math.atan(ts)

        dphi = 0.1
        i = 0
        while i < self.MAX_ITERATIONS and abs(dphi) > self.TOLERANCE:
            con = e * math.sin(phi)
            con = ((1 - con) / (1 + con)) ** (e / 2)
            dphi = math.pi / 2 - 2 * math.atan(ts * con) - phi
            phi += dphi
            i += 1

        if abs(dphi) > self.TOLERANCE:
            log.debug("Mercator inverse did not converge for y=%r (last step %g)", point.y, dphi)

        return LatLng(phi * _R2D, point.x * _R2D / self.R)

    def project_array(self, lats: np.ndarray, lngs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        e = self.e
        y = np.asarray(lats, dtype=np.float64) * _D2R
        lngs = np.asarray(lngs, dtype=np.float64)
        con = e * np.sin(y)
        ts = np.tan(np.pi / 4 - y / 2) / np.power((1 - con) / (1 + con), e / 2)
        return lngs * _D2R * self.R, -self.R * np.log(np.maximum(ts, 1e-10))


class LonLatProjection(Projection):
    """Plate carree: longitude is x, latitude is y, both in degrees."""

    def __init__(self):
        self.bounds = Bounds([-180, -90], [180, 90])

    def project(self, latlng: LatLng) -> Point:
        return Point(latlng.lng, latlng.lat)

    def unproject(self, point: Point) -> LatLng:
        return LatLng(point.y, point.x)

    def project_array(self, lats: np.ndarray, lngs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        return np.array(lngs, dtype=np.float64), np.array(lats, dtype=np.float64)


SphericalMercator = SphericalMercatorProjection()
Mercator = MercatorProjection()
LonLat = LonLatProjection()
