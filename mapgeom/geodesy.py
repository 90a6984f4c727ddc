#!/usr/bin/env python3
# mapgeom/geodesy.py
"""
Geodesy helpers on top of the CRS layer.
Handles conversions between latitude/longitude and XYZ tile indices for any
bounded CRS (Web Mercator by default).
"""

from typing import Optional, Tuple

from mapgeom.geo.crs import CRS, EPSG3857
from mapgeom.geo.latlng import LatLng
from mapgeom.geo.latlng_bounds import LatLngBounds
from mapgeom.geo.projection import MAX_LATITUDE
from mapgeom.geometry.point import Point

__all__ = [
    "lat_lng_to_tile_xy",
    "tile_xy_to_lat_lng",
    "clamp_lat",
    "tile_bounds",
]


def clamp_lat(lat: float) -> float:
    """Clamp latitude to Web Mercator valid range."""
    return max(min(lat, MAX_LATITUDE), -MAX_LATITUDE)


def lat_lng_to_tile_xy(latlng: LatLng, zoom: int, crs: Optional[CRS] = None) -> Tuple[float, float]:
    """
    Convert a LatLng to fractional tile coordinates at a given zoom.
    Returns (x, y) tile coordinate floats; int() of each gives the tile index.
    """
    crs = crs or EPSG3857
    p = crs.lat_lng_to_point(latlng, zoom)
    return p.x / crs.tile_size, p.y / crs.tile_size


def tile_xy_to_lat_lng(x: float, y: float, zoom: int, crs: Optional[CRS] = None) -> LatLng:
    """
    Convert tile coordinates back to a LatLng.
    Integral (x, y) give the tile's north-west corner.
    """
    crs = crs or EPSG3857
    return crs.point_to_lat_lng(Point(x * crs.tile_size, y * crs.tile_size), zoom)


def tile_bounds(x: int, y: int, zoom: int, crs: Optional[CRS] = None) -> LatLngBounds:
    """
    Return the geographical bounds of a tile.
    """
    sw = tile_xy_to_lat_lng(x, y + 1, zoom, crs)
    ne = tile_xy_to_lat_lng(x + 1, y, zoom, crs)
    return LatLngBounds(sw, ne)
