#!/usr/bin/env python3
# mapgeom/errors.py
"""Exceptions raised by mapgeom."""


class MapGeomError(Exception):
    """Base exception for geometry kernel failures."""


class InvalidCoordinate(MapGeomError, ValueError):
    """Raised when a LatLng is built from a non-finite latitude or longitude."""
