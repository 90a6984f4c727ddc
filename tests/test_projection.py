from __future__ import annotations

import math

import numpy as np
import pytest

from mapgeom.geo.latlng import LatLng
from mapgeom.geo.projection import (
    MAX_LATITUDE,
    LonLat,
    Mercator,
    Projection,
    SphericalMercator,
)
from mapgeom.geometry.point import Point

ROUND_TRIP_CASES = [
    (SphericalMercator, [-85.0, -60.0, -12.5, 0.0, 33.3, 70.0, 85.0]),
    (Mercator, [-80.0, -45.0, 0.0, 30.0, 60.0, 84.0]),
    (LonLat, [-90.0, -45.0, 0.0, 45.0, 90.0]),
]


@pytest.mark.parametrize(("projection", "lats"), ROUND_TRIP_CASES)
def test_unproject_inverts_project(projection: Projection, lats: list) -> None:
    for lat in lats:
        for lng in (-179.5, -30.0, 0.0, 12.345, 180.0):
            ll = LatLng(lat, lng)
            back = projection.unproject(projection.project(ll))
            assert back.equals(ll, max_margin=1e-6), (projection, ll, back)


def test_spherical_mercator_origin_and_extent() -> None:
    assert SphericalMercator.project(LatLng(0, 0)) == Point(0, 0)

    p = SphericalMercator.project(LatLng(MAX_LATITUDE, 180))
    assert p.x == pytest.approx(20037508.34279, abs=1e-3)
    assert p.y == pytest.approx(20037508.34279, abs=1e-3)

    b = SphericalMercator.bounds
    assert b.min.x == pytest.approx(-20037508.34279, abs=1e-3)
    assert b.max.y == pytest.approx(20037508.34279, abs=1e-3)


def test_spherical_mercator_clamps_latitude() -> None:
    assert SphericalMercator.project(LatLng(90, 0)) == SphericalMercator.project(LatLng(MAX_LATITUDE, 0))
    assert SphericalMercator.project(LatLng(-120, 0)) == SphericalMercator.project(LatLng(-MAX_LATITUDE, 0))


def test_spherical_mercator_unproject_saturates() -> None:
    ll = SphericalMercator.unproject(Point(0, 1e12))
    assert ll.lat == pytest.approx(90)


def test_mercator_known_values() -> None:
    p = Mercator.project(LatLng(50, 30))
    assert p.x == pytest.approx(3339584.7238, abs=1e-3)
    assert p.y == pytest.approx(6413524.5917, abs=10)
    assert Mercator.project(LatLng(0, 0)).y == pytest.approx(0, abs=1e-6)


def test_mercator_inverse_handles_extreme_y() -> None:
    north = Mercator.unproject(Point(0, 1e12))
    south = Mercator.unproject(Point(0, -1e12))
    assert north.lat == pytest.approx(90)
    assert south.lat == pytest.approx(-90)


def test_lon_lat_is_identity_like() -> None:
    assert LonLat.project(LatLng(10, 20)) == Point(20, 10)
    assert LonLat.unproject(Point(20, 10)) == LatLng(10, 20)
    assert LonLat.bounds.min == Point(-180, -90)
    assert LonLat.bounds.max == Point(180, 90)


@pytest.mark.parametrize("projection", [SphericalMercator, Mercator, LonLat])
def test_project_array_matches_scalar(projection: Projection) -> None:
    lats = np.array([-70.0, -10.0, 0.0, 45.5, 84.0])
    lngs = np.array([-170.0, 5.0, 0.0, 100.25, 179.0])
    xs, ys = projection.project_array(lats, lngs)
    for lat, lng, x, y in zip(lats, lngs, xs, ys):
        p = projection.project(LatLng(lat, lng))
        assert x == pytest.approx(p.x, rel=1e-12, abs=1e-9)
        assert y == pytest.approx(p.y, rel=1e-12, abs=1e-9)


def test_projections_are_abstract() -> None:
    with pytest.raises(TypeError):
        Projection()
    assert math.isclose(Mercator.e, 0.0818191908426, rel_tol=1e-10)
