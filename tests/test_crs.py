from __future__ import annotations

import math
import random

import numpy as np
import pytest

from mapgeom.geo.crs import (
    CRS,
    EPSG3395,
    EPSG3857,
    EPSG4326,
    EPSG900913,
    Simple,
    available_codes,
    get_crs,
)
from mapgeom.geo.latlng import LatLng
from mapgeom.geo.latlng_bounds import LatLngBounds
from mapgeom.geo.projection import LonLat, Mercator, SphericalMercator
from mapgeom.geometry.point import Point


def test_singletons_are_wired_to_their_projections() -> None:
    assert EPSG3857.projection is SphericalMercator
    assert EPSG900913.projection is SphericalMercator
    assert EPSG3395.projection is Mercator
    assert EPSG4326.projection is LonLat
    assert Simple.projection is LonLat

    scale = 0.5 / (math.pi * 6378137)
    assert EPSG3857.transformation.coefficients == (scale, 0.5, -scale, 0.5)
    assert EPSG4326.transformation.coefficients == (1 / 180, 1, -1 / 180, 0.5)
    assert Simple.transformation.coefficients == (1, 0, -1, 0)


def test_codes() -> None:
    assert EPSG3857.code == "3857"
    assert EPSG900913.code == "900913"
    assert EPSG3395.code == "3395"
    assert EPSG4326.code == "4326"
    assert Simple.code is None


def test_scale_and_zoom() -> None:
    assert EPSG3857.scale(0) == 256
    assert EPSG3857.scale(3) == 2048
    assert EPSG3857.zoom(256) == 0
    assert EPSG3857.zoom(1024) == pytest.approx(2)
    assert EPSG3857.zoom(EPSG3857.scale(7.5)) == pytest.approx(7.5)

    assert Simple.scale(0) == 1
    assert Simple.scale(3) == 8
    assert Simple.zoom(8) == pytest.approx(3)


def test_zoom_of_degenerate_scale() -> None:
    assert EPSG3857.zoom(0) == -math.inf
    assert math.isnan(EPSG3857.zoom(-1))


def test_lat_lng_to_point_and_back() -> None:
    assert EPSG3857.lat_lng_to_point(LatLng(0, 0), 0) == Point(128, 128)
    assert EPSG3857.point_to_lat_lng(Point(128, 128), 0).equals(LatLng(0, 0))

    p = EPSG3857.lat_lng_to_point(LatLng(50.5, 30.5), 5)
    assert EPSG3857.point_to_lat_lng(p, 5).equals(LatLng(50.5, 30.5), 1e-9)

    assert EPSG4326.lat_lng_to_point(LatLng(0, 0), 0) == Point(256, 128)
    assert Simple.lat_lng_to_point(LatLng(10, 20), 1) == Point(40, -20)
    assert Simple.point_to_lat_lng(Point(40, -20), 1) == LatLng(10, 20)


@pytest.mark.parametrize("crs", [EPSG3857, EPSG3395, EPSG4326, Simple])
def test_pixel_round_trip(crs: CRS) -> None:
    for lat, lng in [(-60.0, -120.0), (0.0, 0.0), (33.3, 44.4), (70.0, 179.0)]:
        ll = LatLng(lat, lng)
        back = crs.point_to_lat_lng(crs.lat_lng_to_point(ll, 8), 8)
        assert back.equals(ll, 1e-6)


def test_legacy_code_projects_like_3857() -> None:
    ll = LatLng(-33.9, 151.2)
    assert EPSG900913.lat_lng_to_point(ll, 4) == EPSG3857.lat_lng_to_point(ll, 4)


def test_project_exposes_bare_projection() -> None:
    ll = LatLng(50, 30)
    assert EPSG3857.project(ll) == SphericalMercator.project(ll)
    assert EPSG3395.unproject(EPSG3395.project(ll)).equals(ll, 1e-6)


def test_earth_distance() -> None:
    assert EPSG3857.distance(LatLng(0, 0), LatLng(0, 90)) == pytest.approx(10007543, abs=1)
    assert EPSG4326.distance(LatLng(0, 0), LatLng(0, 90)) == pytest.approx(10007543, abs=1)
    assert EPSG3857.distance(LatLng(10, 10), LatLng(10, 10)) == 0


def test_earth_distance_antipodal() -> None:
    half_circumference = math.pi * 6371000
    assert EPSG3857.distance(LatLng(0, 0), LatLng(0, 180)) == pytest.approx(half_circumference)
    assert EPSG3857.distance(
        LatLng(80.0581, -75.2345), LatLng(-80.0581, 104.7655)
    ) == pytest.approx(half_circumference)

    rng = random.Random(7)
    for _ in range(2000):
        lat = rng.uniform(-90, 90)
        lng = rng.uniform(-180, 180)
        d = EPSG4326.distance(LatLng(lat, lng), LatLng(-lat, lng + 180))
        assert d == pytest.approx(half_circumference)


def test_simple_distance_is_euclidean() -> None:
    assert Simple.distance(LatLng(0, 0), LatLng(3, 4)) == 5


def test_projected_bounds() -> None:
    b = EPSG3857.get_projected_bounds(0)
    assert b.min.x == pytest.approx(0, abs=1e-6)
    assert b.min.y == pytest.approx(0, abs=1e-6)
    assert b.max.x == pytest.approx(256, abs=1e-6)
    assert b.max.y == pytest.approx(256, abs=1e-6)

    b = EPSG4326.get_projected_bounds(1)
    assert (b.min.x, b.min.y) == pytest.approx((0, 0), abs=1e-9)
    assert (b.max.x, b.max.y) == pytest.approx((1024, 512), abs=1e-9)

    assert Simple.get_projected_bounds(3) is None


def test_wrap_lat_lng() -> None:
    assert EPSG3857.wrap_lat_lng(LatLng(0, 190)).lng == -170
    assert EPSG3857.wrap_lat_lng(LatLng(0, 180)).lng == 180
    assert EPSG3857.wrap_lat_lng(LatLng(0, -190)).lng == 170

    wrapped = EPSG3857.wrap_lat_lng(LatLng(100, 0, 12))
    assert wrapped.lat == 100
    assert wrapped.alt == 12

    assert Simple.wrap_lat_lng(LatLng(500, 500)) == LatLng(500, 500)


def test_wrap_lat_lng_bounds() -> None:
    inside = LatLngBounds([[0, 10], [10, 20]])
    assert EPSG3857.wrap_lat_lng_bounds(inside) is inside

    shifted = EPSG3857.wrap_lat_lng_bounds(LatLngBounds([[0, 170], [10, 200]]))
    assert shifted.get_south_west() == LatLng(0, -190)
    assert shifted.get_north_east() == LatLng(10, -160)


def test_lat_lngs_to_points_matches_scalar() -> None:
    coords = np.array([[0.0, 0.0], [50.5, 30.5], [-33.9, 151.2], [89.0, -179.0]])
    for crs in (EPSG3857, EPSG3395, EPSG4326, Simple):
        out = crs.lat_lngs_to_points(coords, 3)
        assert out.shape == (4, 2)
        for (lat, lng), (x, y) in zip(coords, out):
            p = crs.lat_lng_to_point(LatLng(lat, lng), 3)
            assert x == pytest.approx(p.x, rel=1e-12, abs=1e-9)
            assert y == pytest.approx(p.y, rel=1e-12, abs=1e-9)


def test_with_tile_size_leaves_singleton_untouched() -> None:
    big = EPSG3857.with_tile_size(512)
    assert big is not EPSG3857
    assert big.scale(0) == 512
    assert big.lat_lng_to_point(LatLng(0, 0), 0) == Point(256, 256)
    assert EPSG3857.tile_size == 256
    assert EPSG3857.with_tile_size(256) is EPSG3857


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("3857", EPSG3857),
        ("EPSG:3857", EPSG3857),
        ("epsg3395", EPSG3395),
        ("900913", EPSG900913),
        ("4326", EPSG4326),
        ("Simple", Simple),
    ],
)
def test_get_crs(code: str, expected: CRS) -> None:
    assert get_crs(code) is expected


def test_get_crs_unknown_code() -> None:
    assert get_crs("EPSG:27700") is None
    assert set(available_codes()) == {"3857", "900913", "3395", "4326", "simple"}


def test_crs_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        CRS(LonLat, EPSG4326.transformation)
