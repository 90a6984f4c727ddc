from __future__ import annotations

from mapgeom.geo.latlng import LatLng
from mapgeom.geo.latlng_bounds import LatLngBounds, to_lat_lng_bounds


def test_constructs_from_corners() -> None:
    b = LatLngBounds(LatLng(40.774, -74.125), LatLng(40.712, -74.227))
    assert b.get_south_west() == LatLng(40.712, -74.227)
    assert b.get_north_east() == LatLng(40.774, -74.125)


def test_empty_bounds_is_invalid() -> None:
    b = LatLngBounds()
    assert not b.is_valid()
    b.extend(LatLng(10, 20))
    assert b.is_valid()
    # A bare point gives degenerate bounds.
    assert b.get_south_west() == b.get_north_east() == LatLng(10, 20)


def test_extend_with_literals_and_bounds() -> None:
    b = LatLngBounds([[14, 12], [30, 40]])
    b.extend([50, -10])
    assert b.get_south_west() == LatLng(14, -10)
    assert b.get_north_east() == LatLng(50, 40)

    b.extend(LatLngBounds([[-5, 0], [0, 60]]))
    assert b.get_south() == -5
    assert b.get_east() == 60


def test_extend_ignores_empty_input() -> None:
    b = LatLngBounds([[14, 12], [30, 40]])
    b.extend(LatLngBounds())
    b.extend(None)
    b.extend("nowhere")
    assert b.get_south_west() == LatLng(14, 12)
    assert b.get_north_east() == LatLng(30, 40)


def test_extend_does_not_alias_given_points() -> None:
    sw = LatLng(0, 0)
    b = LatLngBounds(sw, LatLng(1, 1))
    b.extend(LatLng(-1, -1))
    assert sw == LatLng(0, 0)


def test_pad() -> None:
    b = LatLngBounds([[14, 12], [30, 40]])
    padded = b.pad(0.5)
    assert padded.get_south_west() == LatLng(6, -2)
    assert padded.get_north_east() == LatLng(38, 54)

    shrunk = b.pad(-0.25)
    assert shrunk.get_south_west() == LatLng(18, 19)
    assert shrunk.get_north_east() == LatLng(26, 33)


def test_center_and_corners() -> None:
    b = LatLngBounds([[14, 12], [30, 40]])
    assert b.get_center() == LatLng(22, 26)
    assert b.get_north_west() == LatLng(30, 12)
    assert b.get_south_east() == LatLng(14, 40)
    assert (b.get_west(), b.get_south(), b.get_east(), b.get_north()) == (12, 14, 40, 30)


def test_to_lat_lng_bounds_passthrough() -> None:
    b = LatLngBounds([[0, 0], [1, 1]])
    assert to_lat_lng_bounds(b) is b
    assert to_lat_lng_bounds([[0, 0], [2, 2]]).get_north_east() == LatLng(2, 2)


def test_constructs_from_single_corner() -> None:
    ll = LatLng(10, 20)
    b = LatLngBounds(ll)
    assert b.is_valid()
    assert b.get_south_west() == ll
    assert b.get_north_east() == ll

    assert LatLngBounds({"lat": 1, "lng": 2}).get_center() == LatLng(1, 2)
    assert LatLngBounds(b).get_north_east() == ll
