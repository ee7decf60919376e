import pytest

from voicenav.router.models import Coord
from voicenav.router.geo_utils import distance, haversine_distance, interpolate


def test_distance_to_self_is_zero():
    for c in [Coord(0, 0), Coord(11.0168, 76.9558), Coord(-33.9, 151.2), Coord(89.9, -179.9)]:
        assert distance(c, c) == 0


def test_distance_is_symmetric():
    a = Coord(11.0168, 76.9558)
    b = Coord(11.0138, 76.9608)
    assert distance(a, b) == pytest.approx(distance(b, a))


def test_one_degree_of_longitude_on_equator():
    d = distance(Coord(0.0, 0.0), Coord(0.0, 1.0))
    assert d == pytest.approx(111_195, rel=0.01)


def test_scalar_form_matches_coord_form():
    assert haversine_distance(0, 0, 1, 1) == distance(Coord(0, 0), Coord(1, 1))


def test_interpolate_moves_each_axis_independently():
    start, end = Coord(10.0, 20.0), Coord(11.0, 22.0)
    p = interpolate(start, end, 0.5, 0.0)
    assert p.lat == pytest.approx(10.5)
    assert p.lng == 20.0
