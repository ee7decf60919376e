import pytest

from voicenav.router.models import Coord
from voicenav.router.geo_utils import distance
from voicenav.router.nav_config import NavConfig
from voicenav.router.route_synthesizer import RouteSynthesizer


START = Coord(11.0168, 76.9558)
END = Coord(11.0208, 76.9578)


@pytest.fixture
def synthesizer():
    return RouteSynthesizer()


def test_geometry_has_five_points_from_start_to_end(synthesizer):
    route = synthesizer.synthesize(START, END, "Mall")
    assert len(route.geometry) == 5
    assert route.geometry[0] == START
    assert route.geometry[-1] == END


def test_geometry_steps_north_east_north(synthesizer):
    route = synthesizer.synthesize(START, END, "Mall")
    d_lat, d_lng = END.lat - START.lat, END.lng - START.lng
    p2, p3, p4 = route.geometry[1:4]

    assert p2.lat == pytest.approx(START.lat + 0.3 * d_lat)
    assert p2.lng == START.lng
    assert p3.lat == p2.lat
    assert p3.lng == pytest.approx(START.lng + 0.6 * d_lng)
    assert p4.lat == pytest.approx(START.lat + 0.8 * d_lat)
    assert p4.lng == p3.lng


def test_totals(synthesizer):
    route = synthesizer.synthesize(START, END, "Mall")
    assert route.total_distance_meters == distance(START, END)
    assert route.total_duration_seconds == pytest.approx(route.total_distance_meters / 1.4)


def test_leg_distances_sum_to_total():
    synthesizer = RouteSynthesizer()
    pairs = [
        (START, END),
        (Coord(0, 0), Coord(1, 1)),
        (Coord(51.5, -0.12), Coord(48.85, 2.35)),
        (Coord(-33.9, 151.2), Coord(-33.8, 151.0)),
    ]
    for a, b in pairs:
        route = synthesizer.synthesize(a, b, "X")
        assert sum(leg.distance_meters for leg in route.legs) == pytest.approx(route.total_distance_meters)


def test_degenerate_route(synthesizer):
    route = synthesizer.synthesize(START, START, "Here")
    assert route.total_distance_meters == 0
    assert route.total_duration_seconds == 0
    assert all(leg.distance_meters == 0 for leg in route.legs)
    assert len(route.geometry) == 5


def test_leg_narration(synthesizer):
    route = synthesizer.synthesize(START, END, "Mall")
    texts = [leg.instruction for leg in route.legs]
    assert texts[0] == "Start walking north on your current street towards Mall"
    assert texts[3] == "Turn right and walk to Mall"
    assert texts[4] == "You have arrived at Mall"
    assert route.legs[1].distance_meters == pytest.approx(0.4 * route.total_distance_meters)
    assert route.legs[4].distance_meters == 0


def test_walking_speed_is_configurable():
    route = RouteSynthesizer(NavConfig(walking_speed_mps=2.0)).synthesize(START, END, "Mall")
    assert route.total_duration_seconds == pytest.approx(route.total_distance_meters / 2.0)
