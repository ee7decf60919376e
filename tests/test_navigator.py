import pytest

from voicenav.errors import AlertTransportFailure, LocationUnavailable
from voicenav.router.models import Coord, EventType, SessionState
from voicenav.router.nav_logger import NavLogger
from voicenav.router.navigator import GREETING, VoiceNavigator

from fakes import FakeAlerts, FakeLocation


def make_nav(session, **kwargs):
    return VoiceNavigator(session.config, session=session, **kwargs)


def test_start_uses_location_fix(session, speech, renderer):
    fix = Coord(12.97, 77.59)
    nav = make_nav(session, speech=speech, location=FakeLocation(fix), renderer=renderer)
    nav.start()

    assert session.current_position == fix
    assert nav.status == "Location found"
    assert renderer.positions == [fix]
    assert speech.spoken[-1] == GREETING


def test_location_failure_keeps_default(session, speech):
    nav = make_nav(session, speech=speech, location=FakeLocation(error=LocationUnavailable("timeout")))
    assert nav.refresh_location() is False
    assert session.current_position == Coord(11.0168, 76.9558)
    assert nav.status == "Using default location"


def test_submit_text_speaks_renders_and_saves(session, speech, renderer, config):
    nav_logger = NavLogger(config)
    nav = make_nav(session, speech=speech, renderer=renderer, nav_logger=nav_logger)

    event = nav.submit_text("take me to the pharmacy")

    assert event.type == EventType.ROUTE_READY
    assert speech.spoken[0] == "Getting route to the pharmacy"
    assert speech.spoken[-1] == event.message
    polyline, marker, label = renderer.routes[0]
    assert polyline == event.route.geometry
    assert marker == event.coordinates
    assert label == "the pharmacy"
    assert nav_logger.load_route().geometry == event.route.geometry


def test_prompt_retry_is_spoken(session, speech):
    nav = make_nav(session, speech=speech)
    nav.submit_text("x")
    assert speech.spoken == ["Please say 'Take me to' followed by your destination"]


def test_get_route_without_destination(session, speech):
    nav = make_nav(session, speech=speech)
    nav.get_route("")
    assert speech.spoken == ["Please enter a destination first"]


def test_emergency_success(session, speech):
    alerts = FakeAlerts()
    nav = make_nav(session, speech=speech, alerts=alerts)

    event = nav.submit_text("emergency")

    assert event.type == EventType.TRIGGER_EMERGENCY
    assert len(alerts.sent) == 1
    assert alerts.sent[0].location == session.current_position
    assert speech.spoken == ["Emergency alert activated", "Emergency alert sent successfully"]


def test_emergency_failure_is_not_retried(session, speech):
    alerts = FakeAlerts(error=AlertTransportFailure("connection refused"))
    nav = make_nav(session, speech=speech, alerts=alerts)

    assert nav.trigger_emergency() is False
    assert alerts.sent == []
    assert speech.spoken == ["Emergency alert activated", "Emergency alert failed"]


def test_toggle_without_listener(session, speech):
    nav = make_nav(session, speech=speech)
    assert nav.toggle_listening() is False
    assert speech.spoken == ["Voice recognition not available"]
    assert session.state == SessionState.ERROR


def test_voice_command_flow(session, speech, listener):
    nav = make_nav(session, speech=speech, listener=listener)

    assert nav.toggle_listening() is True
    assert listener.started == 1

    listener.hear("navigate to hospital")
    event = nav.process_listening_events(block=True, timeout=1)

    assert event.type == EventType.ROUTE_READY
    assert event.coordinates.lat == pytest.approx(11.0138)
    assert event.coordinates.lng == pytest.approx(76.9608)
    assert speech.cancelled == 1
    assert session.state == SessionState.IDLE


def test_toggle_while_listening_stops(session, listener):
    nav = make_nav(session, listener=listener)
    nav.toggle_listening()
    listener.on_start()
    nav.process_listening_events()
    assert session.is_listening

    nav.toggle_listening()
    assert listener.stopped == 1
    assert listener.started == 1


def test_listening_error_flow(session, listener):
    nav = make_nav(session, listener=listener)
    nav.toggle_listening()
    listener.fail("no-match")

    assert nav.process_listening_events(block=True, timeout=1) is None
    assert nav.status == "Voice error: no-match"
    assert session.state == SessionState.IDLE
