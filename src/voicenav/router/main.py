# main.py
# Console front end: type commands or speak them.
#
# Commands:
#   <text>              interpret as an utterance ("take me to the mall")
#   route <destination> route to a typed destination
#   listen              capture one spoken command
#   emergency           send the emergency alert
#   where               show current position and status
#   quit

import logging
from typing import List

from ..errors import ListeningUnavailable
from ..services.emergency import EmergencyAlertClient
from ..services.location import LocationProvider
from ..tts_stt.stt import Listener
from ..tts_stt.tts import SpeechOutput, preferred_voice_id
from .models import Coord
from .nav_config import NavConfig
from .nav_logger import NavLogger
from .navigator import VoiceNavigator
from .session import NavigationSession

logger = logging.getLogger(__name__)


class ConsoleMapRenderer:
    """Prints what a map view would draw."""

    def show_route(self, polyline: List[Coord], marker: Coord, label: str) -> None:
        points = " → ".join(f"({c.lat:.5f}, {c.lng:.5f})" for c in polyline)
        print(f"[Map] Route: {points}")
        print(f"[Map] Marker '{label}' at ({marker.lat:.5f}, {marker.lng:.5f})")

    def show_position(self, position: Coord) -> None:
        print(f"[Map] Your location: ({position.lat:.5f}, {position.lng:.5f})")


def build_navigator(config: NavConfig, speech: SpeechOutput) -> VoiceNavigator:
    session = NavigationSession(config)
    speech.on_speaking = session.notify_speaking

    listener = None
    try:
        Listener.check_available()
        listener = Listener(config)
    except ListeningUnavailable as e:
        logger.warning(f"[Main] Voice input disabled: {e}")

    return VoiceNavigator(
        config,
        session=session,
        speech=speech,
        listener=listener,
        location=LocationProvider(),
        alerts=EmergencyAlertClient(config),
        renderer=ConsoleMapRenderer(),
        nav_logger=NavLogger(config),
    )


def main() -> None:
    # ------------------------------------------------------------------
    # Logging setup: configure once here, all modules inherit
    # ------------------------------------------------------------------
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = NavConfig.from_env()
    speech = SpeechOutput(config, voice_id=preferred_voice_id())
    nav = build_navigator(config, speech)
    nav.start()
    print("[Status]", nav.status)

    print("Commands:")
    print("  <text> | route <destination> | listen | emergency | where | quit")

    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break
        if not line:
            continue

        cmd, _, rest = line.partition(" ")
        cmd = cmd.lower()

        if cmd in ("q", "quit", "exit"):
            break
        elif cmd == "route":
            nav.get_route(rest)
        elif cmd == "listen":
            if nav.toggle_listening():
                nav.process_listening_events(block=True)
        elif cmd == "emergency" and not rest:
            nav.trigger_emergency()
        elif cmd == "where":
            pos = nav.session.current_position
            print(f"[Nav] {pos.lat:.5f}, {pos.lng:.5f} ({nav.state.name})")
        else:
            nav.submit_text(line)

        print("[Status]", nav.status)

    speech.wait()
    speech.close()


if __name__ == "__main__":
    main()
