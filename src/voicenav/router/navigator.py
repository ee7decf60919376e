# navigator.py
# Public entry point for the voice navigation system.
# Owns no business logic: wires a NavigationSession to the speech,
# listening, location, alert, map and logging collaborators.

import logging
import queue
from typing import Optional, Tuple

from ..errors import AlertTransportFailure, LocationUnavailable
from .capabilities import (
    AlertTransport, ListeningCapability, LocationCapability,
    MapRenderer, SpeechOutputCapability,
)
from .models import EngineEvent, EventType, SessionState
from .nav_config import NavConfig
from .nav_logger import NavLogger
from .session import NavigationSession

logger = logging.getLogger(__name__)


GREETING = "Voice Navigation ready. Say 'Take me to school' or type your destination."

# Listener events re-queued onto the navigator thread
_START, _RESULT, _END, _ERROR = "start", "result", "end", "error"


class VoiceNavigator:
    """
    High-level voice navigation facade.

    Typical lifecycle:
        nav = VoiceNavigator(speech=SpeechOutput(), listener=Listener(),
                             location=LocationProvider(), alerts=EmergencyAlertClient())
        nav.start()

        nav.submit_text("take me to the hospital")

        nav.toggle_listening()
        nav.process_listening_events(block=True)

    Every collaborator is optional; missing ones are skipped (a missing
    listener makes voice input unavailable).

    Args:
        config:   Optional NavConfig; defaults to NavConfig().
        session:  Optional NavigationSession; built from config if omitted.
        speech:   Speech output.
        listener: Speech capture.
        location: One-shot position provider.
        alerts:   Emergency alert transport.
        renderer: Map display.
        nav_logger: Route / event persistence.
    """

    def __init__(
        self,
        config: Optional[NavConfig] = None,
        session: Optional[NavigationSession] = None,
        speech: Optional[SpeechOutputCapability] = None,
        listener: Optional[ListeningCapability] = None,
        location: Optional[LocationCapability] = None,
        alerts: Optional[AlertTransport] = None,
        renderer: Optional[MapRenderer] = None,
        nav_logger: Optional[NavLogger] = None,
    ) -> None:
        self.config = config or NavConfig()
        self.session = session or NavigationSession(self.config)

        self._speech   = speech
        self._listener = listener
        self._location = location
        self._alerts   = alerts
        self._renderer = renderer
        self._logger   = nav_logger

        self._events: "queue.Queue[Tuple[str, Optional[str]]]" = queue.Queue()
        if self._listener is not None:
            self._listener.on_start  = lambda: self._events.put((_START, None))
            self._listener.on_result = lambda text: self._events.put((_RESULT, text))
            self._listener.on_end    = lambda: self._events.put((_END, None))
            self._listener.on_error  = lambda code: self._events.put((_ERROR, code))

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Try a location fix and greet the user."""
        self.refresh_location()
        self.speak(GREETING)

    def refresh_location(self) -> bool:
        """
        One-shot location fix.

        Returns:
            True if the session position was updated.
        """
        if self._location is None:
            return False
        try:
            position = self._location.get_current_position()
        except LocationUnavailable as e:
            logger.warning(f"[Nav] {e}")
            self.session.set_status("Using default location")
            return False

        self.session.set_current_position(position)
        if self._renderer is not None:
            self._renderer.show_position(position)
        self.session.set_status("Location found")
        return True

    # ------------------------------------------------------------------
    # Input paths
    # ------------------------------------------------------------------

    def submit_text(self, text: str) -> EngineEvent:
        """Typed or transcribed command ("take me to …", "emergency", …)."""
        return self.dispatch(self.session.handle_utterance(text))

    def get_route(self, destination: str) -> EngineEvent:
        """Typed destination from the route form."""
        return self.dispatch(self.session.request_route(destination))

    def toggle_listening(self) -> bool:
        """
        Start listening, or stop the active listening session.

        Returns:
            False if voice input is unavailable.
        """
        if self._listener is None:
            self.speak(self.session.mark_listening_unavailable())
            return False
        if self.session.is_listening:
            self._listener.stop()
        else:
            self._listener.start()
        return True

    def process_listening_events(
        self, block: bool = False, timeout: Optional[float] = None,
    ) -> Optional[EngineEvent]:
        """
        Route queued listener events into the session.

        Args:
            block:   Wait until the listening session ends.
            timeout: Max seconds to wait for each event when blocking.

        Returns:
            The EngineEvent produced by a transcript, if any.
        """
        produced: Optional[EngineEvent] = None
        while True:
            try:
                kind, arg = self._events.get(block=block, timeout=timeout)
            except queue.Empty:
                break

            if kind == _START:
                if self._speech is not None:
                    self._speech.cancel()
                self.session.on_listening_started()
            elif kind == _RESULT:
                produced = self.dispatch(self.session.on_transcript(arg))
            elif kind == _ERROR:
                self.session.on_listening_error(arg)
            elif kind == _END:
                self.session.on_listening_ended()
                if block:
                    break
        return produced

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def dispatch(self, event: EngineEvent) -> EngineEvent:
        """Speak, render and log an engine event."""
        if self._logger is not None:
            self._logger.log_event(event, self.session.current_position)

        if event.type == EventType.ROUTE_READY:
            self.speak(f"Getting route to {event.destination}")
            if self._renderer is not None:
                self._renderer.show_route(event.route.geometry, event.coordinates, event.destination)
            if self._logger is not None:
                self._logger.save_route(event.destination, event.route)
            self.speak(event.message)
        elif event.type == EventType.TRIGGER_EMERGENCY:
            self.trigger_emergency()
        else:
            self.speak(event.message)
        return event

    def trigger_emergency(self) -> bool:
        """
        Send one emergency alert with the current position.

        Returns:
            True if the alert was delivered.
        """
        self.speak("Emergency alert activated")
        if self._alerts is None:
            logger.error("[Nav] No alert transport configured.")
            self.speak("Emergency alert failed")
            return False

        payload = self.session.build_emergency_payload()
        try:
            self._alerts.send_emergency(payload)
        except AlertTransportFailure as e:
            logger.error(f"[Nav] Emergency alert failed: {e}")
            self.speak("Emergency alert failed")
            return False

        self.speak("Emergency alert sent successfully")
        return True

    def speak(self, text: str) -> None:
        print(f"[TTS] {text}")
        if self._speech is not None:
            self._speech.speak(text)

    # ------------------------------------------------------------------
    # Convenience read-only properties
    # ------------------------------------------------------------------

    @property
    def status(self) -> str:
        return self.session.status

    @property
    def state(self) -> SessionState:
        return self.session.state
