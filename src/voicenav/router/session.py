# session.py
# State owned by one navigation session: current position, destination,
# listening state and the last status line.
# Call handle_utterance() for every transcript or typed command.

import logging
import time
from typing import Optional

from .models import (
    Coord, RouteResult, SessionState, CommandKind,
    EngineEvent, EventType, EmergencyPayload,
)
from .nav_config import NavConfig
from .command_interpreter import CommandInterpreter
from .destination_resolver import DestinationResolver
from .route_synthesizer import RouteSynthesizer

logger = logging.getLogger(__name__)


RETRY_PROMPT = "Please say 'Take me to' followed by your destination"
EMPTY_DESTINATION_PROMPT = "Please enter a destination first"
EMERGENCY_MESSAGE = "Emergency alert activated"


class NavigationSession:
    """
    Single-owner navigation state machine.

    Listening lifecycle:
        IDLE --on_listening_started--> LISTENING
        LISTENING --on_transcript | on_listening_ended | on_listening_error--> IDLE

    Not thread-safe: invoke from one thread only.

    Args:
        config:      NavConfig instance.
        interpreter: Optional CommandInterpreter override.
        resolver:    Optional DestinationResolver override (e.g. seeded).
        synthesizer: Optional RouteSynthesizer override.
    """

    def __init__(
        self,
        config: Optional[NavConfig] = None,
        interpreter: Optional[CommandInterpreter] = None,
        resolver: Optional[DestinationResolver] = None,
        synthesizer: Optional[RouteSynthesizer] = None,
    ) -> None:
        self.config = config or NavConfig()
        self._interpreter = interpreter or CommandInterpreter()
        self._resolver    = resolver or DestinationResolver(self.config)
        self._synthesizer = synthesizer or RouteSynthesizer(self.config)

        self._position: Coord = self.config.default_position
        self._state: SessionState = SessionState.IDLE
        self._speaking: bool = False
        self._destination: Optional[str] = None
        self._route: Optional[RouteResult] = None
        self._status: str = ""

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def current_position(self) -> Coord:
        return self._position

    @property
    def state(self) -> SessionState:
        if self._state == SessionState.IDLE and self._speaking:
            return SessionState.SPEAKING
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state == SessionState.LISTENING

    @property
    def destination(self) -> Optional[str]:
        return self._destination

    @property
    def route(self) -> Optional[RouteResult]:
        return self._route

    @property
    def status(self) -> str:
        return self._status

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def handle_utterance(self, text: str) -> EngineEvent:
        """
        Interpret an utterance and produce the matching engine event.

        Args:
            text: Transcript or typed command.

        Returns:
            ROUTE_READY, TRIGGER_EMERGENCY or PROMPT_RETRY event.
        """
        command = self._interpreter.interpret(text)

        if command.kind == CommandKind.NAVIGATE:
            return self._route_to(command.destination)

        if command.kind == CommandKind.EMERGENCY:
            logger.info("[Session] Emergency requested.")
            return EngineEvent(EventType.TRIGGER_EMERGENCY, EMERGENCY_MESSAGE)

        logger.info(f"[Session] Rejected utterance: '{text}'")
        return EngineEvent(EventType.PROMPT_RETRY, RETRY_PROMPT)

    def request_route(self, destination: str) -> EngineEvent:
        """Route to a typed destination without phrase interpretation."""
        destination = destination.strip()
        if not destination:
            return EngineEvent(EventType.PROMPT_RETRY, EMPTY_DESTINATION_PROMPT)
        return self._route_to(destination)

    def set_current_position(self, coord: Coord) -> None:
        self._position = coord
        logger.info(f"[Session] Position updated: {coord}")

    def set_status(self, message: str) -> None:
        self._status = message
        logger.info(f"Status: {message}")

    # ------------------------------------------------------------------
    # Listening state machine
    # ------------------------------------------------------------------

    def on_listening_started(self) -> bool:
        """
        Enter LISTENING.

        Returns:
            False if a listening session was already active (no-op).
        """
        if self._state == SessionState.LISTENING:
            return False
        self._state = SessionState.LISTENING
        self.set_status("Listening...")
        return True

    def on_transcript(self, text: str) -> EngineEvent:
        self._state = SessionState.IDLE
        text = text.strip()
        self.set_status(f'You said: "{text}"')
        return self.handle_utterance(text)

    def on_listening_ended(self) -> None:
        if self._state == SessionState.LISTENING:
            self._state = SessionState.IDLE

    def on_listening_error(self, code: str) -> str:
        self._state = SessionState.IDLE
        self.set_status(f"Voice error: {code}")
        return self._status

    def mark_listening_unavailable(self) -> str:
        self._state = SessionState.ERROR
        self.set_status("Voice recognition not available")
        return self._status

    def notify_speaking(self, speaking: bool) -> None:
        self._speaking = speaking

    # ------------------------------------------------------------------
    # Narration / payloads
    # ------------------------------------------------------------------

    @staticmethod
    def describe_route(destination: str, route: RouteResult) -> str:
        """Full spoken summary; the arrival leg is replaced by a closing line."""
        parts = [
            f"Route found to {destination}. "
            f"Distance: {route.distance_km:.1f} kilometers. "
            f"Time: {route.duration_minutes} minutes. Directions: "
        ]
        for index, leg in enumerate(route.legs[:-1]):
            parts.append(f"Step {index + 1}: {leg.instruction}. ")
        parts.append(f"You will arrive at {destination}.")
        return "".join(parts)

    def build_emergency_payload(self, now: Optional[float] = None) -> EmergencyPayload:
        """
        Payload for the emergency alert.

        Args:
            now: Unix timestamp in seconds; defaults to time.time().
        """
        millis = int((time.time() if now is None else now) * 1000)
        return EmergencyPayload(
            user_id=f"{self.config.user_id_prefix}{millis}",
            location=self._position,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _route_to(self, destination: str) -> EngineEvent:
        self._destination = destination
        self.set_status(f"Calculating route to {destination}...")

        coords = self._resolver.resolve(destination, self._position)
        route = self._synthesizer.synthesize(self._position, coords, destination)
        self._route = route

        logger.info(
            f"[Session] Route to '{destination}' {coords}: "
            f"{int(route.total_distance_meters)} m, {route.duration_minutes} min"
        )
        return EngineEvent(
            type=EventType.ROUTE_READY,
            message=self.describe_route(destination, route),
            destination=destination,
            coordinates=coords,
            route=route,
        )
