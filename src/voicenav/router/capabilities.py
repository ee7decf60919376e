# capabilities.py
# Interfaces of the external collaborators the navigator talks to.
# Concrete adapters live in voicenav.tts_stt and voicenav.services;
# tests substitute simple fakes.

from typing import Callable, List, Optional, Protocol

from .models import Coord, EmergencyPayload


class ListeningCapability(Protocol):
    """Speech capture. Events are delivered through the callbacks."""

    on_start: Optional[Callable[[], None]]
    on_result: Optional[Callable[[str], None]]
    on_end: Optional[Callable[[], None]]
    on_error: Optional[Callable[[str], None]]

    def start(self) -> None: ...

    def stop(self) -> None: ...


class SpeechOutputCapability(Protocol):
    """Text to speech. speak() cancels whatever is being spoken."""

    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...

    @property
    def is_speaking(self) -> bool: ...


class LocationCapability(Protocol):
    """One-shot position fix; raises LocationUnavailable on failure."""

    def get_current_position(self) -> Coord: ...


class AlertTransport(Protocol):
    """Delivers an emergency alert; raises AlertTransportFailure on failure."""

    def send_emergency(self, payload: EmergencyPayload) -> None: ...


class MapRenderer(Protocol):
    """Display surface for routes and the user's position."""

    def show_route(self, polyline: List[Coord], marker: Coord, label: str) -> None: ...

    def show_position(self, position: Coord) -> None: ...
