# models.py
# Shared data structures and enums used across all modules.

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """Immutable geographic coordinate."""
    lat: float
    lng: float

    def offset(self, d_lat: float, d_lng: float) -> "Coord":
        return Coord(self.lat + d_lat, self.lng + d_lng)

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @staticmethod
    def from_dict(d: dict) -> "Coord":
        return Coord(d["lat"], d["lng"])


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

@dataclass
class RouteLeg:
    """A single narrated segment of a synthesized route."""
    instruction: str
    distance_meters: float

    def to_dict(self) -> dict:
        return {
            "instruction": self.instruction,
            "distance_meters": self.distance_meters,
        }

    @staticmethod
    def from_dict(d: dict) -> "RouteLeg":
        return RouteLeg(
            instruction=d["instruction"],
            distance_meters=d["distance_meters"],
        )


@dataclass
class RouteResult:
    """Legs, totals and polyline of a walking route."""
    legs: List[RouteLeg]
    total_distance_meters: float
    total_duration_seconds: float
    geometry: List[Coord]

    @property
    def distance_km(self) -> float:
        return round(self.total_distance_meters / 1000, 1)

    @property
    def duration_minutes(self) -> int:
        return round(self.total_duration_seconds / 60)

    @property
    def start(self) -> Coord:
        return self.geometry[0]

    @property
    def end(self) -> Coord:
        return self.geometry[-1]

    def to_dict(self) -> dict:
        return {
            "legs": [leg.to_dict() for leg in self.legs],
            "total_distance_meters": self.total_distance_meters,
            "total_duration_seconds": self.total_duration_seconds,
            "geometry": [c.to_dict() for c in self.geometry],
        }

    @staticmethod
    def from_dict(d: dict) -> "RouteResult":
        return RouteResult(
            legs=[RouteLeg.from_dict(leg) for leg in d["legs"]],
            total_distance_meters=d["total_distance_meters"],
            total_duration_seconds=d["total_duration_seconds"],
            geometry=[Coord.from_dict(c) for c in d["geometry"]],
        )


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

class SessionState(Enum):
    IDLE      = "idle"
    LISTENING = "listening"
    SPEAKING  = "speaking"
    ERROR     = "error"


# ---------------------------------------------------------------------------
# Command interpretation
# ---------------------------------------------------------------------------

class CommandKind(Enum):
    NAVIGATE  = "navigate"
    EMERGENCY = "emergency"
    REJECTED  = "rejected"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of CommandInterpreter.interpret()."""
    kind: CommandKind
    destination: Optional[str] = None   # only set for NAVIGATE

    @staticmethod
    def navigate(destination: str) -> "CommandResult":
        return CommandResult(CommandKind.NAVIGATE, destination)

    @staticmethod
    def emergency() -> "CommandResult":
        return CommandResult(CommandKind.EMERGENCY)

    @staticmethod
    def rejected() -> "CommandResult":
        return CommandResult(CommandKind.REJECTED)


# ---------------------------------------------------------------------------
# Engine events
# ---------------------------------------------------------------------------

class EventType(Enum):
    ROUTE_READY       = "route_ready"
    TRIGGER_EMERGENCY = "trigger_emergency"
    PROMPT_RETRY      = "prompt_retry"


@dataclass
class EngineEvent:
    """Returned by NavigationSession for every handled utterance."""
    type: EventType
    message: str                           # text to speak / show
    destination: Optional[str] = None
    coordinates: Optional[Coord] = None
    route: Optional[RouteResult] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "message": self.message,
            "destination": self.destination,
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            "total_distance_meters": self.route.total_distance_meters if self.route else None,
        }


# ---------------------------------------------------------------------------
# Emergency alert
# ---------------------------------------------------------------------------

@dataclass
class EmergencyPayload:
    """Body of the emergency POST request."""
    user_id: str
    location: Coord
    message: str = "Emergency assistance requested"

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "location": self.location.to_dict(),
            "message": self.message,
        }
