"""Voice driven pedestrian navigation.

Interprets spoken or typed destination commands, fabricates a walking route
with narration and hands it to speech output and a map renderer.
"""

from .router.models import Coord, RouteLeg, RouteResult, SessionState, EngineEvent, EventType
from .router.nav_config import NavConfig
from .router.session import NavigationSession
from .router.navigator import VoiceNavigator

__all__ = [
    "Coord",
    "RouteLeg",
    "RouteResult",
    "SessionState",
    "EngineEvent",
    "EventType",
    "NavConfig",
    "NavigationSession",
    "VoiceNavigator",
]
