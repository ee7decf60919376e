# route_synthesizer.py
# Builds a plausible walking route between two coordinates.
# No road graph is involved: the path steps north, east, north again and
# then straight to the destination, with fixed narration.

from typing import List, Optional, Tuple

from .models import Coord, RouteLeg, RouteResult
from .geo_utils import distance, interpolate
from .nav_config import NavConfig


# ---------------------------------------------------------------------------
# Fixed route shape
# ---------------------------------------------------------------------------

# (lat share, lng share) of the start→end deltas for each polyline vertex
WAYPOINT_SHARES: List[Tuple[float, float]] = [
    (0.0, 0.0),
    (0.3, 0.0),     # north
    (0.3, 0.6),     # east
    (0.8, 0.6),     # north again
    (1.0, 1.0),
]

# (instruction template, share of total distance)
LEG_TEMPLATES: List[Tuple[str, float]] = [
    ("Start walking north on your current street towards {destination}", 0.3),
    ("Turn right onto Main Road and walk for 400 meters",                0.4),
    ("Turn left onto Cross Street and continue",                         0.2),
    ("Turn right and walk to {destination}",                             0.1),
    ("You have arrived at {destination}",                                0.0),
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _build_geometry(start: Coord, end: Coord) -> List[Coord]:
    points = [interpolate(start, end, lat_share, lng_share)
              for lat_share, lng_share in WAYPOINT_SHARES[1:-1]]
    return [start] + points + [end]


def _build_legs(total_m: float, destination: str) -> List[RouteLeg]:
    return [
        RouteLeg(
            instruction=template.format(destination=destination),
            distance_meters=total_m * share,
        )
        for template, share in LEG_TEMPLATES
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class RouteSynthesizer:
    """
    Generates RouteResult objects for walking directions.

    Args:
        config: NavConfig instance (walking speed).
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()

    def synthesize(self, start: Coord, end: Coord, destination_label: str) -> RouteResult:
        """
        Build a five-point route with five narrated legs.

        Args:
            start:             Current position.
            end:               Resolved destination.
            destination_label: Name used in the narration.

        Returns:
            RouteResult whose total distance is the great-circle distance
            start→end and whose duration assumes constant walking speed.
        """
        total_m = distance(start, end)
        return RouteResult(
            legs=_build_legs(total_m, destination_label),
            total_distance_meters=total_m,
            total_duration_seconds=total_m / self.config.walking_speed_mps,
            geometry=_build_geometry(start, end),
        )
