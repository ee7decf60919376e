# destination_resolver.py
# Maps a free-text place name to coordinates near the current position.
#
# Usage:
#   resolver = DestinationResolver()
#   coord = resolver.resolve("the city hospital", origin)

import logging
import random
from typing import List, Optional, Tuple

from .models import Coord
from .nav_config import NavConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Place keyword → (d_lat, d_lng) offset from the origin
# Order matters: the first keyword contained in the name wins.
# ---------------------------------------------------------------------------

PLACE_OFFSETS: List[Tuple[str, Tuple[float, float]]] = [
    ("school",          ( 0.005,  0.003)),
    ("hospital",        (-0.003,  0.005)),
    ("restaurant",      (-0.002, -0.003)),
    ("mall",            ( 0.004,  0.002)),
    ("bank",            ( 0.003, -0.002)),
    ("pharmacy",        (-0.004, -0.001)),
    ("railway station", ( 0.008,  0.006)),
    ("airport",         (-0.015,  0.012)),
]


class DestinationResolver:
    """
    Keyword based destination lookup with a random fallback.

    Names that contain none of the known keywords are placed at a random
    point within ±fallback_spread_deg/2 of the origin on each axis.

    Args:
        config: NavConfig instance.
        rng:    Random source for the fallback; seed it for reproducible runs.
    """

    def __init__(
        self,
        config: Optional[NavConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or NavConfig()
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, name: str, origin: Coord) -> Coord:
        """
        Resolve a place name relative to origin.

        Args:
            name:   Free-text destination ("take me to the school", "mall" …).
            origin: Current position.

        Returns:
            Destination coordinate. Never fails.
        """
        keyword = self.match(name)
        if keyword is not None:
            d_lat, d_lng = dict(PLACE_OFFSETS)[keyword]
            return origin.offset(d_lat, d_lng)

        spread = self.config.fallback_spread_deg
        coord = origin.offset(
            (self._rng.random() - 0.5) * spread,
            (self._rng.random() - 0.5) * spread,
        )
        logger.info(f"[Resolver] No known place in '{name}', using {coord}")
        return coord

    def match(self, name: str) -> Optional[str]:
        """Return the first keyword contained in name, or None."""
        key = name.lower()
        for place, _ in PLACE_OFFSETS:
            if place in key:
                return place
        return None

    def list_categories(self) -> List[str]:
        """Known place keywords in matching order."""
        return [place for place, _ in PLACE_OFFSETS]
