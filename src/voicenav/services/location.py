# location.py
# One-shot device location via geocoder (IP lookup).

import logging

import geocoder
import requests

from ..errors import LocationUnavailable
from ..router.models import Coord

logger = logging.getLogger(__name__)


class LocationProvider:
    """
    Looks up the current position once per call.

    Args:
        timeout: Seconds to wait for the lookup service.
    """

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def get_current_position(self) -> Coord:
        """
        Returns:
            Current coordinate.

        Raises:
            LocationUnavailable: lookup failed or returned no position.
        """
        try:
            g = geocoder.ip("me", timeout=self.timeout)
        except (requests.exceptions.RequestException, ValueError) as e:
            raise LocationUnavailable(f"Location lookup failed: {e}") from e

        if not g.ok or not g.latlng:
            raise LocationUnavailable("Location service returned no position")

        lat, lng = g.latlng[0], g.latlng[1]
        logger.info(f"[Location] Fix: {lat}, {lng}")
        return Coord(float(lat), float(lng))
