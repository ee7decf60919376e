# nav_logger.py
# Handles all file I/O for the navigation system.
# Saves the active route and engine events as JSON.

import json
import os
import logging
from datetime import datetime
from typing import Optional

from .models import Coord, EngineEvent, RouteResult
from .nav_config import NavConfig

# Standard Python logger, configured at the app entry point
logger = logging.getLogger(__name__)


class NavLogger:
    """
    Persists route data and navigation events to JSON files.

    Args:
        config: NavConfig instance for file paths and directories.
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()
        os.makedirs(self.config.log_dir, exist_ok=True)

    # ------------------------------------------------------------------
    # Route persistence
    # ------------------------------------------------------------------

    def save_route(self, destination: str, route: RouteResult) -> bool:
        """
        Serialize a route to JSON.

        Args:
            destination: Destination label the route was built for.
            route:       RouteResult to store.

        Returns:
            True on success, False on failure.
        """
        filepath = self.config.route_filepath
        try:
            data = {
                "saved_at": datetime.now().isoformat(),
                "destination": destination,
                "leg_count": len(route.legs),
                "route": route.to_dict(),
            }
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            logger.info(f"Route saved to {filepath} ({len(route.legs)} legs).")
            return True
        except IOError as e:
            logger.error(f"Failed to save route to {filepath}: {e}")
            return False

    def load_route(self, filepath: Optional[str] = None) -> Optional[RouteResult]:
        """
        Load a previously saved route from JSON.

        Args:
            filepath: Path override; uses config default if omitted.

        Returns:
            RouteResult, or None if loading failed.
        """
        path = filepath or self.config.route_filepath
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            route = RouteResult.from_dict(data["route"])
            logger.info(f"Route loaded from {path} ({len(route.legs)} legs).")
            return route
        except (IOError, KeyError, ValueError) as e:
            logger.error(f"Failed to load route from {path}: {e}")
            return None

    # ------------------------------------------------------------------
    # Session event logging
    # ------------------------------------------------------------------

    def log_event(self, event: EngineEvent, position: Coord) -> None:
        """
        Append a single engine event to the session log file.

        Args:
            event:    EngineEvent produced by NavigationSession.
            position: Position the event was produced at.
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "lat": position.lat,
            "lng": position.lng,
        }
        entry.update(event.to_dict())
        try:
            with open(self.config.event_filepath, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except IOError as e:
            logger.error(f"Failed to write event log: {e}")
