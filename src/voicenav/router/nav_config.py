# nav_config.py
# All tuneable constants in one place.
# Pass a NavConfig instance to every module that needs settings.

import logging
import os
from dataclasses import dataclass, fields
from typing import Optional

from dotenv import load_dotenv

from .models import Coord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

WALKING_SPEED_MPS: float = 1.4       # m/s

# Seed position used until a location fix succeeds (Coimbatore)
DEFAULT_LAT: float = 11.0168
DEFAULT_LNG: float = 76.9558

ENV_PREFIX = "VOICENAV_"


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class NavConfig:
    # Routing
    walking_speed_mps: float = WALKING_SPEED_MPS
    default_lat: float = DEFAULT_LAT
    default_lng: float = DEFAULT_LNG
    fallback_spread_deg: float = 0.01      # unknown places land within ±spread/2

    # Emergency alert
    emergency_url: str = "http://localhost:3000/api/emergency"
    emergency_timeout_s: float = 5.0
    user_id_prefix: str = "user_"

    # Speech
    speech_rate: int = 150                 # words per minute (pyttsx3)
    speech_volume: float = 1.0
    language: str = "en-US"
    listen_timeout_s: float = 5.0
    phrase_time_limit_s: float = 8.0

    # Logging
    log_dir: str = "."                     # directory for saved JSON files
    route_filename: str = "active_route.json"
    event_filename: str = "nav_session.jsonl"

    @property
    def default_position(self) -> Coord:
        return Coord(self.default_lat, self.default_lng)

    @property
    def route_filepath(self) -> str:
        return os.path.join(self.log_dir, self.route_filename)

    @property
    def event_filepath(self) -> str:
        return os.path.join(self.log_dir, self.event_filename)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "NavConfig":
        """
        Build a config from VOICENAV_* environment variables.

        A .env file is loaded first (existing variables win), e.g.
            VOICENAV_EMERGENCY_URL=https://example.org/api/emergency
            VOICENAV_LOG_DIR=logs

        Args:
            dotenv_path: Explicit .env path; searched upwards if omitted.

        Returns:
            NavConfig with overridden fields, defaults elsewhere.
            Values that do not parse as the field's type are logged and
            ignored.
        """
        load_dotenv(dotenv_path)
        overrides = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            default = f.default
            try:
                if isinstance(default, int):
                    overrides[f.name] = int(raw)
                elif isinstance(default, float):
                    overrides[f.name] = float(raw)
                else:
                    overrides[f.name] = raw
            except ValueError:
                logger.warning(
                    f"[Config] Ignoring {ENV_PREFIX}{f.name.upper()}={raw!r}, "
                    f"keeping default {default!r}"
                )
        return cls(**overrides)
