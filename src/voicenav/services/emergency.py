# emergency.py
# Sends the emergency alert as a JSON POST.

import logging
from typing import Optional

import requests

from ..errors import AlertTransportFailure
from ..router.models import EmergencyPayload
from ..router.nav_config import NavConfig

logger = logging.getLogger(__name__)


class EmergencyAlertClient:
    """
    HTTP transport for emergency alerts. One attempt per alert, no retry.

    Args:
        config:  NavConfig instance (endpoint URL, timeout).
        session: Optional requests.Session (connection reuse, tests).
    """

    def __init__(
        self,
        config: Optional[NavConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or NavConfig()
        self._http = session or requests.Session()

    def send_emergency(self, payload: EmergencyPayload) -> None:
        """
        POST the payload to the configured endpoint.

        Raises:
            AlertTransportFailure: network error or non-2xx response.
        """
        url = self.config.emergency_url
        try:
            response = self._http.post(
                url,
                json=payload.to_dict(),
                timeout=self.config.emergency_timeout_s,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"[Emergency] Alert to {url} failed: {e}")
            raise AlertTransportFailure(str(e)) from e

        logger.info(f"[Emergency] Alert sent for {payload.user_id} ({response.status_code})")
