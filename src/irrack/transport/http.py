"""Client for the HTTP IR dispatcher (iTach / GC100 blasters)."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from irrack.errors import InvalidKeyError, ProtocolError, TransportError
from irrack.models.health import DispatcherHealth

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 10.0


class DispatcherClient:
    """One-shot requests against the dispatcher API.

    Every call opens its own request; nothing is pooled or retried here.
    """

    def __init__(
        self,
        api_base: str,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._session = session

    def _request(self, method: str, url: str) -> requests.Response:
        if self._session is not None:
            return self._session.request(method, url, timeout=self.timeout)
        return requests.request(method, url, timeout=self.timeout)

    def press_key(self, query: str, expected: str = "success") -> str:
        """POST ``query`` to ``/press_key`` and check the body for ``expected``."""
        url = f"{self.api_base}/press_key?{query}"
        logger.info("Attempting to send command: %s", url)
        try:
            response = self._request("POST", url)
            body = response.text
        except requests.RequestException as exc:
            raise TransportError(f"Dispatcher request failed for [{query}]: {exc}") from exc

        logger.info("Dispatcher response: %s", body)
        if expected in body:
            return body
        if "Error" in body:
            raise InvalidKeyError(f"Command {query} not valid for key set: {body}")
        raise ProtocolError(
            f"Dispatcher did not return an expected result. Command {query} : "
            f"expected {expected!r} : returned {body!r}"
        )

    def health(self) -> DispatcherHealth:
        """Fetch ``/health``. Failures yield an unhealthy report."""
        url = f"{self.api_base}/health"
        logger.info("Attempting to get health: %s", url)
        try:
            response = self._request("GET", url)
            response.raise_for_status()
            if not response.text.strip():
                return DispatcherHealth()
            return DispatcherHealth.model_validate(response.json())
        except (requests.RequestException, ValueError, ValidationError) as exc:
            logger.error("Error while getting health of GC dispatcher: %s", exc)
            return DispatcherHealth()
