"""Transport strategies used by ports to deliver a translated command."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from irrack.errors import InvalidKeyError, ProtocolError, TransportError
from irrack.transport.http import DispatcherClient
from irrack.transport.pool import ConnectionPool
from irrack.transport.telnet import TelnetTransport

logger = logging.getLogger(__name__)

SLOW_RESPONSE_SECONDS = 1.5
UNKNOWN_SIGNAL_REPLY = "Failed to find signal"


class Sender(Protocol):
    def send(self, command: str, expected: str) -> str:
        """Deliver ``command`` and return the reply, raising on mismatch."""
        ...


@dataclass(frozen=True)
class RetryPolicy:
    """``retries`` extra attempts after the first, ``backoff`` seconds apart."""

    retries: int = 2
    backoff: float = 0.5

    @property
    def attempts(self) -> int:
        return self.retries + 1


def check_hub_reply(command: str, expected: str, response: str) -> None:
    if response == expected:
        return
    if UNKNOWN_SIGNAL_REPLY in response:
        raise InvalidKeyError(f"Command {command} not valid for key set: {response}")
    raise ProtocolError(
        f"Hub did not return an expected result. Command {command} : "
        f"expected {expected!r} : returned {response!r}"
    )


class HubSender:
    """Send over a pooled hub session, reconnecting on I/O failures."""

    def __init__(
        self,
        pool: ConnectionPool,
        retry: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.pool = pool
        self.retry = retry or RetryPolicy()
        self._sleep = sleep

    def send(self, command: str, expected: str) -> str:
        with self.pool.borrow() as transport:
            response = self._send_with_retry(transport, command)
        check_hub_reply(command, expected, response)
        return response

    def _send_with_retry(self, transport: TelnetTransport, command: str) -> str:
        attempts = self.retry.attempts
        failure: Exception | None = None
        for attempt in range(1, attempts + 1):
            started = time.monotonic()
            try:
                response = transport.send_command(command)
            except (TransportError, OSError) as exc:
                failure = exc
                logger.warning("Send attempt %d/%d failed: %s", attempt, attempts, exc)
                if attempt == attempts:
                    break
                transport.close()
                try:
                    transport.connect()
                except TransportError as reconnect_exc:
                    logger.warning("Could not reconnect. The hub may have crashed: %s", reconnect_exc)
                self._sleep(self.retry.backoff)
                continue

            elapsed = time.monotonic() - started
            if elapsed > SLOW_RESPONSE_SECONDS:
                logger.warning("Hub took %.0fms to answer [%s]", elapsed * 1000, command)
            return response

        raise TransportError(f"Hub send failed after {attempts} attempts: {failure}") from failure


class HttpSender:
    """Send through the HTTP dispatcher, one request per command."""

    def __init__(self, client: DispatcherClient) -> None:
        self.client = client

    def send(self, command: str, expected: str) -> str:
        return self.client.press_key(command, expected)
