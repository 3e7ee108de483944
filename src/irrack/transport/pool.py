"""Bounded pool of hub sessions.

The pool holds ``size`` transports in a blocking queue. Borrowing waits up
to ``wait`` seconds and then gives up, which keeps a burst of requests from
piling up on the hub.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from irrack.errors import CommunicatorUnavailableError, ConfigurationError, TransportError
from irrack.transport.telnet import DEFAULT_HUB_PORT, DEFAULT_READ_TIMEOUT, TelnetTransport

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 1
DEFAULT_POOL_WAIT = 2.0

TransportFactory = Callable[[int], TelnetTransport]


class ConnectionPool:
    """Fixed-size pool of :class:`TelnetTransport` for one hub endpoint."""

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_HUB_PORT,
        size: int = DEFAULT_POOL_SIZE,
        wait: float = DEFAULT_POOL_WAIT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        factory: TransportFactory | None = None,
    ) -> None:
        if size < 1:
            raise ConfigurationError(f"Pool size must be at least 1, got {size}")
        self.host = host
        self.port = port
        self.wait = wait
        self._size = size
        self._factory = factory or (
            lambda instance_id: TelnetTransport(host, port, read_timeout, instance_id)
        )
        self._lock = threading.Lock()
        self._idle: queue.Queue[TelnetTransport] = queue.Queue()
        self._members: set[TelnetTransport] = set()
        self._borrowed: set[TelnetTransport] = set()
        self._instances = 0
        self._borrows = 0
        self._closed = False
        logger.info("Creating hub connection pool %s:%d size=%d", host, port, size)
        with self._lock:
            for _ in range(size):
                self._add_member()

    @property
    def size(self) -> int:
        return self._size

    @property
    def active(self) -> int:
        with self._lock:
            return len(self._borrowed)

    @property
    def borrows(self) -> int:
        with self._lock:
            return self._borrows

    def _add_member(self) -> None:
        # caller holds self._lock
        self._instances += 1
        transport = self._factory(self._instances)
        self._members.add(transport)
        self._idle.put(transport)
        logger.debug("Pool created transport [%d]", self._instances)

    def _activate(self, transport: TelnetTransport) -> None:
        if transport.connected:
            return
        try:
            transport.connect()
        except TransportError as exc:
            # the sender reconnects and retries on its own
            logger.warning("Could not connect transport [%d]: %s", transport.instance_id, exc)

    def get_connection(self, timeout: float | None = None) -> TelnetTransport | None:
        """Borrow a transport, or None when none frees up within the wait."""
        with self._lock:
            self._borrows += 1
            transaction_id = self._borrows
            closed = self._closed
        if closed:
            logger.warning("getConnection[%d] on a closed pool", transaction_id)
            return None

        logger.debug("getConnection[%d]", transaction_id)
        try:
            transport = self._idle.get(timeout=self.wait if timeout is None else timeout)
        except queue.Empty:
            logger.warning(
                "getConnection[%d] timed out, %d of %d in use",
                transaction_id,
                self.active,
                self._size,
            )
            return None

        # on loan before connecting, so a restart meanwhile retires it on release
        with self._lock:
            self._borrowed.add(transport)
        transport.transaction_id = transaction_id
        self._activate(transport)
        return transport

    def release_connection(self, transport: TelnetTransport | None) -> None:
        """Hand a borrowed transport back."""
        if transport is None:
            return
        with self._lock:
            if transport not in self._borrowed:
                logger.warning("releaseConnection of a transport not on loan: %r", transport)
                return
            self._borrowed.discard(transport)
            logger.debug("releaseConnection[%s]", transport.transaction_id)
            if transport in self._members and not self._closed:
                self._idle.put(transport)
                return
            # borrowed before a restart or close: retire it
            self._members.discard(transport)
            if not self._closed:
                self._add_member()
        transport.close()

    @contextmanager
    def borrow(self, timeout: float | None = None) -> Iterator[TelnetTransport]:
        """Borrow a transport for the duration of a ``with`` block."""
        transport = self.get_connection(timeout)
        if transport is None:
            raise CommunicatorUnavailableError(
                f"No hub connection to {self.host}:{self.port} available "
                f"within {self.wait if timeout is None else timeout}s"
            )
        try:
            yield transport
        finally:
            self.release_connection(transport)

    def _drain(self) -> list[TelnetTransport]:
        drained = []
        while True:
            try:
                drained.append(self._idle.get_nowait())
            except queue.Empty:
                return drained

    def restart(self) -> None:
        """Close every idle transport and rebuild the pool.

        Transports on loan are closed and replaced when they come back.
        """
        logger.info("Restarting hub connection pool %s:%d", self.host, self.port)
        with self._lock:
            idle = self._drain()
            self._members.clear()
            self._closed = False
            for _ in range(self._size - len(self._borrowed)):
                self._add_member()
        for transport in idle:
            transport.close()

    def close(self) -> None:
        logger.info("Closing hub connection pool %s:%d", self.host, self.port)
        with self._lock:
            self._closed = True
            idle = self._drain()
            self._members.clear()
        for transport in idle:
            transport.close()

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "size": self._size,
                "active": len(self._borrowed),
                "idle": self._idle.qsize(),
                "borrows": self._borrows,
            }
