"""Line-oriented TCP session to the IR hub."""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from typing import IO

from irrack.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HUB_PORT = 40000
DEFAULT_READ_TIMEOUT = 15.0

OK_REPLY = "OK"
LINE_TERMINATOR = "LINE"


def read_response(lines: Iterable[str], terminator: str | None = None) -> str | None:
    """Collect reply lines until a framing rule fires.

    Rules, checked per line:

    * terminator ``LINE``: stop after exactly one line, whatever it holds;
    * a line equal to ``OK``: the reply is ``OK``;
    * a line containing ``{`` opens a block that ends on a line containing ``}``;
    * outside a block, a line ending in ``)`` or starting with ``Failed`` ends
      the reply.

    Lines are joined with newlines. Returns None when no line was read.
    """
    single_line = terminator is not None and terminator.upper() == LINE_TERMINATOR
    collected: list[str] = []
    in_block = False

    for line in lines:
        collected.append(line)
        if single_line:
            break
        if line == OK_REPLY:
            return OK_REPLY
        if "{" in line:
            in_block = True
            if "}" in line[line.index("{") :]:
                break
        elif "}" in line:
            break
        elif not in_block and (line.endswith(")") or line.startswith("Failed")):
            break

    if not collected:
        return None
    return "\n".join(collected)


class TelnetTransport:
    """One TCP session to the hub.

    The hub speaks ASCII lines: one command line out, one or more reply
    lines back. Calls on one transport are serialised.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_HUB_PORT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        instance_id: int = 0,
    ) -> None:
        self.host = host
        self.port = port
        self.read_timeout = read_timeout
        self.instance_id = instance_id
        self.transaction_id: int | None = None
        self.requests = 0
        self.last_active = datetime.now(timezone.utc)
        self._sock: socket.socket | None = None
        self._reader: IO[str] | None = None
        self._lock = threading.RLock()

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """Open the session unless it is already open."""
        with self._lock:
            if self._sock is None:
                logger.debug("[%d] Connecting to %s:%d", self.instance_id, self.host, self.port)
                try:
                    sock = socket.create_connection((self.host, self.port), timeout=self.read_timeout)
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
                    sock.settimeout(self.read_timeout)
                except OSError as exc:
                    raise TransportError(
                        f"Could not connect to hub {self.host}:{self.port}: {exc}"
                    ) from exc
                self._sock = sock
                self._reader = sock.makefile("r", encoding="utf-8", errors="replace", newline="")
            self.last_active = datetime.now(timezone.utc)

    def close(self) -> None:
        with self._lock:
            reader, sock = self._reader, self._sock
            self._reader = None
            self._sock = None
            for handle in (reader, sock):
                if handle is None:
                    continue
                try:
                    handle.close()
                except OSError as exc:
                    logger.debug("[%d] Error while closing: %s", self.instance_id, exc)

    def _lines(self, reader: IO[str]) -> Iterator[str]:
        while True:
            raw = reader.readline()
            if not raw:
                return
            yield raw.rstrip("\r\n")

    def send_command(self, command: str, terminator: str | None = None) -> str:
        """Write ``command`` and return the framed reply."""
        with self._lock:
            if self._sock is None or self._reader is None:
                raise TransportError(f"Not connected to hub {self.host}:{self.port}")
            self.requests += 1
            logger.info(
                "sendCommand[%d,%s] Count[%d] Command: [%s]",
                self.instance_id,
                self.transaction_id,
                self.requests,
                command,
            )
            try:
                self._sock.sendall(f"{command}\n".encode())
                response = read_response(self._lines(self._reader), terminator)
            except OSError as exc:
                self.close()
                raise TransportError(f"Hub I/O failed for [{command}]: {exc}") from exc
            self.last_active = datetime.now(timezone.utc)

            if response is None:
                self.close()
                raise TransportError(f"Hub closed the connection during [{command}]")
            logger.debug("sendCommand[%d,%s] Response: %s", self.instance_id, self.transaction_id, response)
            return response

    def __repr__(self) -> str:
        state = "connected" if self.connected else "closed"
        return f"TelnetTransport({self.host}:{self.port}, id={self.instance_id}, {state})"
