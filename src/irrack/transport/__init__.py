from __future__ import annotations

from .http import DispatcherClient
from .pool import ConnectionPool
from .telnet import TelnetTransport, read_response

__all__ = [
    "ConnectionPool",
    "DispatcherClient",
    "TelnetTransport",
    "read_response",
]
