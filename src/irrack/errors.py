"""Error kinds raised by irrack.

Each kind is decided once, where the failure happens. ``http_status`` is a
hint for an API layer mapping these errors to responses.
"""

from __future__ import annotations


class IRError(Exception):
    """Base class for all irrack errors."""

    http_status = 500


class InvalidArgumentError(IRError, ValueError):
    """Malformed input: bad tree, channel, delay. No I/O was attempted."""

    http_status = 400


class ConfigurationError(IRError):
    """Unknown hardware type, device, slot or port."""

    http_status = 400


class CommunicatorUnavailableError(IRError):
    """No pooled connection became available in time."""

    http_status = 503


class ProtocolError(IRError):
    """The command could not be translated or the reply was not the expected token."""

    http_status = 502


class InvalidKeyError(ProtocolError):
    """The key is not part of the keyset loaded on the hub or dispatcher."""


class TransportError(IRError):
    """I/O failure while connecting to or talking with a backend."""

    http_status = 504
