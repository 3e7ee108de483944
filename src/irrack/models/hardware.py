"""Supported IR hardware families."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from irrack.errors import ConfigurationError

Transport = Literal["hub", "http"]

# inventory type aliases, as written in rack configuration files
_CONFIG_TYPES = {
    "itach": "ITACH",
    "gc100": "GC100",
    "gc100_6": "GC100_6",
    "gc100_12": "GC100_12",
    "redrat": "REDRAT3",
    "redrat3": "REDRAT3",
    "irnetbox": "IRNETBOXPRO3",
    "irnetboxpro3": "IRNETBOXPRO3",
}


class HardwareKind(Enum):
    """IR blaster family with its URI scheme and fixed port count."""

    GC100 = ("gc100", 6)
    GC100_12 = ("gc100-12", 12)
    GC100_6 = ("gc100-6", 6)
    ITACH = ("itach", 3)
    IRNETBOXPRO3 = ("irnetboxpro3", 16)
    REDRAT3 = ("redrat3", 1)

    def __init__(self, scheme: str, max_ports: int) -> None:
        self.scheme = scheme
        self.max_ports = max_ports

    @property
    def transport(self) -> Transport:
        if self in (HardwareKind.IRNETBOXPRO3, HardwareKind.REDRAT3):
            return "hub"
        return "http"

    @classmethod
    def from_scheme(cls, scheme: str) -> HardwareKind:
        """Look up a kind by scheme, e.g. ``gc100-12`` or ``GC100_12``."""
        try:
            return cls[scheme.strip().upper().replace("-", "_")]
        except (KeyError, AttributeError) as exc:
            raise ConfigurationError(f"Unknown hardware type: {scheme!r}") from exc

    @classmethod
    def is_valid(cls, scheme: str) -> bool:
        try:
            cls.from_scheme(scheme)
        except ConfigurationError:
            return False
        return True

    @classmethod
    def from_config_type(cls, value: str | None) -> HardwareKind:
        """Map an inventory ``type`` entry to a kind.

        Missing or unrecognised types fall back to IRNETBOXPRO3, which was
        the only family older inventories described.
        """
        if value is None:
            return cls.IRNETBOXPRO3
        name = _CONFIG_TYPES.get(value.strip().lower().replace("-", "_"))
        return cls[name] if name else cls.IRNETBOXPRO3

    def __str__(self) -> str:
        return self.scheme
