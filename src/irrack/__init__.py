"""irrack - drive IR blasters in a set-top box rack from one place."""

from __future__ import annotations

from importlib.metadata import version

from .config import Settings, get_settings
from .core import Device, DeviceRegistry, Port, Remote, RemoteFactory, SlotResolver
from .errors import IRError
from .models import HardwareKind, PressKey, PressKeyAndHold, new_group
from .service import IRService

__all__ = [
    "Device",
    "DeviceRegistry",
    "HardwareKind",
    "IRError",
    "IRService",
    "Port",
    "PressKey",
    "PressKeyAndHold",
    "Remote",
    "RemoteFactory",
    "Settings",
    "SlotResolver",
    "__version__",
    "get_settings",
    "new_group",
]

__version__ = version("irrack")
