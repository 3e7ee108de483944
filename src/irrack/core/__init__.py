from __future__ import annotations

from .device import Device, Port, SendResult
from .dispatch import HttpSender, HubSender, RetryPolicy, Sender
from .health import HealthProbe
from .registry import DeviceRegistry
from .remote import Remote, RemoteFactory
from .slots import SlotResolver

__all__ = [
    "Device",
    "DeviceRegistry",
    "HealthProbe",
    "HttpSender",
    "HubSender",
    "Port",
    "Remote",
    "RemoteFactory",
    "RetryPolicy",
    "Sender",
    "SendResult",
    "SlotResolver",
]
