"""Process-level cache of IR devices."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from irrack.core.device import Device
from irrack.core.dispatch import Sender
from irrack.errors import ConfigurationError, IRError
from irrack.models.hardware import HardwareKind

logger = logging.getLogger(__name__)

DEFAULT_REDRAT3_NAME = "No name 9130"


class DeviceRegistry:
    """Create each device once per (kind, host) and hand out the cached one.

    Named single-port USB blasters are cached under their name, so several
    of them can sit behind one host.

    ``announce`` is called with the IP of every new network blaster that the
    hub has to be told about; failures there are logged and ignored.
    """

    def __init__(
        self,
        hub_sender: Sender | None = None,
        http_sender: Sender | None = None,
        announce: Callable[[str], object] | None = None,
    ) -> None:
        self._senders: dict[str, Sender | None] = {"hub": hub_sender, "http": http_sender}
        self._announce = announce
        self._devices: dict[tuple[HardwareKind, str], Device] = {}
        self._lock = threading.Lock()

    def _lookup(self, kind: HardwareKind, host: str, name: str | None) -> Device | None:
        device = None
        if name:
            device = self._devices.get((kind, name))
        if device is None:
            device = self._devices.get((kind, host))
        return device

    def get_device(
        self,
        kind: HardwareKind,
        host: str,
        name: str | None = None,
        module: str | None = None,
    ) -> Device:
        device = self._lookup(kind, host, name)
        if device is not None:
            return device

        with self._lock:
            device = self._lookup(kind, host, name)
            if device is not None:
                return device
            sender = self._senders[kind.transport]
            if sender is None:
                raise ConfigurationError(
                    f"No {kind.transport} backend configured for {kind} device {host}"
                )
            if kind is HardwareKind.REDRAT3:
                device = Device(
                    kind,
                    host,
                    sender,
                    name=name or DEFAULT_REDRAT3_NAME,
                    device_id=name or host,
                )
                key = (kind, name or host)
            else:
                device = Device(kind, host, sender, module=module)
                key = (kind, host)
            self._devices[key] = device
            logger.info("Instantiated %s device: %s", kind, device.id)

        if kind is HardwareKind.IRNETBOXPRO3 and self._announce is not None:
            try:
                self._announce(host)
            except IRError as exc:
                logger.error("Could not register %s with the hub: %s", host, exc)
        return device

    def devices(self) -> list[Device]:
        return list(self._devices.values())

    def clear(self) -> None:
        with self._lock:
            self._devices.clear()
