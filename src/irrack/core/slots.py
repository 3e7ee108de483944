"""Map rack slots onto device ports."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from irrack.config.settings import DeviceConfig
from irrack.core.remote import Remote, RemoteFactory
from irrack.errors import ConfigurationError
from irrack.models.hardware import HardwareKind
from irrack.storage.slots import SlotStore, parse_mapping

logger = logging.getLogger(__name__)


def _as_int(value: str | int, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid {what}: {value!r}") from None


class SlotResolver:
    """Resolve 1-based rack slots to ``(device, port)`` pairs, both 1-based.

    Explicit mappings win whenever any exist. Without them, slots are laid
    out device after device in inventory order, each device taking as many
    slots as it has ports.
    """

    def __init__(self, inventory: Sequence[DeviceConfig], mappings: SlotStore, factory: RemoteFactory) -> None:
        self.inventory = list(inventory)
        self.mappings = mappings
        self.factory = factory

    def resolve(self, slot: str | int) -> tuple[int, int]:
        slots = self.mappings.load().slots
        if slots:
            value = slots.get(str(slot))
            if value is None:
                raise ConfigurationError(f"Slot {slot} is not mapped")
            return parse_mapping(value)

        offset = _as_int(slot, "slot")
        if offset < 1:
            raise ConfigurationError(f"Invalid slot: {slot}")
        for device_id, device in enumerate(self.inventory, start=1):
            if offset <= device.max_ports:
                return device_id, offset
            offset -= device.max_ports
        raise ConfigurationError(f"Couldn't find the device/port for slot {slot}")

    def validate_slot(self, slot: str | int) -> bool:
        try:
            self.resolve(slot)
        except ConfigurationError:
            return False
        return True

    def validate_device(self, device: str | int) -> bool:
        return 1 <= _as_int(device, "device") <= len(self.inventory)

    def device_has_port(self, device: str | int, port: str | int) -> bool:
        if not self.validate_device(device):
            return False
        return 1 <= _as_int(port, "port") <= self.max_ports_of(device)

    def max_ports_of(self, device: str | int) -> int:
        if not self.validate_device(device):
            return 0
        return self.inventory[_as_int(device, "device") - 1].max_ports

    def num_slots(self) -> int:
        return sum(device.max_ports for device in self.inventory)

    def num_devices(self) -> int:
        return len(self.inventory)

    def get_remote(self, slot: str | int, keyset: str) -> Remote:
        if not self.inventory:
            raise ConfigurationError("No IR devices in config")
        device_id, port = self.resolve(slot)
        return self.get_remote_for(device_id, port, keyset)

    def get_remote_for(self, device_id: int, port: int, keyset: str) -> Remote:
        if device_id < 1 or device_id > len(self.inventory):
            raise ConfigurationError(
                f"Requested device[{device_id}] > size[{len(self.inventory)}] Invalid"
            )
        device = self.inventory[device_id - 1]
        kind = HardwareKind.from_config_type(device.type)
        logger.debug("Device %d port %d -> %s %s", device_id, port, kind, device.host)
        return self.factory.get_remote(kind, device.host, keyset, port, name=device.name, module=device.module)
