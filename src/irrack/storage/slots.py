"""Persistent rack slot to device/port mappings."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from irrack.errors import ConfigurationError

logger = logging.getLogger(__name__)

SLOTS_FILE = "slots.json"


class SlotMappings(BaseModel):
    """``{"<slot>": "<device>:<port>"}``, both 1-based."""

    slots: dict[str, str] = {}


def is_valid_mapping(value: str) -> bool:
    parts = value.split(":")
    if len(parts) != 2:
        return False
    try:
        return int(parts[0]) >= 1 and int(parts[1]) >= 1
    except ValueError:
        return False


def parse_mapping(value: str) -> tuple[int, int]:
    if not is_valid_mapping(value):
        raise ConfigurationError(f"Invalid slot mapping: {value!r}")
    device, port = value.split(":")
    return int(device), int(port)


class SlotStore:
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._path = data_dir / SLOTS_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SlotMappings:
        if not self._path.exists():
            return SlotMappings()
        try:
            with self._path.open() as handle:
                return SlotMappings.model_validate(json.load(handle))
        except (OSError, ValueError, ValidationError) as exc:
            logger.error("Could not read slot mappings %s, using none: %s", self._path, exc)
            return SlotMappings()

    def save(self, mappings: SlotMappings) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        with self._path.open("w") as handle:
            json.dump(mappings.model_dump(mode="json"), handle, indent=2)

    def set_mappings(self, slots: dict[str, str]) -> SlotMappings:
        """Replace all mappings. Nothing is written if any entry is invalid."""
        for slot, value in slots.items():
            if not is_valid_mapping(value):
                raise ConfigurationError(f"Invalid mapping for slot {slot}: {value!r}")
        mappings = SlotMappings(slots=dict(slots))
        self.save(mappings)
        logger.info("Slot mappings replaced (%d slots)", len(slots))
        return mappings

    def set_mapping(self, slot: str, value: str) -> SlotMappings:
        if not is_valid_mapping(value):
            raise ConfigurationError(f"Invalid mapping for slot {slot}: {value!r}")
        mappings = self.load()
        mappings.slots[slot] = value
        self.save(mappings)
        logger.info("Slot %s mapped to %s", slot, value)
        return mappings

    def remove_mapping(self, slot: str) -> SlotMappings:
        mappings = self.load()
        if slot not in mappings.slots:
            raise KeyError(f"Slot {slot} is not mapped")
        del mappings.slots[slot]
        self.save(mappings)
        logger.info("Slot %s mapping removed", slot)
        return mappings

    def clear(self) -> None:
        self.save(SlotMappings())
        logger.info("Slot mappings removed")
