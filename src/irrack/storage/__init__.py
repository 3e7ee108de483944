from __future__ import annotations

from .slots import SlotMappings, SlotStore, is_valid_mapping, parse_mapping

__all__ = ["SlotMappings", "SlotStore", "is_valid_mapping", "parse_mapping"]
