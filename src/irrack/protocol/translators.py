"""Per-family translation of command leaves into wire commands.

Translators are pure: ``(leaf, address) -> Translation | None``. ``None``
means the family has no representation for the leaf.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

from irrack.models.commands import HoldMode, Leaf, PressKey, PressKeyAndHold
from irrack.models.hardware import HardwareKind

logger = logging.getLogger(__name__)

HUB_EXPECTED = "OK"
HTTP_EXPECTED = "success"


class Translation(NamedTuple):
    command: str
    expected: str


@dataclass(frozen=True)
class DeviceAddress:
    """Addressing context of one port."""

    host: str
    port: int
    name: str | None = None
    module: str | None = None


Translator = Callable[[Leaf, DeviceAddress], "Translation | None"]


def _hub_hold_suffix(leaf: PressKeyAndHold) -> str:
    if leaf.mode is HoldMode.REPEAT:
        return f' repeats="{leaf.count}"'
    return f' duration="{leaf.duration * 1000}"'


def _http_hold_suffix(leaf: PressKeyAndHold) -> str:
    if leaf.mode is HoldMode.REPEAT:
        return f"&repeats={leaf.count}"
    return f"&duration={leaf.duration * 1000}"


def _http_key(key: str) -> str:
    return key.replace(" ", "_").upper()


def irnetbox_translate(leaf: Leaf, address: DeviceAddress) -> Translation | None:
    """Hub command addressed by blaster IP and output number."""
    if not isinstance(leaf, PressKey):
        return None
    command = (
        f'ip="{address.host}" dataset="{leaf.keyset}" '
        f'signal="{leaf.key}" output="{address.port}"'
    )
    if isinstance(leaf, PressKeyAndHold):
        command += _hub_hold_suffix(leaf)
    return Translation(command, HUB_EXPECTED)


def redrat3_translate(leaf: Leaf, address: DeviceAddress) -> Translation | None:
    """Hub command for single-output USB blasters, addressed by name."""
    if not isinstance(leaf, PressKey):
        return None
    name = address.name or address.host
    command = f'name="{name}" dataset="{leaf.keyset}" signal="{leaf.key}"'
    if isinstance(leaf, PressKeyAndHold):
        command += _hub_hold_suffix(leaf)
    return Translation(command, HUB_EXPECTED)


def itach_translate(leaf: Leaf, address: DeviceAddress) -> Translation | None:
    """Dispatcher query addressed by blaster IP and IR port."""
    if not isinstance(leaf, PressKey):
        return None
    query = (
        f"host={address.host}&ir_port_number={address.port}"
        f"&keyset={leaf.keyset.upper()}&key={_http_key(leaf.key)}"
    )
    if isinstance(leaf, PressKeyAndHold):
        query += _http_hold_suffix(leaf)
    return Translation(query, HTTP_EXPECTED)


def gc100_translate(leaf: Leaf, address: DeviceAddress) -> Translation | None:
    """Dispatcher query addressed by GC100 module and connector."""
    if not isinstance(leaf, PressKey):
        return None
    module = address.module or "1"
    query = (
        f"module={module}:{address.port}"
        f"&keyset={leaf.keyset.upper()}&key={_http_key(leaf.key)}"
    )
    if isinstance(leaf, PressKeyAndHold):
        query += _http_hold_suffix(leaf)
    return Translation(query, HTTP_EXPECTED)


TRANSLATORS: dict[HardwareKind, Translator] = {
    HardwareKind.IRNETBOXPRO3: irnetbox_translate,
    HardwareKind.REDRAT3: redrat3_translate,
    HardwareKind.ITACH: itach_translate,
    HardwareKind.GC100: gc100_translate,
    HardwareKind.GC100_6: gc100_translate,
    HardwareKind.GC100_12: gc100_translate,
}


def translator_for(kind: HardwareKind) -> Translator:
    return TRANSLATORS[kind]


def translate(kind: HardwareKind, leaf: Leaf, address: DeviceAddress) -> Translation | None:
    translation = TRANSLATORS[kind](leaf, address)
    logger.debug("Translated %s for %s port %d: %s", leaf.name, kind, address.port, translation)
    return translation
