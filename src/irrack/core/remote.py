"""Remote-control operations on one device port."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Iterable

from irrack.core.device import Port
from irrack.core.registry import DeviceRegistry
from irrack.errors import InvalidArgumentError
from irrack.models.commands import Delay, HoldMode, Node, PressKey, PressKeyAndHold, new_group
from irrack.models.hardware import HardwareKind

logger = logging.getLogger(__name__)

MAX_DELAY = 30000
DELAY_BETWEEN_KEYS = 100
TEXT_KEY_DELAY = 500
SELECT_KEY = "SELECT"

CHANNEL_PATTERN = re.compile(r"\d{1,4}")

DIGIT_KEYS = {
    "0": "ZERO",
    "1": "ONE",
    "2": "TWO",
    "3": "THREE",
    "4": "FOUR",
    "5": "FIVE",
    "6": "SIX",
    "7": "SEVEN",
    "8": "EIGHT",
    "9": "NINE",
}

SHORTHAND_KEYS = {
    **DIGIT_KEYS,
    "U": "UP",
    "D": "DOWN",
    "L": "LEFT",
    "R": "RIGHT",
    "M": "MENU",
    "G": "GUIDE",
    "X": "EXIT",
    "S": "SEARCH",
    "I": "INFO",
    "O": "OK",
    "P": "PLAY",
    "C": "REC",
    "[": "CHDN",
    "]": "CHUP",
    "<": "PGDN",
    ">": "PGUP",
    "~": "LAST",
    "!": "MUTE",
    "a": "A",
    "b": "B",
    "c": "C",
    "d": "D",
}


def verify_delay(delay: int) -> int:
    if delay < 0 or delay > MAX_DELAY:
        raise InvalidArgumentError(f"Remote delay must be between 0 and {MAX_DELAY}ms, got {delay}")
    return delay


def channel_keys(channel: str | int) -> list[str]:
    """Key names for a 1-4 digit channel number."""
    text = str(channel).strip()
    if not CHANNEL_PATTERN.fullmatch(text):
        raise InvalidArgumentError(f"Invalid channel number: {channel!r}")
    return [DIGIT_KEYS[digit] for digit in text]


def shorthand_keys(text: str) -> list[str]:
    """Key names for a shorthand sequence such as ``"MDDO"``; unknown characters are skipped."""
    return [SHORTHAND_KEYS[char] for char in text if char in SHORTHAND_KEYS]


def _sleep_ms(ms: int) -> None:
    if ms > 0:
        time.sleep(ms / 1000)


class Remote:
    """Press keys on the set-top box wired to ``port``.

    Every operation returns True once the whole command went out and raises
    the matching :class:`irrack.errors.IRError` otherwise. With a non-zero
    ``delay`` the remote pauses that many milliseconds after each operation.
    """

    def __init__(self, port: Port, keyset: str, delay: int = 0, auto_tune: bool = False) -> None:
        self.port = port
        self.keyset = keyset
        self.delay = delay
        self.auto_tune = auto_tune

    @property
    def keyset(self) -> str:
        return self._keyset

    @keyset.setter
    def keyset(self, value: str) -> None:
        if not value:
            raise InvalidArgumentError("Keyset cannot be empty")
        self._keyset = value

    @property
    def delay(self) -> int:
        return self._delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._delay = verify_delay(value)

    def _send(self, tree: Node) -> bool:
        logger.info("%r keyset %s: %s", self.port, self.keyset, tree)
        self.port.send(tree).raise_for_error()
        _sleep_ms(self._delay)
        return True

    def _press(self, key: str | None) -> PressKey:
        if not key:
            raise InvalidArgumentError("Key cannot be empty")
        return PressKey(key, self.keyset)

    def press_key(self, key: str | int, delay: int | None = None) -> bool:
        if delay is not None:
            verify_delay(delay)
        self._send(self._press(str(key)))
        _sleep_ms(delay or 0)
        return True

    def press_key_times(self, count: int, key: str, delay: int | None = None) -> bool:
        """Press ``key`` ``count`` times, each as its own command."""
        for _ in range(count):
            self.press_key(key, delay)
        return True

    def press_keys(self, keys: Iterable[str], delay: int = 0) -> bool:
        """Send ``keys`` as one command, ``delay`` ms after every key."""
        verify_delay(delay)
        group = new_group("PressKeys")
        for key in keys:
            group.add(self._press(key)).add(Delay(delay))
        if not group.children:
            raise InvalidArgumentError("No keys to press")
        return self._send(group)

    def press_keys_times(self, count: int, keys: list[str], delay: int = 0) -> bool:
        """Send the batch ``keys`` ``count`` times, one command per batch.

        The trailing ``delay`` of each batch separates it from the next.
        """
        verify_delay(delay)
        for _ in range(count):
            self.press_keys(keys, delay)
        return True

    def press_key_and_hold(self, key: str, count: int) -> bool:
        self._press(key)
        return self._send(PressKeyAndHold(key, self.keyset, count, HoldMode.REPEAT))

    def press_key_and_hold_duration(self, key: str, seconds: int) -> bool:
        self._press(key)
        return self._send(PressKeyAndHold(key, self.keyset, seconds, HoldMode.DURATION))

    def tune(self, channel: str | int, delay: int = DELAY_BETWEEN_KEYS) -> bool:
        """Enter ``channel`` digit by digit, followed by SELECT unless auto-tune is on."""
        keys = channel_keys(channel)
        if not self.auto_tune:
            keys.append(SELECT_KEY)
        return self.press_keys(keys, delay)

    def send_text(self, text: str) -> bool:
        """Type ``text`` one character per key press."""
        if not text:
            raise InvalidArgumentError("Text cannot be empty")
        return self.press_keys(list(text), TEXT_KEY_DELAY)

    def shorthand(self, text: str, delay: int = DELAY_BETWEEN_KEYS) -> bool:
        keys = shorthand_keys(text)
        if not keys:
            raise InvalidArgumentError(f"No known shorthand keys in {text!r}")
        return self.press_keys(keys, delay)


class RemoteFactory:
    """Resolve a device port through the registry and wrap it in a :class:`Remote`."""

    def __init__(self, registry: DeviceRegistry) -> None:
        self.registry = registry

    def get_remote(
        self,
        kind: HardwareKind,
        host: str,
        keyset: str,
        port: int,
        name: str | None = None,
        module: str | None = None,
    ) -> Remote:
        device = self.registry.get_device(kind, host, name=name, module=module)
        return Remote(device.port(port), keyset)
