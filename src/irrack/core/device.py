"""IR devices and their output ports."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

from irrack.core.dispatch import Sender
from irrack.errors import ConfigurationError, InvalidArgumentError, IRError, ProtocolError
from irrack.models.commands import Delay, Leaf, Node, flatten
from irrack.models.hardware import HardwareKind
from irrack.protocol.translators import DeviceAddress, Translation, translator_for

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    """Outcome of sending one command tree."""

    ok: bool
    error: IRError | None = None
    sent: int = 0  # leaves completed before the outcome was decided

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class Port:
    """One IR output of a device. At most one command runs on it at a time."""

    def __init__(self, device: Device, number: int) -> None:
        self.device = device
        self.number = number
        self._lock = threading.Lock()

    @property
    def address(self) -> DeviceAddress:
        return DeviceAddress(
            host=self.device.host,
            port=self.number,
            name=self.device.name,
            module=self.device.module,
        )

    def translate(self, leaf: Leaf) -> Translation | None:
        return self.device.translator(leaf, self.address)

    def send(self, tree: Node | None) -> SendResult:
        """Run every leaf of ``tree`` in order on this port.

        The first failing leaf stops the run; leaves already sent stay sent.
        """
        if tree is None:
            return SendResult(ok=False, error=InvalidArgumentError("Command is None"))

        leaves = flatten(tree)
        logger.debug("send() %s: %d leaves on %r", getattr(tree, "name", tree), len(leaves), self)
        with self._lock:
            sent = 0
            for leaf in leaves:
                try:
                    self._execute(leaf)
                except IRError as exc:
                    logger.warning("IR operation on %r failed at %s: %s", self, leaf, exc)
                    return SendResult(ok=False, error=exc, sent=sent)
                sent += 1
        return SendResult(ok=True, sent=sent)

    def _execute(self, leaf: Leaf) -> None:
        if isinstance(leaf, Delay):
            logger.debug("Delay %dms on %r", leaf.ms, self)
            time.sleep(leaf.ms / 1000)
            return

        translation = self.translate(leaf)
        if translation is None:
            raise ProtocolError(f"unsupported command {leaf!r} for {self.device.kind}")
        self.device.sender.send(translation.command, translation.expected)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Port):
            return NotImplemented
        return self.device == other.device and self.number == other.number

    def __hash__(self) -> int:
        return hash((self.device.id, self.number))

    def __repr__(self) -> str:
        return f"Port({self.device.id}:{self.number})"


class Device:
    """IR blaster of one hardware family, owning ``kind.max_ports`` ports."""

    def __init__(
        self,
        kind: HardwareKind,
        host: str,
        sender: Sender,
        name: str | None = None,
        module: str | None = None,
        device_id: str | None = None,
    ) -> None:
        self.kind = kind
        self.host = host
        self.name = name
        self.module = module
        self.sender = sender
        self.id = device_id or name or host
        self.translator = translator_for(kind)
        self.ports = tuple(Port(self, number) for number in range(1, kind.max_ports + 1))

    def get_port(self, number: int) -> Port | None:
        for port in self.ports:
            if port.number == number:
                return port
        logger.debug("No port %s on %r", number, self)
        return None

    def port(self, number: int) -> Port:
        port = self.get_port(number)
        if port is None:
            raise ConfigurationError(
                f"Port {number} out of range for {self.kind} device {self.id} "
                f"(1-{self.kind.max_ports})"
            )
        return port

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Device({self.kind}, {self.id})"
