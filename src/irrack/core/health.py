"""Hub health probe and parsers for the hub's status replies."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from irrack.errors import IRError
from irrack.models.hardware import HardwareKind
from irrack.models.health import HubHealth, RedRatDevice
from irrack.protocol import hub_queries
from irrack.transport.pool import ConnectionPool

if TYPE_CHECKING:
    from irrack.core.remote import RemoteFactory

logger = logging.getLogger(__name__)

REFRESH_KEYSET = "PC_REMOTE"
REFRESH_KEY = "VOLUP"

# [type] (mac) at ip[ (status)]
DEVICE_LINE = re.compile(r"(\[.+\]).+(\(.+\))\sat\s(.+)")
IP_AND_STATUS = re.compile(r"(\S+)\s\((.+)\)")
COMPONENT_VERSION = re.compile(r"(\S+)\s+\((.*)\)")

# query name -> (command builder, reply terminator)
QUERIES = {
    "hub_version": (lambda ip: hub_queries.HUB_VERSION, ")"),
    "keysets": (lambda ip: hub_queries.LIST_DATASETS, "}"),
    "list_redrats": (lambda ip: hub_queries.LIST_REDRATS, "}"),
    "firmware_version": (hub_queries.firmware_version, hub_queries.LINE),
    "hardware_type": (hub_queries.hardware_type, hub_queries.LINE),
}


def parse_device_list(raw: str) -> list[RedRatDevice]:
    """Parse a ``list redrats`` reply, sorted by IP address as text."""
    devices = []
    for line in raw.split("\n"):
        if line.startswith("{") or line.startswith("}"):
            continue
        match = DEVICE_LINE.search(line)
        if match is None:
            continue
        ip = match.group(3)
        status = ""
        with_status = IP_AND_STATUS.fullmatch(ip)
        if with_status is not None:
            ip, status = with_status.group(1), with_status.group(2)
        devices.append(
            RedRatDevice(
                type=match.group(1)[1:-1],
                mac=match.group(2)[1:-1].replace("-", ":"),
                ip=ip,
                status=status,
            )
        )
    return sorted(devices, key=lambda device: device.ip)


def parse_hub_version(raw: str) -> dict[str, str]:
    """``"RedRatHub (V4.28), ..."`` -> ``{"RedRatHub": "V4.28", ...}``."""
    if not raw:
        return {}
    versions = {}
    for component in raw.split(", "):
        match = COMPONENT_VERSION.search(component.strip())
        if match is not None:
            versions[match.group(1)] = match.group(2)
    return versions


def parse_keysets(raw: str) -> list[str]:
    lines = raw.split("\n")
    if len(lines) == 1:
        return []
    return [line.strip() for line in lines[1:-1]]


class HealthProbe:
    """Query the hub for its version, datasets and attached blasters.

    ``process`` is not reentrant; callers must serialise it.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self.pool = pool
        self.health: HubHealth | None = None

    def query(self, name: str, ip: str | None = None) -> str:
        """Run one named status query, returning ``""`` when it fails."""
        if name not in QUERIES:
            logger.warning("Invalid health query %r", name)
            return ""
        build, terminator = QUERIES[name]
        command = build(ip)
        logger.info("Attempting health query %s", name)
        transport = self.pool.get_connection()
        if transport is None:
            logger.error("Could not query hub %s:%d, no connection available", self.pool.host, self.pool.port)
            return ""
        result = ""
        try:
            result = transport.send_command(command, terminator)
        except (IRError, OSError) as exc:
            logger.error("Health query %s on hub %s:%d failed: %s", name, self.pool.host, self.pool.port, exc)
        finally:
            self.pool.release_connection(transport)
        logger.info("Completed health query %s with response [%s]", name, result)
        return result

    def process(self) -> HubHealth:
        health = HubHealth()
        try:
            health.hub_version = parse_hub_version(self.query("hub_version"))
            health.keysets = parse_keysets(self.query("keysets"))
            devices = parse_device_list(self.query("list_redrats"))
            for device in devices:
                if device.connected:
                    device.firmware_version = self.query("firmware_version", device.ip)
                    device.hardware_type = self.query("hardware_type", device.ip)
            health.devices = devices
            health.hub_up = bool(health.hub_version)
        except Exception:
            logger.exception("Hub health probe failed")
            health.hub_up = False
        self.health = health
        return health

    def stats(self) -> dict[str, int]:
        stats = self.pool.stats()
        logger.info("Hub connection pool active [%d] borrows [%d]", stats["active"], stats["borrows"])
        return stats

    def restart(self) -> None:
        self.pool.restart()

    def refresh_disconnected(self, factory: RemoteFactory) -> bool:
        """Press a key on port 1 of every disconnected irNetBox.

        A command to a blaster the hub lost track of makes the hub reconnect
        to it. Returns True when any press went through.
        """
        if self.health is None:
            return False
        refreshed = False
        for device in self.health.devices:
            if device.connected:
                continue
            try:
                remote = factory.get_remote(HardwareKind.IRNETBOXPRO3, device.ip, REFRESH_KEYSET, 1)
                refreshed = remote.press_key(REFRESH_KEY) or refreshed
            except IRError as exc:
                logger.warning("Could not refresh %s: %s", device.ip, exc)
        return refreshed
