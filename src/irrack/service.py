"""Wire configured backends into a ready-to-use IR service."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from irrack.config import Settings, data_dir_from_settings
from irrack.core.dispatch import HttpSender, HubSender, RetryPolicy
from irrack.core.health import HealthProbe
from irrack.core.registry import DeviceRegistry
from irrack.core.remote import RemoteFactory
from irrack.core.slots import SlotResolver
from irrack.models.hardware import HardwareKind
from irrack.models.health import DispatcherHealth, HealthStatus, HubHealth, build_health_status
from irrack.protocol import hub_queries
from irrack.storage import SlotStore
from irrack.transport.http import DispatcherClient
from irrack.transport.pool import ConnectionPool

logger = logging.getLogger(__name__)


@dataclass
class Dependencies:
    hub: bool = False
    dispatcher: bool = False


@dataclass
class IRService:
    settings: Settings
    registry: DeviceRegistry
    factory: RemoteFactory
    store: SlotStore
    resolver: SlotResolver
    pool: ConnectionPool | None = None
    client: DispatcherClient | None = None
    probe: HealthProbe | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> IRService:
        pool = None
        hub_sender = None
        hub = settings.hub
        if hub.host:
            pool = ConnectionPool(
                hub.host,
                port=hub.port,
                size=hub.pool_size,
                wait=hub.pool_wait,
                read_timeout=hub.read_timeout,
            )
            hub_sender = HubSender(pool, RetryPolicy(hub.retries, hub.retry_backoff))

        client = None
        http_sender = None
        if settings.dispatcher.api_base:
            client = DispatcherClient(settings.dispatcher.api_base, settings.dispatcher.timeout)
            http_sender = HttpSender(client)

        announce = None
        if hub_sender is not None:
            sender = hub_sender

            def announce(ip: str) -> object:
                return sender.send(hub_queries.add_irnetbox(ip), "OK")

        registry = DeviceRegistry(hub_sender=hub_sender, http_sender=http_sender, announce=announce)
        factory = RemoteFactory(registry)
        store = SlotStore(data_dir_from_settings(settings))
        resolver = SlotResolver(settings.normalized_devices(), store, factory)
        probe = HealthProbe(pool) if pool is not None else None
        return cls(settings, registry, factory, store, resolver, pool, client, probe)

    def dependencies(self) -> Dependencies:
        deps = Dependencies(hub=bool(self.settings.hub.host and self.settings.hub.port))
        for device in self.settings.devices:
            if HardwareKind.from_config_type(device.type).transport == "http":
                deps.dispatcher = True
        return deps

    def hub_health(self) -> HubHealth | None:
        if self.probe is None:
            return None
        return self.probe.process()

    def dispatcher_health(self) -> DispatcherHealth | None:
        if self.client is not None:
            return self.client.health()
        if self.dependencies().dispatcher:
            logger.error("Inventory lists dispatcher devices but no dispatcher api_base is configured")
            return DispatcherHealth()
        return None

    def health_status(self) -> HealthStatus:
        return build_health_status(self.hub_health(), self.dispatcher_health())

    def close(self) -> None:
        self.registry.clear()
        if self.pool is not None:
            self.pool.close()
