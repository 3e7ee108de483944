"""Health report models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RedRatDevice(BaseModel):
    """IR blaster as listed by the hub."""

    type: str
    mac: str
    ip: str
    status: str = ""
    firmware_version: str | None = None
    hardware_type: str | None = None

    @property
    def connected(self) -> bool:
        return self.status.lower() == "connected"


class HubHealth(BaseModel):
    """Result of one hub health probe."""

    hub_up: bool = False
    hub_version: dict[str, str] = {}
    keysets: list[str] = []
    devices: list[RedRatDevice] = []


class GCHealth(BaseModel):
    model_config = ConfigDict(extra="allow")

    available: bool = False
    errors: list[str] = []


class GCDevice(BaseModel):
    """Network IR blaster as reported by the dispatcher."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    host: str = ""
    port: int | None = None
    version: str | None = None
    active_connections: int | None = Field(default=None, alias="activeConnections")
    modules: list[dict] = []
    gc_health: GCHealth = Field(default_factory=GCHealth, alias="gcHealth")


class Irdb(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    dataset_loaded: bool = Field(default=False, alias="datasetLoaded")
    ir_devices: list[str] = Field(default=[], alias="irDevices")


class DispatcherHealthData(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    gc_devices: list[GCDevice] = Field(default=[], alias="GCDevices")
    irdb: Irdb | None = None


class DispatcherHealth(BaseModel):
    """Body of the dispatcher ``/health`` endpoint."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    is_healthy: bool = Field(default=False, alias="isHealthy")
    result: DispatcherHealthData | None = None


class HealthReport(BaseModel):
    """One line of a service health summary."""

    entity: str
    is_healthy: bool
    host: str | None = None
    device_id: str | None = None
    remarks: str | None = None
    version: dict[str, str | None] = {}
    metadata: dict[str, str | None] = {}


class HealthStatus(BaseModel):
    is_healthy: bool = False
    hw_devices: list[HealthReport] = []
    dependencies: list[HealthReport] = []


def _hub_device_report(device: RedRatDevice) -> HealthReport:
    return HealthReport(
        entity=device.type,
        is_healthy=device.connected,
        host=device.ip,
        version={"firmware": device.firmware_version},
        metadata={"mac": device.mac, "hardwareType": device.hardware_type},
    )


def _gc_device_report(device: GCDevice, index: int) -> HealthReport:
    metadata: dict[str, str | None] = {
        "port": str(device.port),
        "activeConnections": str(device.active_connections),
        "modules": str(len(device.modules)),
    }
    if device.gc_health.errors:
        metadata["errors"] = "; ".join(device.gc_health.errors)
    return HealthReport(
        entity=f"iTach{index}",
        is_healthy=device.gc_health.available,
        host=device.host,
        device_id=str(index),
        version={"firmware": device.version},
        metadata=metadata,
    )


def build_health_status(
    hub: HubHealth | None, dispatcher: DispatcherHealth | None
) -> HealthStatus:
    """Summarise hub and dispatcher health.

    Healthy only when every configured backend is up and every hub device
    reports ``connected``.
    """
    backends = [b.hub_up for b in (hub,) if b is not None]
    backends += [d.is_healthy for d in (dispatcher,) if d is not None]
    status = HealthStatus(is_healthy=bool(backends) and all(backends))

    if hub is not None:
        for device in hub.devices:
            status.hw_devices.append(_hub_device_report(device))
            if not device.connected:
                status.is_healthy = False
        status.dependencies.append(
            HealthReport(entity="RedRatHub", is_healthy=hub.hub_up, version=dict(hub.hub_version))
        )

    if dispatcher is not None:
        report = HealthReport(entity="GC Dispatcher Service", is_healthy=dispatcher.is_healthy)
        if dispatcher.result is None:
            report.remarks = "Did not receive health status from GC dispatcher"
        else:
            for index, device in enumerate(dispatcher.result.gc_devices, start=1):
                status.hw_devices.append(_gc_device_report(device, index))
            if dispatcher.result.irdb is not None:
                report.metadata["irdbDatasetLoaded"] = str(dispatcher.result.irdb.dataset_loaded)
                report.metadata["irDataset"] = ", ".join(dispatcher.result.irdb.ir_devices)
        status.dependencies.append(report)

    return status
