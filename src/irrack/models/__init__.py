from __future__ import annotations

from .commands import (
    Delay,
    Group,
    HoldMode,
    Leaf,
    Node,
    PressKey,
    PressKeyAndHold,
    flatten,
    iter_leaves,
    new_group,
)
from .hardware import HardwareKind
from .health import (
    DispatcherHealth,
    GCDevice,
    HealthReport,
    HealthStatus,
    HubHealth,
    RedRatDevice,
    build_health_status,
)

__all__ = [
    "Delay",
    "DispatcherHealth",
    "GCDevice",
    "Group",
    "HardwareKind",
    "HealthReport",
    "HealthStatus",
    "HoldMode",
    "HubHealth",
    "Leaf",
    "Node",
    "PressKey",
    "PressKeyAndHold",
    "RedRatDevice",
    "build_health_status",
    "flatten",
    "iter_leaves",
    "new_group",
]
