from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from irrack.models.health import HealthReport

from ..common import ir_service


def _status(healthy: bool) -> str:
    return "[green]up[/green]" if healthy else "[red]down[/red]"


def _details(report: HealthReport) -> str:
    parts = [f"{key}={value}" for key, value in {**report.version, **report.metadata}.items() if value]
    if report.remarks:
        parts.append(report.remarks)
    return ", ".join(parts)


def health() -> None:
    """Probe the hub and the dispatcher and show device health."""
    console = Console()
    with ir_service() as service:
        if service.probe is None and service.client is None:
            console.print("No hub or dispatcher configured.")
            return
        status = service.health_status()

    console.print(f"Overall: {_status(status.is_healthy)}\n")

    deps = Table(title="Dependencies")
    deps.add_column("Service", style="cyan")
    deps.add_column("Status")
    deps.add_column("Details")
    for report in status.dependencies:
        deps.add_row(report.entity, _status(report.is_healthy), _details(report))
    console.print(deps)

    if status.hw_devices:
        devices = Table(title="IR devices")
        devices.add_column("Type", style="cyan")
        devices.add_column("Host", style="green")
        devices.add_column("Status")
        devices.add_column("Details")
        for report in status.hw_devices:
            devices.add_row(report.entity, report.host or "", _status(report.is_healthy), _details(report))
        console.print(devices)

    if not status.is_healthy:
        raise typer.Exit(2)


def register(app: typer.Typer) -> None:
    app.command()(health)
