from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from irrack.models.hardware import HardwareKind

from ..common import load_settings_or_exit


def list_devices() -> None:
    """List the IR device inventory and the rack slots it covers."""
    settings = load_settings_or_exit()
    devices = settings.normalized_devices()

    console = Console()

    if not devices:
        console.print("No IR devices configured.")
        console.print("Add [[devices]] entries to the config file (see 'irrack config show').")
        return

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Host", style="green")
    table.add_column("Ports", justify="right")
    table.add_column("Slots")
    table.add_column("Name")

    first = 1
    for index, device in enumerate(devices, start=1):
        kind = HardwareKind.from_config_type(device.type)
        last = first + device.max_ports - 1
        table.add_row(
            str(index),
            str(kind),
            device.host,
            str(device.max_ports),
            f"{first}-{last}",
            device.name or "",
        )
        first = last + 1

    console.print(table)


def register(app: typer.Typer) -> None:
    app.command("devices")(list_devices)
