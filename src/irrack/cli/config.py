from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from irrack.config import DispatcherConfig, HubConfig, Settings, render_settings_toml, write_settings
from irrack.models.hardware import HardwareKind

from .common import load_settings_or_exit, resolve_config_path_or_exit

app = typer.Typer(no_args_is_help=True, help="Show or create the configuration file")


def _print_inventory(settings: Settings, console: Console) -> None:
    devices = settings.normalized_devices()
    if not devices:
        console.print("Inventory: no IR devices")
        return
    slots = sum(device.max_ports for device in devices)
    console.print(f"Inventory: {len(devices)} devices, {slots} slots")
    for index, device in enumerate(devices, start=1):
        kind = HardwareKind.from_config_type(device.type)
        console.print(f"  {index}. {kind} {device.host} ({kind.transport}, {device.max_ports} ports)")


@app.command("show")
def show_config(
    raw: Annotated[
        bool,
        typer.Option("--raw", help="Print only the TOML, without the expanded inventory"),
    ] = False,
) -> None:
    """Print the effective settings and the device inventory they expand to."""
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    if not raw:
        typer.echo(f"Config source: {path if exists else 'defaults'}")
    typer.echo(render_settings_toml(settings))
    if not raw:
        _print_inventory(settings, Console())


@app.command("init")
def init_config(
    hub: Annotated[
        str | None,
        typer.Option("--hub", help="IR hub host to put in the new config"),
    ] = None,
    api_base: Annotated[
        str | None,
        typer.Option("--dispatcher", help="HTTP dispatcher base URL"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Write a config file with defaults and the given backends."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    if exists and not force:
        typer.echo(f"Config already exists at {path}, use --force to replace it")
        raise typer.Exit(1)

    settings = Settings(hub=HubConfig(host=hub), dispatcher=DispatcherConfig(api_base=api_base))
    write_settings(settings, path)
    typer.echo(f"Wrote config to {path}")
