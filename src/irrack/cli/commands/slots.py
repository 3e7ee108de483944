from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from irrack.config import data_dir_from_settings
from irrack.errors import ConfigurationError
from irrack.storage import SlotStore

from ..common import load_settings_or_exit

app = typer.Typer(no_args_is_help=True, help="Manage rack slot to device/port mappings")


def _store() -> SlotStore:
    return SlotStore(data_dir_from_settings(load_settings_or_exit()))


def _slot_order(slot: str) -> tuple[int, str]:
    return (int(slot), slot) if slot.isdigit() else (0, slot)


@app.command("list")
def list_slots() -> None:
    store = _store()
    mappings = store.load()
    console = Console()

    if not mappings.slots:
        console.print("No slot mappings; slots follow the device inventory order.")
        return

    table = Table()
    table.add_column("Slot", justify="right", style="cyan")
    table.add_column("Device:Port", style="green")
    for slot in sorted(mappings.slots, key=_slot_order):
        table.add_row(slot, mappings.slots[slot])
    console.print(table)


@app.command("set")
def set_slot(
    slot: str = typer.Argument(..., help="Rack slot"),
    mapping: str = typer.Argument(..., help="Target as DEVICE:PORT, both 1-based"),
) -> None:
    """Map SLOT to a device port."""
    try:
        _store().set_mapping(slot, mapping)
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    Console().print(f"[green]✓[/green] Mapped slot {slot} → {mapping}")


@app.command("remove")
def remove_slot(slot: str = typer.Argument(..., help="Rack slot")) -> None:
    console = Console()
    try:
        _store().remove_mapping(slot)
    except KeyError:
        console.print(f"[yellow]![/yellow] Slot '{slot}' not mapped")
        raise typer.Exit(1) from None
    console.print(f"[green]✓[/green] Removed slot '{slot}'")


@app.command("clear")
def clear_slots() -> None:
    _store().clear()
    Console().print("[green]✓[/green] Removed all slot mappings")
