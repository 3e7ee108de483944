from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from ..common import ir_service

KeysetOption = Annotated[str, typer.Option("--keyset", "-k", help="Remote key set, e.g. COMCAST")]
SlotArgument = Annotated[str, typer.Argument(help="Rack slot (1-based)")]


def press(
    slot: SlotArgument,
    keys: Annotated[list[str], typer.Argument(help="Keys to press, in order")],
    keyset: KeysetOption,
    delay: Annotated[int, typer.Option("--delay", "-d", help="Milliseconds after each key")] = 0,
) -> None:
    """Press one or more keys on the box in SLOT."""
    with ir_service() as service:
        remote = service.resolver.get_remote(slot, keyset)
        if len(keys) == 1:
            remote.press_key(keys[0], delay)
        else:
            remote.press_keys(keys, delay)
    Console().print(f"[green]✓[/green] Slot {slot}: {' '.join(keys)}")


def hold(
    slot: SlotArgument,
    key: Annotated[str, typer.Argument(help="Key to hold")],
    keyset: KeysetOption,
    count: Annotated[int | None, typer.Option("--count", "-c", help="Repeat count")] = None,
    seconds: Annotated[int | None, typer.Option("--seconds", "-s", help="Hold duration")] = None,
) -> None:
    """Hold KEY for a number of repeats or seconds."""
    if (count is None) == (seconds is None):
        typer.echo("Give exactly one of --count or --seconds", err=True)
        raise typer.Exit(1)
    with ir_service() as service:
        remote = service.resolver.get_remote(slot, keyset)
        if count is not None:
            remote.press_key_and_hold(key, count)
        else:
            remote.press_key_and_hold_duration(key, seconds)
    Console().print(f"[green]✓[/green] Slot {slot}: held {key}")


def tune(
    slot: SlotArgument,
    channel: Annotated[str, typer.Argument(help="Channel number, 1-4 digits")],
    keyset: KeysetOption,
) -> None:
    """Tune the box in SLOT to CHANNEL."""
    with ir_service() as service:
        service.resolver.get_remote(slot, keyset).tune(channel)
    Console().print(f"[green]✓[/green] Slot {slot}: tuned to {channel}")


def text(
    slot: SlotArgument,
    value: Annotated[str, typer.Argument(metavar="TEXT", help="Text to type")],
    keyset: KeysetOption,
) -> None:
    """Type TEXT one character at a time."""
    with ir_service() as service:
        service.resolver.get_remote(slot, keyset).send_text(value)
    Console().print(f"[green]✓[/green] Slot {slot}: sent text")


def register(app: typer.Typer) -> None:
    app.command()(press)
    app.command()(hold)
    app.command()(tune)
    app.command()(text)
