from __future__ import annotations

from typing import Annotated

import typer

from irrack.utils.logging import setup_logging

from . import config as config_cmd
from .commands.devices import register as register_devices
from .commands.health import register as register_health
from .commands.remote import register as register_remote
from .commands.slots import app as slots_app

app = typer.Typer(help="irrack - IR remote control for set-top box racks", no_args_is_help=True)

app.add_typer(config_cmd.app, name="config")
app.add_typer(slots_app, name="slots")

register_devices(app)
register_remote(app)
register_health(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """irrack CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"irrack version {get_version('irrack')}")
        raise typer.Exit()
