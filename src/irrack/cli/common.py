from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from irrack.config import (
    Settings,
    get_settings,
    resolve_config_path,
)
from irrack.errors import IRError
from irrack.service import IRService


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def exit_code_for(exc: IRError) -> int:
    return 1 if exc.http_status < 500 else 2


@contextmanager
def ir_service() -> Iterator[IRService]:
    """Build the service from settings, turning IR failures into exit codes."""
    settings = load_settings_or_exit()
    service = IRService.from_settings(settings)
    try:
        yield service
    except IRError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(exit_code_for(exc)) from exc
    finally:
        service.close()
