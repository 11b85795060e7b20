"""Typer-based command line interface for sshlease."""
from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import click
import structlog
import typer

from .backend import Backend
from .config import AppConfig, dump_default_config, load_config
from .errors import LeaseStoreError
from .lease import CONFIG_LEASE_KEY
from .logging import configure_logging
from .storage import Storage, open_storage

app = typer.Typer(help="Manage the lease configuration for dynamic SSH keys")
logger = structlog.get_logger(__name__)

_EXIT_CLIENT_FAULT = 1
_EXIT_SERVER_FAULT = 2


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    try:
        ctx.obj = load_config(config)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=_EXIT_SERVER_FAULT) from exc
    configure_logging(ctx.obj.logging.normalized_level(), json_output=ctx.obj.logging.json_output)


def _context() -> tuple[Backend, Storage]:
    config: AppConfig = click.get_current_context().obj
    try:
        storage = open_storage(config)
    except LeaseStoreError as exc:
        _server_fault(exc)
    return Backend(config), storage


def _server_fault(exc: LeaseStoreError) -> NoReturn:
    logger.error("server_fault", error=str(exc), exc_info=exc)
    typer.echo(f"Internal error: {exc}", err=True)
    raise typer.Exit(code=_EXIT_SERVER_FAULT) from exc


@app.command()
def write(
    lease: str = typer.Option("", "--lease", help="Default lease, e.g. 1h"),
    lease_max: str = typer.Option("", "--lease-max", help="Maximum lease, e.g. 24h"),
) -> None:
    """Validate and store the lease configuration."""
    backend, storage = _context()
    try:
        response = backend.write(storage, CONFIG_LEASE_KEY, {"lease": lease, "lease_max": lease_max})
    except LeaseStoreError as exc:
        _server_fault(exc)
    if response is not None and response.is_error():
        typer.echo(response.error, err=True)
        raise typer.Exit(code=_EXIT_CLIENT_FAULT)
    typer.echo(f"Success! Data written to: {CONFIG_LEASE_KEY}")


@app.command()
def show() -> None:
    """Print the stored lease configuration as JSON."""
    backend, storage = _context()
    try:
        current = backend.lease(storage)
    except LeaseStoreError as exc:
        _server_fault(exc)
    if current is None:
        typer.echo("unconfigured")
        return
    typer.echo(json.dumps(current.as_dict(), ensure_ascii=False, indent=2))


@app.command("path-help")
def path_help() -> None:
    """Describe the config/lease path and its fields."""
    config: AppConfig = click.get_current_context().obj
    response = Backend(config).help(CONFIG_LEASE_KEY)
    typer.echo(json.dumps(response.data, ensure_ascii=False, indent=2))


@app.command("init-config")
def init_config(target: Path = typer.Argument(..., help="Where to write the default configuration")) -> None:
    """Write the default configuration as YAML."""
    dump_default_config(target)
    typer.echo(f"Default configuration written to {target}")


@app.command()
def version() -> None:
    from .version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
