"""
Shell Completion Commands.

Plain one-item-per-line listings that completion specs and shell
scripts can consume: configuration names, writable fields, and recent
records as `<id>,"<name>"`.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
import typer

from rau.cli.client import AirtableClient
from rau.cli.main import build_service
from rau.core.config import get_app_config, get_credential, require_table
from rau.core.exceptions import ApplicationError
from rau.services.records import RecordService
from rau.services.resolver import ShowRecentRecords, ShowWritableFields

app = typer.Typer(help="Listings for shell completion")

T = TypeVar("T")


def run_for_table(config: str, operation: Callable[[RecordService], Awaitable[T]]) -> T:
    """
    Resolve a configuration and run one service operation against it.

    Failures are printed to stderr and end the command with exit code 1.
    """

    async def _run() -> T:
        async with AirtableClient(api_key=get_credential()) as client:
            return await operation(build_service(client, table))

    try:
        table = require_table(config)
        return asyncio.run(_run())
    except ApplicationError as e:
        typer.secho(e.message, fg="red", err=True)
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        typer.secho(f"Error: request failed: {e}", fg="red", err=True)
        raise typer.Exit(1)


@app.command()
def configs() -> None:
    """
    List configured table names.

    Examples:
        rau-tools complete configs
    """
    try:
        names = get_app_config().config_names()
    except ApplicationError as e:
        typer.secho(e.message, fg="red", err=True)
        raise typer.Exit(1)

    for name in names:
        typer.echo(name)


@app.command()
def fields(
    config: str = typer.Argument(..., help="The name of the configuration to use"),
) -> None:
    """
    List the writable fields of a table.

    Examples:
        rau-tools complete fields clients
    """
    for name in run_for_table(config, lambda service: service.execute(ShowWritableFields())):
        typer.echo(name)


@app.command()
def records(
    config: str = typer.Argument(..., help="The name of the configuration to use"),
) -> None:
    """
    List recent records as id,"name" lines.

    Examples:
        rau-tools complete records clients
    """

    async def _recent(service: RecordService) -> list[tuple[str, str]]:
        recent = get_app_config().application.recent
        return await service.execute(ShowRecentRecords(page_size=recent.page_size, view=recent.view))

    for record_id, name in run_for_table(config, _recent):
        typer.echo(f'{record_id},"{name}"')
