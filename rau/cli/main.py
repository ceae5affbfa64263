"""
The `rau` command.

Positional arguments select the record and fields; flags select the
metadata views. See rau.services.resolver for the precedence rules.

Examples:
    rau clients rec123 Status=Active Score=5
    rau clients rec123 Name Status
    rau clients --recent
"""

import asyncio
import json
from typing import Any, Optional

import httpx
import structlog
import typer

from rau.cli.client import AirtableClient
from rau.core.config import (
    get_app_config,
    get_credential,
    require_table,
    validate_config_root,
)
from rau.core.exceptions import ApplicationError, RemoteError
from rau.core.logging import get_logger, setup_logging
from rau.schemas.airtable import FieldDef, Record, TableRef
from rau.services.records import RecordService
from rau.services.resolver import (
    CommandRequest,
    CreateBlankRecord,
    Intent,
    ResolverOptions,
    ShowRecentRecords,
    ShowSchema,
    ShowWritableFields,
    UpdateFields,
    resolve,
)
from rau.services.schema_cache import SchemaCache, cache_path_for

app = typer.Typer(
    name="rau",
    help="Update or query Airtable records from the CLI.",
    add_completion=False,
)


def _log_level(verbose: bool, debug: bool) -> str:
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return "WARNING"


def _fail(message: str) -> None:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(1)


def build_service(client: AirtableClient, table: TableRef) -> RecordService:
    """Wire a RecordService with the configured schema cache location."""
    cache_settings = get_app_config().application.cache
    path = cache_path_for(table, cache_settings.filename, per_table=cache_settings.per_table)
    return RecordService(client, table, SchemaCache(path))


def render(intent: Intent, result: Any) -> None:
    """Print the result of an intent."""
    if isinstance(intent, ShowSchema):
        fields: list[FieldDef] = result
        typer.echo(json.dumps(
            [{"name": f.name, "type": f.type} for f in fields],
            indent=2,
            ensure_ascii=False,
        ))
    elif isinstance(intent, ShowWritableFields):
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
    elif isinstance(intent, ShowRecentRecords):
        for record_id, name in result:
            typer.echo(f"ID: {record_id}, Name: {name}")
    elif isinstance(intent, UpdateFields):
        typer.echo("Updated Record")
    elif isinstance(intent, CreateBlankRecord):
        record: Record = result
        typer.echo("Created Record ID", err=True)
        typer.echo(record.id)
    else:
        for name, text in result:
            typer.echo(f"{name}: {text}")


async def _execute(table: TableRef, intent: Intent) -> None:
    async with AirtableClient(api_key=get_credential()) as client:
        service = build_service(client, table)
        result = await service.execute(intent)
    render(intent, result)


@app.command()
def main(
    config: str = typer.Argument(..., help="The name of the configuration to use"),
    record_id: Optional[str] = typer.Argument(
        None, help="The ID of the record to update or query"
    ),
    tokens: Optional[list[str]] = typer.Argument(
        None,
        metavar="[FIELDS]...",
        help="Fields to update in key=value format or fields to query for their values",
    ),
    schema: bool = typer.Option(False, "--schema", "-s", help="Output the schema"),
    fields: bool = typer.Option(False, "--fields", "-f", help="Output the writable fields"),
    recent: bool = typer.Option(
        False, "--recent", "-r", help="Output the most recent record IDs and their names"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output (INFO level logging)"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output (DEBUG level logging)"),
) -> None:
    """
    Update or query Airtable records.

    \b
    Examples:
        rau clients                        create a blank record
        rau clients rec123                 show a record
        rau clients rec123 Name Status     show selected fields
        rau clients rec123 Score=5         update fields
        rau clients --fields               list writable fields
    """
    validate_config_root()

    try:
        setup_logging(level=_log_level(verbose, debug))
    except ApplicationError as e:
        _fail(e.message)

    structlog.contextvars.bind_contextvars(source="cli")
    logger = get_logger(__name__)

    request = CommandRequest(
        record_id=record_id,
        tokens=tuple(tokens or ()),
        schema=schema,
        fields=fields,
        recent=recent,
    )
    logger.debug("CLI invoked", config=config, request=repr(request))

    try:
        table = require_table(config)
        recent_settings = get_app_config().application.recent
        intent = resolve(
            request,
            ResolverOptions(page_size=recent_settings.page_size, view=recent_settings.view),
        )
        logger.debug("Intent resolved", intent=type(intent).__name__)
        asyncio.run(_execute(table, intent))
    except RemoteError as e:
        logger.error("Request rejected", operation=e.operation, status_code=e.status_code)
        _fail(e.message)
    except ApplicationError as e:
        logger.debug("Command failed", code=e.code)
        _fail(e.message)
    except httpx.HTTPError as e:
        _fail(f"Error: request failed: {e}")


def run() -> None:
    """Console script entry point."""
    app()
