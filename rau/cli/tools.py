"""
The `rau-tools` command.

Companion commands for the main `rau` CLI: listings for shell completion
and an interactive prompt for entering field values.

Usage:
    rau-tools --help
    rau-tools complete configs            # configured table names
    rau-tools complete fields clients     # writable field names
    rau-tools complete records clients    # recent records as id,"name"
    rau-tools shell clients               # interactive key=value prompt
    rau-tools version
"""

import structlog
import typer

from rau import __version__
from rau.cli.commands import completion_app
from rau.cli.commands.completion import run_for_table
from rau.core.config import validate_config_root
from rau.core.exceptions import ApplicationError
from rau.core.logging import setup_logging
from rau.services.resolver import ShowSchema

app = typer.Typer(
    name="rau-tools",
    help="Companion tools for the rau CLI: completion listings and interactive shell.",
    no_args_is_help=True,
    add_completion=False,
)

app.add_typer(completion_app, name="complete")


@app.command()
def shell(
    config: str = typer.Argument(..., help="The name of the configuration to use"),
) -> None:
    """
    Start interactive shell mode.

    Refreshes the schema cache, then checks key=value lines against the
    table's field names.
    """
    from rau.cli.shell import run_shell

    schema = run_for_table(config, lambda service: service.execute(ShowSchema()))
    structlog.contextvars.bind_contextvars(source="shell")
    run_shell(field.name for field in schema)


@app.command()
def version() -> None:
    """
    Display version information.
    """
    typer.echo(__version__)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Companion tools for the rau CLI.
    """
    validate_config_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    try:
        setup_logging(level=log_level)
    except ApplicationError as e:
        typer.secho(e.message, fg="red", err=True)
        raise typer.Exit(1)

    structlog.contextvars.bind_contextvars(source="tools")


def run() -> None:
    """Console script entry point."""
    app()
