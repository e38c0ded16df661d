"""Top-level CLI callback for prtemplate."""

from typing import Optional

import typer

from prtemplate import __version__
from prtemplate.logging import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"prtemplate {__version__}")
        raise typer.Exit()


def main_command(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Resolve and preview pull request description templates."""
    configure_logging(verbose=verbose)
