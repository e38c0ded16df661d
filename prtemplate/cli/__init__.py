"""CLI entry point for prtemplate.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from prtemplate.cli.config import config_app
from prtemplate.cli.main import main_command
from prtemplate.cli.preset import preset_app
from prtemplate.cli.template import describe_command, detect_command, preview_command

# Main application
app = typer.Typer(
    name="prtemplate",
    help="prtemplate: pull request description templates",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(preset_app, name="preset")
app.add_typer(config_app, name="config")

# Add individual commands
app.command("preview")(preview_command)
app.command("describe")(describe_command)
app.command("detect")(detect_command)

app.callback()(main_command)


__all__ = [
    "app",
    "config_app",
    "preset_app",
    "main_command",
    "preview_command",
    "describe_command",
    "detect_command",
]
