"""Shared helpers for prtemplate CLI commands."""

import re
from pathlib import Path
from typing import Optional

import typer

from prtemplate.changeset import ChangeSet, ChangeSetError, collect_tickets, load_changeset
from prtemplate.config import TemplateConfig
from prtemplate.models import ResolvedTemplate
from prtemplate.presets import PRESET_NAMES, is_valid_preset
from prtemplate.resolver import ResolveOptions, resolve_template


def validate_preset(preset: Optional[str]) -> Optional[str]:
    """Validate a --preset value, exiting with an error if unknown."""
    if preset is None:
        return None
    if not is_valid_preset(preset.lower()):
        typer.echo(f"Invalid preset: {preset}", err=True)
        typer.echo(f"Valid presets: {', '.join(PRESET_NAMES)}")
        raise typer.Exit(1)
    return preset.lower()


def resolve_for_cli(
    repo: Path,
    config: TemplateConfig,
    preset: Optional[str] = None,
    no_repo_template: bool = False,
) -> ResolvedTemplate:
    """Resolve the template, letting command-line options override config.

    A preset given on the command line takes precedence over a committed
    repo template.
    """
    options = config.resolve_options()
    if preset:
        options = ResolveOptions(detect_repo_template=False, preset=preset)
    elif no_repo_template:
        options.detect_repo_template = False
    return resolve_template(repo, options, config.detection)


def load_changeset_for_cli(changes: Optional[Path], config: TemplateConfig) -> ChangeSet:
    """Load a change-set file and fill in tickets and link format from config.

    Args:
        changes: Path to a YAML/JSON change-set, or None for an empty one.
        config: Repository template configuration.

    Returns:
        A new ChangeSet; the loaded one is not modified.
    """
    if changes is None:
        changeset = ChangeSet()
    else:
        try:
            changeset = load_changeset(changes)
        except ChangeSetError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    try:
        tickets = collect_tickets(
            changeset.branch,
            changeset.commits,
            pattern=config.ticket_pattern,
            existing=changeset.tickets,
        )
    except re.error as e:
        typer.echo(f"Error: invalid ticket pattern {config.ticket_pattern!r}: {e}", err=True)
        raise typer.Exit(1)

    return changeset.model_copy(update={
        "tickets": tickets,
        "ticket_link_format": changeset.ticket_link_format or config.ticket_link_format,
    })


def parse_section_overrides(values: list[str]) -> dict[str, str]:
    """Parse repeated NAME=TEXT options into a content mapping."""
    overrides = {}
    for value in values:
        if "=" not in value:
            typer.echo(f"Invalid section override (expected NAME=TEXT): {value}", err=True)
            raise typer.Exit(1)
        name, text = value.split("=", 1)
        overrides[name.strip()] = text.replace("\\n", "\n")
    return overrides
