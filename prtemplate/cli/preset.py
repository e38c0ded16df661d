"""CLI commands for browsing the preset catalog."""

import typer

from prtemplate.cli.utils import validate_preset
from prtemplate.conditions import condition_to_dict
from prtemplate.presets import PRESET_DESCRIPTIONS, PRESET_NAMES, get_preset_sections

# Subcommand group for presets
preset_app = typer.Typer(
    name="preset",
    help="Browse built-in PR template presets",
    add_completion=False,
)


@preset_app.command("list")
def preset_list() -> None:
    """List available presets."""
    typer.echo("Available presets:")
    typer.echo()

    for name in PRESET_NAMES:
        count = len(get_preset_sections(name))
        typer.echo(f"  • {name} ({count} sections)")
        typer.echo(f"    {PRESET_DESCRIPTIONS[name]}")
        typer.echo()

    typer.echo("Use 'prtemplate preset show <name>' for details.")


@preset_app.command("show")
def preset_show(
    name: str = typer.Argument(
        ...,
        help="Preset name (default, minimal, detailed, mobile, frontend, backend, devops, security, ml)",
    ),
) -> None:
    """Show the sections of a preset."""
    name = validate_preset(name)

    typer.echo(f"Preset: {name}")
    typer.echo("=" * 50)
    typer.echo()
    typer.echo(PRESET_DESCRIPTIONS[name])
    typer.echo()

    for section in get_preset_sections(name):
        condition = condition_to_dict(section.condition)
        detail = ", ".join(f"{k}={v}" for k, v in condition.items() if k != "type")
        shown = f"{condition['type']}({detail})" if detail else condition["type"]
        required = "required" if section.required else "optional"
        typer.echo(f"## {section.name}")
        typer.echo(f"  {required}, source: {section.auto_populate.value}, shown: {shown}")
        if section.placeholder:
            typer.echo("  " + section.placeholder.replace("\n", "\n  "))
        typer.echo()
