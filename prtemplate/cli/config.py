"""CLI commands for inspecting repository configuration."""

from pathlib import Path

import typer
import yaml

from prtemplate.config import get_config_file, get_repo_template_config, template_config_to_dict

# Subcommand group for configuration
config_app = typer.Typer(
    name="config",
    help="Inspect prtemplate configuration in .prtemplate/",
    add_completion=False,
)


@config_app.command("show")
def config_show(
    repo: Path = typer.Argument(
        Path("."),
        help="Path to the repository",
    ),
) -> None:
    """Show the effective template configuration for a repository."""
    config_file = get_config_file(repo)
    if config_file.exists():
        typer.echo(f"# Loaded from {config_file}")
    else:
        typer.echo("# No config file found, showing defaults")

    config = get_repo_template_config(repo)
    typer.echo(yaml.safe_dump(template_config_to_dict(config), sort_keys=False).rstrip())
