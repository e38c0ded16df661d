"""CLI commands for template preview, description generation and domain detection."""

import json
from pathlib import Path
from typing import Optional

import typer

from prtemplate.builder import build_description, preview_template
from prtemplate.cli.utils import (
    load_changeset_for_cli,
    parse_section_overrides,
    resolve_for_cli,
    validate_preset,
)
from prtemplate.config import get_repo_template_config
from prtemplate.domain import detect_domain


def preview_command(
    repo: Path = typer.Argument(
        Path("."),
        help="Path to the repository",
    ),
    preset: Optional[str] = typer.Option(
        None,
        "--preset",
        "-p",
        help="Force a preset instead of repo template / auto-detection",
    ),
    no_repo_template: bool = typer.Option(
        False,
        "--no-repo-template",
        help="Ignore any pull request template committed to the repository",
    ),
    changes: Optional[Path] = typer.Option(
        None,
        "--changes",
        "-c",
        help="YAML/JSON change-set used to evaluate section conditions",
    ),
    show_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the preview as JSON",
    ),
) -> None:
    """Show the resolved PR template and which sections will appear."""
    preset = validate_preset(preset)
    config = get_repo_template_config(repo)
    changeset = load_changeset_for_cli(changes, config)

    resolved = resolve_for_cli(repo, config, preset, no_repo_template)
    previews = preview_template(resolved, changeset)

    if show_json:
        payload = {
            "source": resolved.source.value,
            "repo_template_path": str(resolved.repo_template_path) if resolved.repo_template_path else None,
            "detected_domain": resolved.detected_domain,
            "sections": [vars(p) for p in previews],
            "raw_template": resolved.raw_template,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Source: {resolved.source.value}")
    if resolved.repo_template_path:
        typer.echo(f"Template: {resolved.repo_template_path}")
    typer.echo(f"Domain: {resolved.detected_domain or '(none)'}")
    typer.echo()
    typer.echo("Sections:")
    for p in previews:
        marker = "✓" if p.will_appear else "✗"
        required = " (required)" if p.required else ""
        typer.echo(f"  {marker} {p.name}{required} [{p.auto_populate}] when {p.condition['type']}")


def describe_command(
    repo: Path = typer.Argument(
        Path("."),
        help="Path to the repository",
    ),
    changes: Path = typer.Option(
        ...,
        "--changes",
        "-c",
        help="YAML/JSON change-set describing the branch",
    ),
    preset: Optional[str] = typer.Option(
        None,
        "--preset",
        "-p",
        help="Force a preset instead of repo template / auto-detection",
    ),
    no_repo_template: bool = typer.Option(
        False,
        "--no-repo-template",
        help="Ignore any pull request template committed to the repository",
    ),
    summary: Optional[str] = typer.Option(
        None,
        "--summary",
        "-s",
        help="Text for the summary/purpose section",
    ),
    test_plan: Optional[str] = typer.Option(
        None,
        "--test-plan",
        "-t",
        help="Text for the test plan section",
    ),
    section: Optional[list[str]] = typer.Option(
        None,
        "--section",
        help="Section content as NAME=TEXT (repeatable)",
    ),
) -> None:
    """Generate a PR description for a change-set."""
    preset = validate_preset(preset)
    config = get_repo_template_config(repo)
    changeset = load_changeset_for_cli(changes, config)

    provided = {}
    if summary:
        provided.update({"summary": summary, "purpose": summary})
    if test_plan:
        provided["test plan"] = test_plan
    provided.update(parse_section_overrides(section or []))

    resolved = resolve_for_cli(repo, config, preset, no_repo_template)
    description = build_description(resolved, changeset, provided)

    typer.echo(description.markdown)


def detect_command(
    repo: Path = typer.Argument(
        Path("."),
        help="Path to the repository",
    ),
) -> None:
    """Detect the repository's development domain and show the scores."""
    config = get_repo_template_config(repo)
    result = detect_domain(repo, config.detection)

    typer.echo(f"Domain: {result.domain}")
    typer.echo(f"Files scanned: {result.files_scanned}")
    typer.echo()
    typer.echo("Scores:")
    for domain, score in sorted(result.scores.items(), key=lambda item: -item[1]):
        typer.echo(f"  {domain}: {score}")
    typer.echo()
    typer.echo(result.reason)
