"""Template source resolution for prtemplate.

Resolution priority (first success wins):
1. Repo template: a pull request template committed to the repository
2. Explicit preset: custom sections from config, or a preset named by the caller
3. Auto-detected: the preset of the repository's detected domain
4. Default: the generic default preset

Discovery never raises; a missing or unreadable file moves on to the
next candidate or tier.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from prtemplate.domain import DEFAULT_DOMAIN, DetectionConfig, detect_repo_domain
from prtemplate.logging import get_logger
from prtemplate.models import ResolvedTemplate, Section, TemplateSource
from prtemplate.parser import parse_template_to_sections
from prtemplate.presets import DEFAULT_PRESET, get_preset_sections

logger = get_logger("resolver")

# Checked in order; every path segment is matched case-insensitively
TEMPLATE_CANDIDATES = [
    ".github/pull_request_template.md",
    ".github/pull_request_template.txt",
    ".github/pull_request_template",
    "pull_request_template.md",
    "pull_request_template.txt",
    "pull_request_template",
    "docs/pull_request_template.md",
    "docs/pull_request_template.txt",
    "docs/pull_request_template",
]

# Parents searched for a PULL_REQUEST_TEMPLATE/ directory ("" is the repo root)
TEMPLATE_DIR_PARENTS = [".github", "", "docs"]
TEMPLATE_DIR_NAME = "PULL_REQUEST_TEMPLATE"
TEMPLATE_FILE_EXTENSIONS = (".md", ".txt")


@dataclass
class ResolveOptions:
    """Caller options for template resolution.

    Attributes:
        detect_repo_template: Look for a template committed to the repository.
        preset: Preset to use when no repo template is found.
        sections: Custom sections to use instead of a preset.
    """

    detect_repo_template: bool = True
    preset: Optional[str] = None
    sections: Optional[tuple[Section, ...]] = None


@dataclass
class FoundTemplate:
    """A template file discovered in the repository."""

    path: Path
    content: str


def find_entries_insensitive(directory: Path, name: str) -> list[Path]:
    """List the directory entries whose name matches, ignoring case.

    Args:
        directory: Directory to list.
        name: Entry name to look for.

    Returns:
        Matching entries in sorted order; empty if absent or unlistable.
    """
    target = name.lower()
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError:
        return []
    return [entry for entry in entries if entry.name.lower() == target]


def _find_dir_insensitive(directory: Path, name: str) -> Optional[Path]:
    for entry in find_entries_insensitive(directory, name):
        try:
            if entry.is_dir():
                return entry
        except OSError:
            continue
    return None


def _read_template(path: Path) -> Optional[str]:
    try:
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read template %s: %s", path, e)
        return None


def _find_candidate(repo_root: Path, candidate: str) -> Optional[FoundTemplate]:
    directory = repo_root
    *parents, file_name = candidate.split("/")
    for part in parents:
        found = _find_dir_insensitive(directory, part)
        if found is None:
            return None
        directory = found

    # A case-sensitive filesystem may hold a file and a directory whose
    # names differ only in case; only a readable file counts.
    for path in find_entries_insensitive(directory, file_name):
        content = _read_template(path)
        if content is not None:
            return FoundTemplate(path=path, content=content)
    return None


def _find_in_template_dir(repo_root: Path, parent: str) -> Optional[FoundTemplate]:
    parent_dir = _find_dir_insensitive(repo_root, parent) if parent else repo_root
    if parent_dir is None:
        return None

    template_dir = _find_dir_insensitive(parent_dir, TEMPLATE_DIR_NAME)
    if template_dir is None:
        return None

    try:
        entries = sorted(template_dir.iterdir(), key=lambda p: p.name)
    except OSError:
        return None

    for entry in entries:
        if entry.name.lower().endswith(TEMPLATE_FILE_EXTENSIONS):
            content = _read_template(entry)
            if content is not None:
                return FoundTemplate(path=entry, content=content)
    return None


def find_repo_template(repo_root: Path) -> Optional[FoundTemplate]:
    """Find a pull request template committed to the repository.

    Args:
        repo_root: Repository root directory.

    Returns:
        The first template found, or None.
    """
    repo_root = Path(repo_root)

    for candidate in TEMPLATE_CANDIDATES:
        found = _find_candidate(repo_root, candidate)
        if found:
            return found

    for parent in TEMPLATE_DIR_PARENTS:
        found = _find_in_template_dir(repo_root, parent)
        if found:
            return found

    return None


def _resolve(
    repo_root: Path,
    options: ResolveOptions,
    detection: Optional[DetectionConfig],
) -> ResolvedTemplate:
    if options.detect_repo_template:
        found = find_repo_template(repo_root)
        if found:
            logger.debug("Using repo template %s", found.path)
            return ResolvedTemplate(
                sections=tuple(parse_template_to_sections(found.content)),
                source=TemplateSource.REPO,
                repo_template_path=found.path,
                raw_template=found.content,
            )

    if options.sections:
        logger.debug("Using %d custom sections", len(options.sections))
        return ResolvedTemplate(
            sections=tuple(options.sections),
            source=TemplateSource.PRESET,
            detected_domain=options.preset,
        )

    if options.preset:
        logger.debug("Using explicit preset %r", options.preset)
        return ResolvedTemplate(
            sections=get_preset_sections(options.preset),
            source=TemplateSource.PRESET,
            detected_domain=options.preset,
        )

    domain = detect_repo_domain(repo_root, detection)
    if domain != DEFAULT_DOMAIN:
        return ResolvedTemplate(
            sections=get_preset_sections(domain),
            source=TemplateSource.AUTO_DETECTED,
            detected_domain=domain,
        )

    return ResolvedTemplate(
        sections=get_preset_sections(DEFAULT_PRESET),
        source=TemplateSource.DEFAULT,
    )


def resolve_template(
    repo_root: Path,
    options: Optional[ResolveOptions] = None,
    detection: Optional[DetectionConfig] = None,
) -> ResolvedTemplate:
    """Resolve the PR template for a repository.

    Custom sections take precedence over a named preset; the preset then
    only names the domain used for checklist items.

    Args:
        repo_root: Repository root directory.
        options: Resolution options.
        detection: Bounds for the domain-detection scan.

    Returns:
        A freshly built ResolvedTemplate.
    """
    if options is None:
        options = ResolveOptions()

    resolved = _resolve(Path(repo_root), options, detection)
    logger.debug(
        "Resolved %s template: %s",
        resolved.source.value,
        ", ".join(resolved.section_names) or "(no sections)",
    )
    return resolved
