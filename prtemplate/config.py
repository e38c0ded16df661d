"""Configuration for prtemplate.

Settings live under a ``template`` key in ``.prtemplate/config.yaml`` at
the repository root:

    template:
      detect_repo_template: true
      preset: backend
      ticket_pattern: '([A-Z][A-Z0-9]+-\\d+)'
      ticket_link_format: https://jira.example.com/browse/{ticket}
      detection:
        max_depth: 2
        max_files: 500
      sections:
        - name: Summary
          required: true
          auto_populate: purpose
        - name: Migration Notes
          condition: {type: file_pattern, pattern: "migrations?/"}

The file is only ever read; a missing file means defaults. Values that
are empty or of the wrong type are ignored with a warning.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from prtemplate.changeset import DEFAULT_TICKET_PATTERN
from prtemplate.domain import DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILES, DetectionConfig
from prtemplate.logging import get_logger
from prtemplate.models import Section, section_from_dict, section_to_dict
from prtemplate.presets import is_valid_preset
from prtemplate.resolver import ResolveOptions

logger = get_logger("config")

CONFIG_DIR_NAME = ".prtemplate"
CONFIG_FILE_NAME = "config.yaml"


@dataclass
class TemplateConfig:
    """Configuration for template resolution and content generation."""

    detect_repo_template: bool = True
    preset: Optional[str] = None
    ticket_pattern: str = DEFAULT_TICKET_PATTERN
    ticket_link_format: Optional[str] = None
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    sections: Optional[tuple[Section, ...]] = None

    def resolve_options(self) -> ResolveOptions:
        return ResolveOptions(
            detect_repo_template=self.detect_repo_template,
            preset=self.preset,
            sections=self.sections,
        )


def get_config_file(repo_root: Path) -> Path:
    """Return the path of the repository config file.

    Args:
        repo_root: The repository root directory.

    Returns:
        Path to .prtemplate/config.yaml (which may not exist).
    """
    return Path(repo_root) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_repo_config(repo_root: Path) -> dict:
    """Load the raw repository configuration.

    Args:
        repo_root: The repository root directory.

    Returns:
        Configuration dictionary. Empty if the file is missing or corrupted.
    """
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_file, e)
        return {}

    if not isinstance(config, dict):
        logger.warning("Ignoring config %s: expected a mapping", config_file)
        return {}
    return config


def _read_option(section: dict, key: str, expected: type, default, prefix: str = "template"):
    """Read one config value, falling back to the default when unusable.

    Null and empty-string values mean "not set". Booleans are never
    accepted where an integer is expected, and integers must not be
    negative.
    """
    value = section.get(key)
    if value is None or value == "":
        return default

    valid = isinstance(value, expected)
    if expected is int:
        valid = valid and not isinstance(value, bool) and value >= 0

    if not valid:
        logger.warning(
            "Ignoring %s.%s: expected %s, got %r", prefix, key, expected.__name__, value
        )
        return default
    return value


def _read_mapping(section: dict, key: str, prefix: str = "template") -> dict:
    value = section.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Ignoring %s.%s: expected a mapping", prefix, key)
        return {}
    return value


def _load_sections(value) -> Optional[tuple[Section, ...]]:
    """Parse ``template.sections``, skipping invalid and duplicate entries."""
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Ignoring template.sections: expected a list")
        return None

    sections = []
    seen = set()
    for index, item in enumerate(value):
        try:
            section = section_from_dict(item)
        except ValueError as e:
            logger.warning("Ignoring template.sections[%d]: %s", index, e)
            continue
        if section.name in seen:
            logger.warning("Ignoring template.sections[%d]: duplicate name %r", index, section.name)
            continue
        seen.add(section.name)
        sections.append(section)

    return tuple(sections) or None


def load_template_config_from_dict(config_dict: dict) -> TemplateConfig:
    """Load TemplateConfig from a configuration dictionary.

    Unknown preset names are dropped so resolution falls back to
    auto-detection.

    Args:
        config_dict: Dictionary with a ``template`` section.

    Returns:
        TemplateConfig instance.
    """
    section = _read_mapping(config_dict, "template", prefix="config")
    detection_section = _read_mapping(section, "detection")

    preset = _read_option(section, "preset", str, None)
    if preset is not None and not is_valid_preset(preset):
        logger.warning("Unknown preset %r in config, using auto-detection", preset)
        preset = None

    return TemplateConfig(
        detect_repo_template=_read_option(section, "detect_repo_template", bool, True),
        preset=preset,
        ticket_pattern=_read_option(section, "ticket_pattern", str, DEFAULT_TICKET_PATTERN),
        ticket_link_format=_read_option(section, "ticket_link_format", str, None),
        detection=DetectionConfig(
            max_depth=_read_option(detection_section, "max_depth", int, DEFAULT_MAX_DEPTH, "template.detection"),
            max_files=_read_option(detection_section, "max_files", int, DEFAULT_MAX_FILES, "template.detection"),
        ),
        sections=_load_sections(section.get("sections")),
    )


def template_config_to_dict(config: TemplateConfig) -> dict:
    """Convert TemplateConfig to a dictionary.

    Args:
        config: TemplateConfig instance.

    Returns:
        Dictionary representation.
    """
    return {
        "template": {
            "detect_repo_template": config.detect_repo_template,
            "preset": config.preset,
            "ticket_pattern": config.ticket_pattern,
            "ticket_link_format": config.ticket_link_format,
            "detection": {
                "max_depth": config.detection.max_depth,
                "max_files": config.detection.max_files,
            },
            "sections": [section_to_dict(s) for s in config.sections] if config.sections else None,
        }
    }


def get_repo_template_config(repo_root: Path) -> TemplateConfig:
    """Load the TemplateConfig for a repository.

    Args:
        repo_root: The repository root directory.

    Returns:
        TemplateConfig from the repo config file, or defaults.
    """
    return load_template_config_from_dict(load_repo_config(repo_root))
