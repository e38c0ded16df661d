"""Data models for prtemplate.

Contains:
- AutoPopulate: Where a section's content comes from
- SectionFormat: How a section body is rendered
- TemplateSource: Which resolution tier produced a template
- Section: One named, conditionally visible block of a PR description
- ResolvedTemplate: The ordered sections plus their provenance
- section_from_dict / section_to_dict: Plain dictionary form used in config files
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from prtemplate.conditions import ALWAYS, Condition, condition_from_dict, condition_to_dict


class AutoPopulate(Enum):
    """Content sources for a section."""

    PURPOSE = "purpose"
    EXTRACTED = "extracted"
    COMMITS = "commits"
    CHECKLIST = "checklist"
    CHANGE_TYPE = "change_type"
    NONE = "none"


class SectionFormat(Enum):
    """Rendering format tags."""

    MARKDOWN = "markdown"
    CHECKLIST = "checklist"


class TemplateSource(Enum):
    """Provenance of a resolved template."""

    REPO = "repo"
    PRESET = "preset"
    AUTO_DETECTED = "auto-detected"
    DEFAULT = "default"


@dataclass(frozen=True)
class Section:
    """A section of a PR description template.

    Attributes:
        name: Section header text, unique within a template.
        required: Whether the section must be filled in.
        auto_populate: Where the section's content comes from.
        condition: Rule controlling whether the section appears.
        placeholder: Text used when nothing else fills the section.
        format: Rendering format of the body.
    """

    name: str
    required: bool = False
    auto_populate: AutoPopulate = AutoPopulate.NONE
    condition: Condition = ALWAYS
    placeholder: Optional[str] = None
    format: SectionFormat = SectionFormat.MARKDOWN


@dataclass(frozen=True)
class ResolvedTemplate:
    """Result of template resolution.

    Attributes:
        sections: Ordered sections of the template.
        source: Which resolution tier produced the sections.
        detected_domain: Detected or requested domain, if any.
        repo_template_path: Path of the committed template file, if one was used.
        raw_template: Raw text of the committed template, if one was used.
    """

    sections: tuple[Section, ...]
    source: TemplateSource
    detected_domain: Optional[str] = None
    repo_template_path: Optional[Path] = None
    raw_template: Optional[str] = None

    @property
    def section_names(self) -> list[str]:
        return [s.name for s in self.sections]


def section_from_dict(data: dict) -> Section:
    """Build a section from its plain dictionary form.

    Only ``name`` is mandatory. ``format`` defaults to checklist for
    checklist sections and markdown otherwise.

    Args:
        data: Dictionary as found under ``template.sections`` in config.

    Returns:
        The Section.

    Raises:
        ValueError: If a field is missing, unknown or of the wrong type.
    """
    if not isinstance(data, dict):
        raise ValueError(f"section must be a mapping, got {data!r}")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"section name must be a non-empty string, got {name!r}")
    name = name.strip()

    required = data.get("required", False)
    if not isinstance(required, bool):
        raise ValueError(f"section {name!r}: required must be true or false, got {required!r}")

    auto_populate_str = data.get("auto_populate") or AutoPopulate.NONE.value
    try:
        auto_populate = AutoPopulate(auto_populate_str)
    except ValueError:
        raise ValueError(f"section {name!r}: unknown auto_populate {auto_populate_str!r}")

    condition_data = data.get("condition")
    if condition_data is not None and not isinstance(condition_data, dict):
        raise ValueError(f"section {name!r}: condition must be a mapping, got {condition_data!r}")
    condition = condition_from_dict(condition_data)

    placeholder = data.get("placeholder")
    if placeholder is not None and not isinstance(placeholder, str):
        raise ValueError(f"section {name!r}: placeholder must be a string, got {placeholder!r}")

    default_format = SectionFormat.CHECKLIST if auto_populate == AutoPopulate.CHECKLIST else SectionFormat.MARKDOWN
    format_str = data.get("format") or default_format.value
    try:
        section_format = SectionFormat(format_str)
    except ValueError:
        raise ValueError(f"section {name!r}: unknown format {format_str!r}")

    return Section(
        name=name,
        required=required,
        auto_populate=auto_populate,
        condition=condition,
        placeholder=placeholder or None,
        format=section_format,
    )


def section_to_dict(section: Section) -> dict:
    """Convert a section to its plain dictionary form."""
    return {
        "name": section.name,
        "required": section.required,
        "auto_populate": section.auto_populate.value,
        "condition": condition_to_dict(section.condition),
        "placeholder": section.placeholder,
        "format": section.format.value,
    }
