"""Template preview and PR description assembly for prtemplate.

Contains:
- SectionPreview / preview_template: which sections will appear, without content
- GeneratedSection / PRDescription / build_description: the final markdown
"""

from dataclasses import dataclass, field
from typing import Optional

from prtemplate.changeset import ChangeSet
from prtemplate.conditions import condition_to_dict, evaluate_condition
from prtemplate.content import SectionContext, render_section_content
from prtemplate.models import AutoPopulate, ResolvedTemplate


@dataclass
class SectionPreview:
    """A resolved section and whether it will appear."""

    name: str
    required: bool
    auto_populate: str
    condition: dict
    will_appear: bool
    placeholder: Optional[str]
    format: str


@dataclass
class GeneratedSection:
    """A section with its generated body."""

    name: str
    content: str
    auto_populated: bool
    required: bool


@dataclass
class PRDescription:
    """An assembled PR description."""

    markdown: str
    sections: list[GeneratedSection] = field(default_factory=list)


def preview_template(resolved: ResolvedTemplate, changeset: ChangeSet) -> list[SectionPreview]:
    """Evaluate each section's condition against a change-set.

    Args:
        resolved: The resolved template.
        changeset: The branch's change-set.

    Returns:
        One SectionPreview per section, in template order.
    """
    file_paths = changeset.file_paths()
    previews = []
    for section in resolved.sections:
        previews.append(SectionPreview(
            name=section.name,
            required=section.required,
            auto_populate=section.auto_populate.value,
            condition=condition_to_dict(section.condition),
            will_appear=evaluate_condition(
                section.condition, file_paths, changeset.tickets, changeset.commit_count
            ),
            placeholder=section.placeholder,
            format=section.format.value,
        ))
    return previews


def build_description(
    resolved: ResolvedTemplate,
    changeset: ChangeSet,
    provided_content: Optional[dict[str, Optional[str]]] = None,
) -> PRDescription:
    """Assemble the PR description markdown.

    Sections whose condition is false are left out, as are optional
    sections that end up empty.

    Args:
        resolved: The resolved template.
        changeset: The branch's change-set.
        provided_content: Caller-supplied section bodies keyed by name.

    Returns:
        The PRDescription with markdown and per-section content.
    """
    context = SectionContext.from_changeset(
        changeset,
        provided_content=provided_content,
        domain=resolved.detected_domain,
    )
    file_paths = changeset.file_paths()

    generated = []
    for section in resolved.sections:
        if not evaluate_condition(section.condition, file_paths, changeset.tickets, changeset.commit_count):
            continue

        content = render_section_content(section, context)
        if not content and not section.required:
            continue

        generated.append(GeneratedSection(
            name=section.name,
            content=content,
            auto_populated=section.auto_populate != AutoPopulate.NONE,
            required=section.required,
        ))

    markdown = "\n\n".join(f"## {s.name}\n\n{s.content}" for s in generated if s.content)
    return PRDescription(markdown=markdown, sections=generated)
