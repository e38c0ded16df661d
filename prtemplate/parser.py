"""Markdown PR template parsing for prtemplate.

Turns a committed pull request template into an ordered list of sections.
Each level-2 header starts a section; its body becomes the placeholder.
"""

import re

from prtemplate.conditions import ALWAYS
from prtemplate.models import AutoPopulate, Section, SectionFormat

_HEADER_RE = re.compile(r"^##\s+(.+)")

# Keyword groups checked in order; the first group with a keyword contained
# in the lower-cased header name decides the section's content source.
SECTION_KEYWORDS: list[tuple[tuple[str, ...], AutoPopulate]] = [
    (("summary", "description", "purpose", "overview", "about", "context"), AutoPopulate.PURPOSE),
    (("ticket", "issue", "related", "jira", "linear", "reference"), AutoPopulate.EXTRACTED),
    (("checklist",), AutoPopulate.CHECKLIST),
    (("type of change", "change type", "category"), AutoPopulate.CHANGE_TYPE),
    (("commits", "changelog", "changes", "what changed"), AutoPopulate.COMMITS),
    (("test", "testing", "qa", "verification", "how to test"), AutoPopulate.NONE),
]


def classify_section_name(name: str) -> AutoPopulate:
    """Map a template header name to an auto-populate kind.

    Args:
        name: The header text.

    Returns:
        The kind of the first matching keyword group, or NONE.
    """
    lower = name.lower()
    for keywords, kind in SECTION_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return kind
    return AutoPopulate.NONE


def _build_section(name: str, body_lines: list[str]) -> Section:
    body = "\n".join(body_lines).strip()
    kind = classify_section_name(name)
    return Section(
        name=name,
        required=False,
        auto_populate=kind,
        # Author-supplied templates are shown unconditionally
        condition=ALWAYS,
        placeholder=body or None,
        format=SectionFormat.CHECKLIST if kind == AutoPopulate.CHECKLIST else SectionFormat.MARKDOWN,
    )


def parse_template_to_sections(markdown: str) -> list[Section]:
    """Parse a markdown PR template into sections.

    Text before the first ``## `` header is ignored. Deeper headers
    (``###``) stay part of the enclosing section's body.

    Args:
        markdown: Raw template text.

    Returns:
        Sections in source order.
    """
    sections: list[Section] = []
    current_name = None
    body_lines: list[str] = []

    for line in markdown.splitlines():
        match = _HEADER_RE.match(line)
        if match:
            if current_name:
                sections.append(_build_section(current_name, body_lines))
            current_name = match.group(1).strip()
            body_lines = []
        elif current_name:
            body_lines.append(line)

    if current_name:
        sections.append(_build_section(current_name, body_lines))

    return sections
