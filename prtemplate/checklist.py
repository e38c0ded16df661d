"""Review checklist generation for prtemplate."""

import re
from typing import Iterable, Optional

UNIVERSAL_ITEMS = [
    "Code has been self-reviewed",
    "Changes have been tested locally",
    "Tests have been added or updated",
    "No new warnings or errors introduced",
]

# (pattern, item): the item is added when any changed file matches
FILE_ITEMS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\.md$|readme", re.IGNORECASE), "Documentation is accurate and complete"),
    (re.compile(r"api/|routes?/|controllers?/", re.IGNORECASE), "API changes are backward compatible"),
    (re.compile(r"migrations?/|schema", re.IGNORECASE), "Database migration is reversible"),
    (
        re.compile(r"\.(tsx|jsx|vue|svelte|css|scss|html|storyboard|xib)$", re.IGNORECASE),
        "UI changes match design specs",
    ),
    (re.compile(r"config|\.env", re.IGNORECASE), "Environment variables documented"),
    (
        re.compile(
            r"package\.json|Gemfile|requirements\.txt|Cargo\.toml|go\.mod|pom\.xml|build\.gradle|pyproject\.toml",
            re.IGNORECASE,
        ),
        "Dependencies reviewed for security",
    ),
]

DOMAIN_ITEMS = {
    "mobile": [
        "No hardcoded strings (localization ready)",
        "Supports Dynamic Type / font scaling",
        "Works in both portrait and landscape",
    ],
    "frontend": [
        "Responsive across breakpoints",
        "Keyboard navigable",
        "No console errors in browser",
    ],
    "backend": [
        "No N+1 queries introduced",
        "Error handling covers edge cases",
        "API is backward compatible",
    ],
    "devops": [
        "Terraform plan output reviewed",
        "No secrets or credentials in code",
        "Monitoring and alerts configured",
    ],
    "security": [
        "Input validation on all user inputs",
        "No hardcoded secrets or credentials",
        "Principle of least privilege followed",
    ],
    "ml": [
        "Model outputs validated against expected ranges",
        "No data leakage between train/test sets",
        "Results are reproducible with fixed seed",
    ],
}


def checklist_items(file_paths: Iterable[str], domain: Optional[str] = None) -> list[str]:
    """Collect checklist items for a set of changed files.

    Args:
        file_paths: Changed file paths.
        domain: Detected domain, if known.

    Returns:
        Universal items, then file-triggered items, then domain items.
    """
    paths = list(file_paths)
    items = list(UNIVERSAL_ITEMS)

    for pattern, item in FILE_ITEMS:
        if any(pattern.search(p) for p in paths):
            items.append(item)

    if domain:
        items.extend(DOMAIN_ITEMS.get(domain, []))

    return items


def generate_checklist(file_paths: Iterable[str], domain: Optional[str] = None) -> str:
    """Render the review checklist as markdown checkboxes.

    Args:
        file_paths: Changed file paths.
        domain: Detected domain, if known.

    Returns:
        One "- [ ] item" line per checklist item.
    """
    return "\n".join(f"- [ ] {item}" for item in checklist_items(file_paths, domain))
