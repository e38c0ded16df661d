"""Inference utilities for prtemplate.

Contains functions for:
- Extracting the type prefix from branch names (feature/, fix/, ...)
- Inferring a conventional commit type from changed files
- Inferring the PR change type and rendering it as a checkbox list
"""

import re
from collections import Counter
from typing import Iterable, Optional

BRANCH_PREFIX_RE = re.compile(
    r"^(task|bug|feature|hotfix|chore|refactor|fix|docs|test|ci|build|perf|style)/",
    re.IGNORECASE,
)

# Checked in order; each file takes the type of the first matching pattern
COMMIT_TYPE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"test|spec|__tests__", re.IGNORECASE), "test"),
    (re.compile(r"\.md$|readme|docs?/", re.IGNORECASE), "docs"),
    (re.compile(r"ci|\.github|jenkinsfile|dockerfile", re.IGNORECASE), "ci"),
    (
        re.compile(
            r"package\.json|package-lock\.json|requirements\.txt|gemfile|poetry\.lock|yarn\.lock|pnpm-lock\.yaml",
            re.IGNORECASE,
        ),
        "build",
    ),
    (re.compile(r"\.ya?ml$|\.json$|config|\.env", re.IGNORECASE), "chore"),
    (re.compile(r"\.css$|\.scss$|\.less$|style", re.IGNORECASE), "style"),
]

DEFAULT_COMMIT_TYPE = "feat"

# Canonical change types as (key, checkbox label), in display order
CHANGE_TYPE_OPTIONS = [
    ("Bug fix", "Bug fix (non-breaking change that fixes an issue)"),
    ("New feature", "New feature (non-breaking change that adds functionality)"),
    ("Refactoring", "Refactoring (no functional changes)"),
    ("Breaking change", "Breaking change (fix or feature that would cause existing functionality to change)"),
    ("Documentation update", "Documentation update"),
    ("Configuration change", "Configuration change"),
    ("Test", "Test (adding or updating tests)"),
    ("Chore / maintenance", "Chore / maintenance (dependency updates, cleanup)"),
    ("Performance improvement", "Performance improvement"),
    ("Code style", "Code style (formatting, whitespace, naming)"),
]

BRANCH_PREFIX_TO_CHANGE_TYPE = {
    "bug": "Bug fix",
    "fix": "Bug fix",
    "hotfix": "Bug fix",
    "feature": "New feature",
    "feat": "New feature",
    "refactor": "Refactoring",
    "docs": "Documentation update",
    "test": "Test",
    "chore": "Chore / maintenance",
    "build": "Chore / maintenance",
    "ci": "Chore / maintenance",
    "perf": "Performance improvement",
    "style": "Code style",
}

COMMIT_TYPE_TO_CHANGE_TYPE = {
    "fix": "Bug fix",
    "feat": "New feature",
    "test": "Test",
    "docs": "Documentation update",
    "ci": "Configuration change",
    "build": "Configuration change",
    "chore": "Chore / maintenance",
    "style": "Code style",
}


def extract_branch_prefix(branch: Optional[str]) -> Optional[str]:
    """Extract the type prefix from a branch name.

    Args:
        branch: The branch name (e.g. "feature/PROJ-1-login").

    Returns:
        The lower-cased prefix (e.g. "feature") or None.
    """
    if not branch:
        return None
    match = BRANCH_PREFIX_RE.match(branch)
    if match:
        return match.group(1).lower()
    return None


def infer_commit_type(file_paths: list[str]) -> str:
    """Infer a conventional commit type from changed file paths.

    Each file is classified by the first matching pattern, then the type
    with the most files wins. "feat" wins ties so that a single README
    doesn't outweigh many code files.

    Args:
        file_paths: Changed file paths.

    Returns:
        The inferred commit type ("feat" when there are no files).
    """
    if not file_paths:
        return DEFAULT_COMMIT_TYPE

    type_counts: Counter[str] = Counter()
    for path in file_paths:
        file_type = DEFAULT_COMMIT_TYPE
        for pattern, commit_type in COMMIT_TYPE_PATTERNS:
            if pattern.search(path):
                file_type = commit_type
                break
        type_counts[file_type] += 1

    best_type = DEFAULT_COMMIT_TYPE
    best_count = type_counts.get(DEFAULT_COMMIT_TYPE, 0)
    for commit_type, count in type_counts.items():
        if commit_type != DEFAULT_COMMIT_TYPE and count > best_count:
            best_type = commit_type
            best_count = count

    return best_type


def matched_change_type(branch_prefix: Optional[str], file_paths: Iterable[str]) -> Optional[str]:
    """Find the change type for a branch prefix and changed files.

    The branch prefix table is checked first; otherwise the commit type
    inferred from the files is mapped through the commit type table.

    Args:
        branch_prefix: Branch type prefix, if any.
        file_paths: Changed file paths.

    Returns:
        A key of CHANGE_TYPE_OPTIONS, or None if no rule matched.
    """
    if branch_prefix:
        matched = BRANCH_PREFIX_TO_CHANGE_TYPE.get(branch_prefix.lower())
        if matched:
            return matched

    commit_type = infer_commit_type(list(file_paths))
    return COMMIT_TYPE_TO_CHANGE_TYPE.get(commit_type)


def infer_change_type(branch_prefix: Optional[str], file_paths: Iterable[str]) -> str:
    """Render the change-type checkbox list.

    Args:
        branch_prefix: Branch type prefix, if any.
        file_paths: Changed file paths.

    Returns:
        All change types as "- [ ]" lines, with the matched one checked.
    """
    matched = matched_change_type(branch_prefix, file_paths)
    lines = []
    for key, label in CHANGE_TYPE_OPTIONS:
        mark = "x" if key == matched else " "
        lines.append(f"- [{mark}] {label}")
    return "\n".join(lines)
