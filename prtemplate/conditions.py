"""Section visibility conditions for prtemplate.

A condition decides whether a section appears in the generated PR
description. Conditions are a closed set of immutable variants:

- Always: the section is always shown
- Never: the section is never shown
- HasTickets: shown when at least one ticket was found
- CommitCountGt: shown when the branch has more than ``threshold`` commits
- FilePattern: shown when any changed file matches ``pattern``
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from prtemplate.logging import get_logger

logger = get_logger("conditions")


@dataclass(frozen=True)
class Always:
    """Section always appears."""

    type: ClassVar[str] = "always"


@dataclass(frozen=True)
class Never:
    """Section never appears."""

    type: ClassVar[str] = "never"


@dataclass(frozen=True)
class HasTickets:
    """Section appears when the change-set references tickets."""

    type: ClassVar[str] = "has_tickets"


@dataclass(frozen=True)
class CommitCountGt:
    """Section appears when the commit count is strictly above threshold."""

    threshold: int = 0
    type: ClassVar[str] = "commit_count_gt"


@dataclass(frozen=True)
class FilePattern:
    """Section appears when a changed file path matches the regex."""

    pattern: Optional[str] = None
    type: ClassVar[str] = "file_pattern"


Condition = Union[Always, Never, HasTickets, CommitCountGt, FilePattern]

ALWAYS = Always()
NEVER = Never()
HAS_TICKETS = HasTickets()


def evaluate_condition(
    condition: Optional[Condition],
    changed_files: list[str],
    tickets: list[str],
    commit_count: int,
) -> bool:
    """Decide whether a section with this condition should appear.

    Never raises. A ``FilePattern`` whose regex does not compile evaluates
    to True so a broken pattern can't hide a section.

    Args:
        condition: The section condition (None behaves like Always).
        changed_files: Paths of the changed files.
        tickets: Ticket identifiers found for the change-set.
        commit_count: Number of commits on the branch.

    Returns:
        True if the section should appear.
    """
    if condition is None or isinstance(condition, Always):
        return True
    elif isinstance(condition, Never):
        return False
    elif isinstance(condition, HasTickets):
        return len(tickets) > 0
    elif isinstance(condition, CommitCountGt):
        return commit_count > condition.threshold
    elif isinstance(condition, FilePattern):
        if not condition.pattern:
            return True
        try:
            regex = re.compile(condition.pattern, re.IGNORECASE)
        except re.error as e:
            logger.debug("Invalid file pattern %r, showing section: %s", condition.pattern, e)
            return True
        return any(regex.search(path) for path in changed_files)

    return True


def condition_to_dict(condition: Condition) -> dict:
    """Convert a condition to its plain dictionary form.

    Args:
        condition: The condition to convert.

    Returns:
        Dictionary with a ``type`` key and the variant's parameters.
    """
    if isinstance(condition, CommitCountGt):
        return {"type": condition.type, "threshold": condition.threshold}
    if isinstance(condition, FilePattern):
        return {"type": condition.type, "pattern": condition.pattern}
    return {"type": condition.type}


def condition_from_dict(data: Optional[dict]) -> Condition:
    """Build a condition from its plain dictionary form.

    Args:
        data: Dictionary with a ``type`` key. None or an empty dict means Always.

    Returns:
        The matching condition variant.

    Raises:
        ValueError: If the type is unknown or a parameter has the wrong type.
    """
    if not data:
        return ALWAYS

    condition_type = data.get("type", "always")

    if condition_type == "always":
        return ALWAYS
    elif condition_type == "never":
        return NEVER
    elif condition_type == "has_tickets":
        return HAS_TICKETS
    elif condition_type == "commit_count_gt":
        threshold = data.get("threshold", 0)
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise ValueError(f"commit_count_gt threshold must be an integer, got {threshold!r}")
        return CommitCountGt(threshold=threshold)
    elif condition_type == "file_pattern":
        pattern = data.get("pattern")
        if pattern is not None and not isinstance(pattern, str):
            raise ValueError(f"file_pattern pattern must be a string, got {pattern!r}")
        return FilePattern(pattern=pattern)

    raise ValueError(f"Unknown condition type: {condition_type}")
