"""Purpose summary synthesis for prtemplate.

Builds a one-line "what this PR does" sentence from commit titles or,
failing that, from the branch name.
"""

import re
from typing import Optional, Sequence

from prtemplate.changeset import CommitInfo, FileChange

NO_CHANGES_MARKER = "_No changes detected_"
NO_PURPOSE_MARKER = "_Add purpose description_"

# Titles this short are too generic to describe a PR
MIN_TITLE_LENGTH = 6

CONVENTIONAL_TYPES = ["feat", "fix", "chore", "docs", "test", "refactor", "style", "ci", "build", "perf"]

_TYPE_PREFIX_RE = re.compile(rf"^({'|'.join(CONVENTIONAL_TYPES)})(\([^)]*\))?!?:\s*", re.IGNORECASE)
_TICKET_COLON_RE = re.compile(r"^[A-Z]+-\d+:\s*", re.IGNORECASE)
_TICKET_BRACKET_RE = re.compile(r"^\[?[A-Z]+-\d+\]?\s*", re.IGNORECASE)
_WORD_PREFIX_RE = re.compile(r"^(Task|Bug|BugFix|Feature|Hotfix|Ticket|Release):\s*", re.IGNORECASE)

_BRANCH_TYPE_RE = re.compile(
    r"^(feature|task|bug|hotfix|fix|chore|refactor|docs|test|ci|build|perf|style|ticket|release|"
    r"rnd|experiment|spike|improvement|infra)/",
    re.IGNORECASE,
)
_BRANCH_TICKET_RE = re.compile(r"[A-Z]+-\d+[-_]?", re.IGNORECASE)

# Leading verbs rewritten to third person present ("Add" / "Added" -> "Adds")
PRESENT_TENSE_VERBS = {
    "add": "Adds",
    "fix": "Fixes",
    "update": "Updates",
    "remove": "Removes",
    "delete": "Deletes",
    "change": "Changes",
    "create": "Creates",
    "implement": "Implements",
    "refactor": "Refactors",
    "improve": "Improves",
    "resolve": "Resolves",
    "correct": "Corrects",
    "modify": "Modifies",
    "move": "Moves",
    "rename": "Renames",
    "upgrade": "Upgrades",
    "downgrade": "Downgrades",
    "enable": "Enables",
    "disable": "Disables",
    "configure": "Configures",
    "initialize": "Initializes",
    "merge": "Merges",
    "revert": "Reverts",
    "migrate": "Migrates",
    "decouple": "Decouples",
    "restore": "Restores",
    "bump": "Bumps",
}

PAST_TENSE_VERBS = {
    "added": "Adds",
    "fixed": "Fixes",
    "updated": "Updates",
    "removed": "Removes",
    "deleted": "Deletes",
    "changed": "Changes",
    "created": "Creates",
    "implemented": "Implements",
    "refactored": "Refactors",
    "improved": "Improves",
    "resolved": "Resolves",
    "corrected": "Corrects",
    "modified": "Modifies",
    "moved": "Moves",
    "renamed": "Renames",
    "upgraded": "Upgrades",
    "downgraded": "Downgrades",
    "enabled": "Enables",
    "disabled": "Disables",
    "configured": "Configures",
    "initialized": "Initializes",
    "merged": "Merges",
    "reverted": "Reverts",
    "migrated": "Migrates",
    "decoupled": "Decouples",
    "restored": "Restores",
}


def clean_commit_title(title: str) -> str:
    """Strip type, ticket and branch-style prefixes from a commit title.

    Examples:
    - "feat(api): add login" -> "add login"
    - "PROJ-12: Fix crash" -> "Fix crash"
    - "[PROJ-12] Fix crash" -> "Fix crash"
    """
    title = _TYPE_PREFIX_RE.sub("", title)
    title = _TICKET_COLON_RE.sub("", title)
    title = _TICKET_BRACKET_RE.sub("", title)
    title = _WORD_PREFIX_RE.sub("", title)
    return title.strip()


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def to_present_tense(message: str) -> str:
    """Rewrite the leading verb of a message in third person present tense.

    Args:
        message: A commit-style sentence ("Add login", "Fixed crash").

    Returns:
        The sentence with its first word converted ("Adds login",
        "Fixes crash"), or just capitalized if the verb is unknown.
    """
    words = message.split()
    if not words:
        return message

    first = words[0].lower()
    if first in PAST_TENSE_VERBS:
        words[0] = PAST_TENSE_VERBS[first]
    elif first in PRESENT_TENSE_VERBS:
        words[0] = PRESENT_TENSE_VERBS[first]
    else:
        words[0] = _capitalize(words[0])
    return " ".join(words)


def extract_title_from_commits(commits: Sequence[CommitInfo]) -> Optional[str]:
    """Pick a descriptive title from a branch's commits.

    Commits are newest first, so the oldest commit (usually the one that
    states the branch's intent) is tried first, then the newest.

    Args:
        commits: Commits on the branch, newest first.

    Returns:
        A cleaned, capitalized title, or None if both are too generic.
    """
    if not commits:
        return None

    for commit in (commits[-1], commits[0]):
        title = clean_commit_title(commit.title)
        if len(title) >= MIN_TITLE_LENGTH:
            return _capitalize(title)
    return None


def branch_intent(branch_name: str) -> str:
    """Turn a branch name into words ("feature/PROJ-1-user-login" -> "user login")."""
    intent = _BRANCH_TYPE_RE.sub("", branch_name)
    intent = _BRANCH_TICKET_RE.sub("", intent)
    intent = re.sub(r"[-_/]", " ", intent)
    return re.sub(r"\s+", " ", intent).strip()


def generate_purpose_summary(
    commits: Sequence[CommitInfo],
    files: Sequence[FileChange],
    branch_name: Optional[str],
) -> str:
    """Generate a one-line purpose summary for a PR.

    Args:
        commits: Commits on the branch, newest first.
        files: Changed files.
        branch_name: Current branch name, if known.

    Returns:
        A present-tense summary sentence, or a marker string when nothing
        useful can be derived.
    """
    if not commits and not files:
        return NO_CHANGES_MARKER

    title = extract_title_from_commits(commits)
    if title:
        return to_present_tense(title)

    if branch_name:
        intent = branch_intent(branch_name)
        if intent:
            return to_present_tense(_capitalize(intent))

    return NO_PURPOSE_MARKER
