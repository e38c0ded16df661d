"""Change-set models for prtemplate.

The change-set is the caller's view of a branch under review: changed
files, commits and ticket identifiers. Git access itself lives outside
this package; the CLI reads change-sets from YAML or JSON files.
"""

import re
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

DEFAULT_TICKET_PATTERN = r"([A-Z][A-Z0-9]+-\d+)"
SHORT_HASH_LENGTH = 7


class ChangeSetError(Exception):
    """Raised when a change-set file cannot be loaded."""

    pass


class FileChange(BaseModel):
    """A changed file with line stats.

    Attributes:
        path: Repository-relative file path.
        additions: Lines added.
        deletions: Lines removed.
    """

    path: str
    additions: int = 0
    deletions: int = 0


class CommitInfo(BaseModel):
    """A commit on the branch under review.

    Attributes:
        hash: Commit hash (full or abbreviated).
        message: Full commit message.
        author: Author name.
        date: Commit date as reported by git.
    """

    hash: str
    message: str
    author: str = ""
    date: str = ""

    @field_validator("hash", "date", mode="before")
    @classmethod
    def coerce_to_str(cls, v):
        """YAML loads numeric hashes and bare dates as non-strings."""
        if v is None:
            return ""
        return str(v)

    @property
    def title(self) -> str:
        """First line of the commit message."""
        return self.message.strip().split("\n")[0].strip()

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]


class ChangeSet(BaseModel):
    """Commits, changed files and tickets of a branch.

    Attributes:
        files: Changed files.
        commits: Commits on the branch, newest first.
        tickets: Ticket identifiers referenced by the branch.
        ticket_link_format: Link template with a ``{ticket}`` placeholder.
        branch: Current branch name.
    """

    files: list[FileChange] = []
    commits: list[CommitInfo] = []
    tickets: list[str] = []
    ticket_link_format: Optional[str] = None
    branch: Optional[str] = None

    @field_validator("commits", "tickets", mode="before")
    @classmethod
    def ensure_list(cls, v):
        """Treat a null list as empty."""
        if v is None:
            return []
        return v

    @field_validator("files", mode="before")
    @classmethod
    def coerce_file_paths(cls, v):
        """Treat null as empty and allow files given as bare path strings."""
        if v is None:
            return []
        if isinstance(v, list):
            return [{"path": item} if isinstance(item, str) else item for item in v]
        return v

    def file_paths(self) -> list[str]:
        return [f.path for f in self.files]

    @property
    def commit_count(self) -> int:
        return len(self.commits)


def collect_tickets(
    branch: Optional[str],
    commits: Iterable[CommitInfo],
    pattern: str = DEFAULT_TICKET_PATTERN,
    existing: Iterable[str] = (),
) -> list[str]:
    """Collect ticket identifiers from a branch name and commit messages.

    Tickets are upper-cased and de-duplicated, keeping first-seen order:
    existing tickets, then the branch, then commits.

    Args:
        branch: Branch name, if known.
        commits: Commits on the branch.
        pattern: Ticket regex; group 1 is used when present.
        existing: Tickets already known.

    Returns:
        Ordered list of unique ticket identifiers.
    """
    regex = re.compile(pattern)
    seen: set[str] = set()
    tickets: list[str] = []

    def add(ticket: str) -> None:
        normalized = ticket.upper()
        if normalized not in seen:
            seen.add(normalized)
            tickets.append(normalized)

    def scan(text: str) -> None:
        for match in regex.finditer(text):
            ticket = match.group(1) if regex.groups else match.group(0)
            # Optional groups and empty patterns can match nothing
            if ticket:
                add(ticket)

    for ticket in existing:
        add(ticket)
    if branch:
        scan(branch)
    for commit in commits:
        scan(commit.message)

    return tickets


def load_changeset(path: Path) -> ChangeSet:
    """Load a change-set from a YAML or JSON file.

    Args:
        path: Path to the change-set file.

    Returns:
        The parsed ChangeSet.

    Raises:
        ChangeSetError: If the file can't be read or doesn't describe a change-set.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise ChangeSetError(f"Failed to read change-set from {path}: {e}")
    except yaml.YAMLError as e:
        raise ChangeSetError(f"Invalid YAML in change-set {path}: {e}")

    if not isinstance(data, dict):
        raise ChangeSetError(f"Change-set {path} must be a mapping, got {type(data).__name__}")

    try:
        return ChangeSet(**data)
    except ValidationError as e:
        raise ChangeSetError(f"Invalid change-set {path}: {e}")
