"""Section content generation for prtemplate.

Resolution order for a section body:
1. Caller-supplied content, by exact name then lower-cased name
2. The section's auto-populate source
3. The section's placeholder
4. A generic marker for required sections, otherwise empty
"""

from dataclasses import dataclass, field
from typing import Optional

from prtemplate.changeset import ChangeSet, CommitInfo, FileChange
from prtemplate.checklist import generate_checklist
from prtemplate.inference import extract_branch_prefix, infer_change_type
from prtemplate.models import AutoPopulate, Section
from prtemplate.summary import generate_purpose_summary

NO_COMMITS_MARKER = "_No commits found_"
TICKET_PLACEHOLDER = "{ticket}"


@dataclass
class SectionContext:
    """Everything needed to fill in section bodies."""

    commits: list[CommitInfo] = field(default_factory=list)
    files: list[FileChange] = field(default_factory=list)
    tickets: list[str] = field(default_factory=list)
    ticket_link_format: Optional[str] = None
    provided_content: dict[str, Optional[str]] = field(default_factory=dict)
    branch_name: Optional[str] = None
    branch_prefix: Optional[str] = None
    domain: Optional[str] = None

    @classmethod
    def from_changeset(
        cls,
        changeset: ChangeSet,
        provided_content: Optional[dict[str, Optional[str]]] = None,
        domain: Optional[str] = None,
    ) -> "SectionContext":
        """Build a context from a change-set.

        Args:
            changeset: The branch's change-set.
            provided_content: Caller-supplied section bodies keyed by name.
            domain: Detected domain, if any.

        Returns:
            A SectionContext with the branch prefix derived from the branch name.
        """
        return cls(
            commits=list(changeset.commits),
            files=list(changeset.files),
            tickets=list(changeset.tickets),
            ticket_link_format=changeset.ticket_link_format,
            provided_content=dict(provided_content or {}),
            branch_name=changeset.branch,
            branch_prefix=extract_branch_prefix(changeset.branch),
            domain=domain,
        )

    @property
    def file_paths(self) -> list[str]:
        return [f.path for f in self.files]


def format_commit_list(commits: list[CommitInfo]) -> str:
    """Render commits as "- <title> (<short hash>)" bullets."""
    if not commits:
        return NO_COMMITS_MARKER
    return "\n".join(f"- {c.title} ({c.short_hash})" for c in commits)


def format_ticket_list(tickets: list[str], link_format: Optional[str]) -> str:
    """Render tickets one per line, through the link format if set.

    Returns an empty string for no tickets so the section is left out.
    """
    if not tickets:
        return ""
    if link_format:
        return "\n".join(link_format.replace(TICKET_PLACEHOLDER, t) for t in tickets)
    return "\n".join(tickets)


def _provided(section: Section, context: SectionContext) -> Optional[str]:
    by_name = context.provided_content.get(section.name)
    if by_name:
        return by_name
    by_lower = context.provided_content.get(section.name.lower())
    if by_lower:
        return by_lower
    return None


def render_section_content(section: Section, context: SectionContext) -> str:
    """Generate the body text of one section.

    Args:
        section: The section to fill in.
        context: Change-set data and caller overrides.

    Returns:
        The section body. An empty string means the section has nothing
        to show and can be left out.
    """
    provided = _provided(section, context)
    if provided:
        return provided

    kind = section.auto_populate

    if kind == AutoPopulate.COMMITS:
        return format_commit_list(context.commits)
    elif kind == AutoPopulate.EXTRACTED:
        return format_ticket_list(context.tickets, context.ticket_link_format)
    elif kind == AutoPopulate.PURPOSE:
        return generate_purpose_summary(context.commits, context.files, context.branch_name)
    elif kind == AutoPopulate.CHECKLIST:
        return generate_checklist(context.file_paths, context.domain)
    elif kind == AutoPopulate.CHANGE_TYPE:
        return infer_change_type(context.branch_prefix, context.file_paths)

    if section.placeholder:
        return section.placeholder

    if section.required:
        return f"_[Add {section.name.lower()} here]_"

    return ""
