"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from prtemplate.changeset import ChangeSet


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_tree(temp_dir):
    """Build a file tree under temp_dir from a list of relative paths.

    Paths ending in "/" become directories; everything else becomes a file
    (parents created as needed). Returns the tree root.
    """
    def _make(paths, contents=None):
        contents = contents or {}
        for rel in paths:
            target = temp_dir / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(contents.get(rel, ""), encoding="utf-8")
        return temp_dir

    return _make


@pytest.fixture
def sample_changeset():
    """Sample change-set for a feature branch."""
    return ChangeSet(
        branch="feature/PROJ-123-user-login",
        files=[
            {"path": "src/auth/login.py", "additions": 40, "deletions": 2},
            {"path": "src/api/routes.py", "additions": 10, "deletions": 1},
        ],
        commits=[
            {"hash": "f00dbabe1234567", "message": "Add session refresh", "author": "Dev", "date": "2024-05-02"},
            {"hash": "abc1234deadbeef", "message": "feat(auth): add user login\n\nLonger body", "author": "Dev", "date": "2024-05-01"},
        ],
        tickets=["PROJ-123"],
    )
