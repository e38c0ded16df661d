"""Tests for prtemplate.resolver module."""

from pathlib import Path

import pytest

from prtemplate.domain import DetectionConfig
from prtemplate.models import AutoPopulate, Section, TemplateSource
from prtemplate.presets import get_preset_sections
from prtemplate.resolver import (
    ResolveOptions,
    find_entries_insensitive,
    find_repo_template,
    resolve_template,
)

TEMPLATE = "## Summary\nDescribe it\n\n## Test Plan\nHow was it tested?\n"


class TestFindEntriesInsensitive:
    """Tests for find_entries_insensitive function."""

    def test_finds_regardless_of_case(self, make_tree):
        root = make_tree(["Docs/"])
        assert find_entries_insensitive(root, "docs") == [root / "Docs"]

    def test_missing_entry(self, temp_dir):
        assert find_entries_insensitive(temp_dir, "docs") == []

    def test_missing_directory(self, temp_dir):
        assert find_entries_insensitive(temp_dir / "nope", "docs") == []


class TestFindRepoTemplate:
    """Tests for find_repo_template function."""

    def test_github_markdown_template(self, make_tree):
        """Test the standard .github location."""
        root = make_tree([".github/pull_request_template.md"], {".github/pull_request_template.md": TEMPLATE})
        found = find_repo_template(root)
        assert found.path == root / ".github" / "pull_request_template.md"
        assert found.content == TEMPLATE

    def test_root_template_case_insensitive(self, make_tree):
        """Test an upper-case template at the repository root."""
        root = make_tree(["PULL_REQUEST_TEMPLATE.md"], {"PULL_REQUEST_TEMPLATE.md": TEMPLATE})
        found = find_repo_template(root)
        assert found.path.name == "PULL_REQUEST_TEMPLATE.md"

    def test_txt_variant(self, make_tree):
        root = make_tree([".github/pull_request_template.txt"])
        assert find_repo_template(root).path.name == "pull_request_template.txt"

    def test_extensionless_variant(self, make_tree):
        root = make_tree([".github/pull_request_template"])
        assert find_repo_template(root).path.name == "pull_request_template"

    def test_docs_template(self, make_tree):
        root = make_tree(["docs/pull_request_template.md"])
        assert find_repo_template(root).path == root / "docs" / "pull_request_template.md"

    def test_markdown_preferred_over_txt(self, make_tree):
        """Test that .md candidates are checked before .txt."""
        root = make_tree([".github/pull_request_template.txt", ".github/pull_request_template.md"])
        assert find_repo_template(root).path.name == "pull_request_template.md"

    def test_github_preferred_over_root(self, make_tree):
        """Test that .github is checked before the root."""
        root = make_tree(["pull_request_template.md", ".github/pull_request_template.md"])
        assert find_repo_template(root).path.parent.name == ".github"

    def test_template_directory_under_github(self, make_tree):
        """Test a PULL_REQUEST_TEMPLATE/ directory under .github."""
        root = make_tree([
            ".github/PULL_REQUEST_TEMPLATE/feature.md",
            ".github/PULL_REQUEST_TEMPLATE/bugfix.md",
        ])
        found = find_repo_template(root)
        assert found.path.name == "bugfix.md"

    def test_template_directory_at_root(self, make_tree):
        root = make_tree(["PULL_REQUEST_TEMPLATE/default.md"])
        assert find_repo_template(root).path.name == "default.md"

    def test_template_directory_txt_file(self, make_tree):
        """Test that .txt files inside the template directory are used."""
        root = make_tree(["docs/pull_request_template/notes.yaml", "docs/pull_request_template/pr.txt"])
        assert find_repo_template(root).path.name == "pr.txt"

    def test_template_directory_without_templates(self, make_tree):
        """Test that a template directory with no .md/.txt files is ignored."""
        root = make_tree([".github/PULL_REQUEST_TEMPLATE/config.yml"])
        assert find_repo_template(root) is None

    def test_no_template(self, make_tree):
        root = make_tree(["README.md", "src/app.py"])
        assert find_repo_template(root) is None

    def test_missing_repo(self, temp_dir):
        assert find_repo_template(temp_dir / "missing") is None

    def test_unreadable_template_falls_through(self, make_tree, mocker):
        """Test that a read failure moves on to the next candidate."""
        root = make_tree([".github/pull_request_template.md", "docs/pull_request_template.md"])
        original_read_text = Path.read_text

        def fake_read_text(self, *args, **kwargs):
            if self.parent.name == ".github":
                raise PermissionError("denied")
            return original_read_text(self, *args, **kwargs)

        mocker.patch.object(Path, "read_text", fake_read_text)

        assert find_repo_template(root).path.parent.name == "docs"

    def test_undecodable_template_falls_through(self, make_tree):
        """Test that a binary file is skipped."""
        root = make_tree(["docs/pull_request_template.md"])
        (root / "pull_request_template.md").write_bytes(b"\xff\xfe\x00bad")
        assert find_repo_template(root).path.parent.name == "docs"

    def test_file_preferred_over_same_named_directory(self, make_tree):
        """Test that a file wins over a directory whose name differs only in case."""
        root = make_tree([".github/PULL_REQUEST_TEMPLATE/feature.md"])
        if (root / ".github" / "pull_request_template").exists():
            pytest.skip("filesystem is case-insensitive")
        (root / ".github" / "pull_request_template").write_text(TEMPLATE)

        found = find_repo_template(root)

        assert found.path == root / ".github" / "pull_request_template"
        assert found.content == TEMPLATE

class TestResolveTemplate:
    """Tests for resolve_template function."""

    def test_repo_template(self, make_tree):
        """Test that a committed template is parsed and reported."""
        root = make_tree([".github/pull_request_template.md"], {".github/pull_request_template.md": TEMPLATE})

        resolved = resolve_template(root)

        assert resolved.source == TemplateSource.REPO
        assert resolved.section_names == ["Summary", "Test Plan"]
        assert resolved.sections[0].auto_populate == AutoPopulate.PURPOSE
        assert resolved.repo_template_path == root / ".github" / "pull_request_template.md"
        assert resolved.raw_template == TEMPLATE
        assert resolved.detected_domain is None

    def test_repo_template_beats_strong_signals(self, make_tree):
        """Test that a repo template wins over preset and domain signals."""
        root = make_tree([
            "main.tf", "helm/Chart.yaml", "k8s/deploy.yaml", "Jenkinsfile",
            ".github/pull_request_template.md",
        ], {".github/pull_request_template.md": TEMPLATE})

        resolved = resolve_template(root, ResolveOptions(preset="backend"))

        assert resolved.source == TemplateSource.REPO

    def test_explicit_preset(self, make_tree):
        """Test that an explicit preset is used when no repo template exists."""
        root = make_tree(["main.tf", "helm/Chart.yaml"])

        resolved = resolve_template(root, ResolveOptions(preset="security"))

        assert resolved.source == TemplateSource.PRESET
        assert resolved.detected_domain == "security"
        assert resolved.sections == get_preset_sections("security")
        assert resolved.repo_template_path is None
        assert resolved.raw_template is None

    def test_repo_template_disabled(self, make_tree):
        """Test that disabling discovery skips a committed template."""
        root = make_tree([".github/pull_request_template.md"])

        resolved = resolve_template(root, ResolveOptions(detect_repo_template=False, preset="minimal"))

        assert resolved.source == TemplateSource.PRESET
        assert len(resolved.sections) == 2

    def test_unknown_preset_uses_default_sections(self, temp_dir):
        """Test that an unknown explicit preset yields the default sections."""
        resolved = resolve_template(temp_dir, ResolveOptions(preset="android"))
        assert resolved.source == TemplateSource.PRESET
        assert resolved.sections == get_preset_sections("default")

    def test_auto_detected_devops(self, make_tree):
        """Test auto-detection of a devops repository."""
        root = make_tree(["main.tf", "helm/Chart.yaml"])

        resolved = resolve_template(root)

        assert resolved.source == TemplateSource.AUTO_DETECTED
        assert resolved.detected_domain == "devops"
        assert len(resolved.sections) == 8
        assert resolved.sections == get_preset_sections("devops")

    def test_default(self, make_tree):
        """Test the default tier for a generic repository."""
        root = make_tree(["README.md", "package.json"])

        resolved = resolve_template(root)

        assert resolved.source == TemplateSource.DEFAULT
        assert resolved.detected_domain is None
        assert resolved.sections == get_preset_sections("default")

    def test_detection_config_is_used(self, make_tree):
        """Test that scan bounds are passed to the detector."""
        root = make_tree(["a/b/c/d/main.tf"])

        assert resolve_template(root).source == TemplateSource.DEFAULT
        deep = resolve_template(root, detection=DetectionConfig(max_depth=5))
        assert deep.source == TemplateSource.AUTO_DETECTED

    def test_missing_repo_is_default(self, temp_dir):
        """Test that a missing path resolves to the default preset."""
        resolved = resolve_template(temp_dir / "missing")
        assert resolved.source == TemplateSource.DEFAULT


class TestCustomSections:
    """Tests for resolution with custom sections."""

    SECTIONS = (
        Section("Summary", required=True, auto_populate=AutoPopulate.PURPOSE),
        Section("Rollout"),
    )

    def test_custom_sections_used(self, make_tree):
        """Test that custom sections replace auto-detection."""
        root = make_tree(["main.tf", "helm/Chart.yaml"])

        resolved = resolve_template(root, ResolveOptions(sections=self.SECTIONS))

        assert resolved.source == TemplateSource.PRESET
        assert resolved.sections == self.SECTIONS
        assert resolved.section_names == ["Summary", "Rollout"]
        assert resolved.detected_domain is None

    def test_custom_sections_beat_preset(self, temp_dir):
        """Test that a preset alongside custom sections only names the domain."""
        resolved = resolve_template(temp_dir, ResolveOptions(preset="security", sections=self.SECTIONS))

        assert resolved.sections == self.SECTIONS
        assert resolved.detected_domain == "security"

    def test_repo_template_beats_custom_sections(self, make_tree):
        root = make_tree([".github/pull_request_template.md"], {".github/pull_request_template.md": TEMPLATE})

        resolved = resolve_template(root, ResolveOptions(sections=self.SECTIONS))

        assert resolved.source == TemplateSource.REPO

    def test_empty_sections_ignored(self, temp_dir):
        resolved = resolve_template(temp_dir, ResolveOptions(sections=()))
        assert resolved.source == TemplateSource.DEFAULT
