"""Tests for prtemplate.config module."""

from prtemplate.changeset import DEFAULT_TICKET_PATTERN
from prtemplate.conditions import CommitCountGt, FilePattern
from prtemplate.config import (
    TemplateConfig,
    get_config_file,
    get_repo_template_config,
    load_repo_config,
    load_template_config_from_dict,
    template_config_to_dict,
)
from prtemplate.domain import DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILES
from prtemplate.models import AutoPopulate, Section, SectionFormat


def _write_config(root, text):
    config_file = get_config_file(root)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(text)
    return config_file


class TestTemplateConfig:
    """Tests for TemplateConfig defaults."""

    def test_defaults(self):
        config = TemplateConfig()
        assert config.detect_repo_template is True
        assert config.preset is None
        assert config.ticket_pattern == DEFAULT_TICKET_PATTERN
        assert config.ticket_link_format is None
        assert config.detection.max_depth == DEFAULT_MAX_DEPTH
        assert config.detection.max_files == DEFAULT_MAX_FILES

    def test_resolve_options(self):
        options = TemplateConfig(detect_repo_template=False, preset="ml").resolve_options()
        assert options.detect_repo_template is False
        assert options.preset == "ml"


class TestLoadRepoConfig:
    """Tests for load_repo_config function."""

    def test_config_file_location(self, temp_dir):
        assert get_config_file(temp_dir) == temp_dir / ".prtemplate" / "config.yaml"

    def test_missing_file(self, temp_dir):
        """Test that a missing config file yields an empty dict."""
        assert load_repo_config(temp_dir) == {}

    def test_reads_yaml(self, temp_dir):
        _write_config(temp_dir, "template:\n  preset: backend\n")
        assert load_repo_config(temp_dir) == {"template": {"preset": "backend"}}

    def test_corrupted_file(self, temp_dir):
        """Test that invalid YAML is ignored."""
        _write_config(temp_dir, "template: [unclosed\n")
        assert load_repo_config(temp_dir) == {}

    def test_non_mapping(self, temp_dir):
        _write_config(temp_dir, "- just\n- a list\n")
        assert load_repo_config(temp_dir) == {}

    def test_invalid_utf8(self, temp_dir):
        """Test that a file that isn't valid UTF-8 is ignored."""
        config_file = get_config_file(temp_dir)
        config_file.parent.mkdir(parents=True)
        config_file.write_bytes(b"template:\n  preset: \xff\xfe\n")

        assert load_repo_config(temp_dir) == {}
        assert get_repo_template_config(temp_dir) == TemplateConfig()

    def test_never_creates_file(self, temp_dir):
        """Test that loading config doesn't write to the repository."""
        get_repo_template_config(temp_dir)
        assert not (temp_dir / ".prtemplate").exists()


class TestLoadTemplateConfigFromDict:
    """Tests for load_template_config_from_dict function."""

    def test_empty(self):
        assert load_template_config_from_dict({}) == TemplateConfig()

    def test_full(self):
        config = load_template_config_from_dict({
            "template": {
                "detect_repo_template": False,
                "preset": "devops",
                "ticket_pattern": r"#(\d+)",
                "ticket_link_format": "https://github.com/org/repo/issues/{ticket}",
                "detection": {"max_depth": 4, "max_files": 100},
            }
        })

        assert config.detect_repo_template is False
        assert config.preset == "devops"
        assert config.ticket_pattern == r"#(\d+)"
        assert config.ticket_link_format == "https://github.com/org/repo/issues/{ticket}"
        assert config.detection.max_depth == 4
        assert config.detection.max_files == 100

    def test_unknown_preset_dropped(self):
        """Test that an unknown preset falls back to auto-detection."""
        config = load_template_config_from_dict({"template": {"preset": "android"}})
        assert config.preset is None

    def test_non_mapping_template_section(self):
        assert load_template_config_from_dict({"template": "backend"}) == TemplateConfig()

    def test_null_values_use_defaults(self):
        """Test that keys left empty in YAML fall back to defaults."""
        config = load_template_config_from_dict({
            "template": {
                "detect_repo_template": None,
                "preset": None,
                "ticket_pattern": None,
                "ticket_link_format": None,
                "detection": {"max_depth": None, "max_files": None},
                "sections": None,
            }
        })
        assert config == TemplateConfig()

    def test_empty_ticket_pattern_uses_default(self):
        config = load_template_config_from_dict({"template": {"ticket_pattern": ""}})
        assert config.ticket_pattern == DEFAULT_TICKET_PATTERN

    def test_wrong_types_use_defaults(self):
        """Test that values of the wrong type are ignored."""
        config = load_template_config_from_dict({
            "template": {
                "detect_repo_template": "yes",
                "preset": 5,
                "ticket_pattern": ["ABC"],
                "ticket_link_format": 42,
                "detection": {"max_depth": "2", "max_files": 1.5},
            }
        })
        assert config == TemplateConfig()

    def test_non_integer_detection_bounds(self):
        """Test that booleans and negative numbers aren't accepted as bounds."""
        config = load_template_config_from_dict({
            "template": {"detection": {"max_depth": True, "max_files": -1}}
        })
        assert config.detection.max_depth == DEFAULT_MAX_DEPTH
        assert config.detection.max_files == DEFAULT_MAX_FILES

    def test_zero_depth_is_allowed(self):
        config = load_template_config_from_dict({"template": {"detection": {"max_depth": 0}}})
        assert config.detection.max_depth == 0

    def test_non_mapping_detection_section(self):
        config = load_template_config_from_dict({"template": {"detection": [1, 2]}})
        assert config.detection.max_files == DEFAULT_MAX_FILES

    def test_roundtrip(self):
        """Test that to_dict output loads back to an equal config."""
        config = TemplateConfig(preset="ml", ticket_link_format="https://x/{ticket}")
        assert load_template_config_from_dict(template_config_to_dict(config)) == config

    def test_roundtrip_with_sections(self):
        config = TemplateConfig(sections=(
            Section("Summary", required=True, auto_populate=AutoPopulate.PURPOSE),
            Section("Migration Notes", condition=FilePattern("migrations?/"), placeholder="_[Steps]_"),
        ))
        assert load_template_config_from_dict(template_config_to_dict(config)) == config


class TestConfigSections:
    """Tests for custom sections under template.sections."""

    def test_sections_parsed(self):
        config = load_template_config_from_dict({
            "template": {
                "sections": [
                    {"name": "Summary", "required": True, "auto_populate": "purpose"},
                    {"name": "Changes", "auto_populate": "commits",
                     "condition": {"type": "commit_count_gt", "threshold": 2}},
                    {"name": "Checklist", "auto_populate": "checklist"},
                ]
            }
        })

        assert [s.name for s in config.sections] == ["Summary", "Changes", "Checklist"]
        assert config.sections[0].required is True
        assert config.sections[1].condition == CommitCountGt(2)
        assert config.sections[2].format == SectionFormat.CHECKLIST

    def test_invalid_entries_skipped(self):
        """Test that invalid section entries are dropped individually."""
        config = load_template_config_from_dict({
            "template": {
                "sections": [
                    {"name": "Summary"},
                    {"required": True},
                    {"name": "Odd", "auto_populate": "magic"},
                    {"name": "Bad Condition", "condition": {"type": "sometimes"}},
                    "Test Plan",
                ]
            }
        })
        assert [s.name for s in config.sections] == ["Summary"]

    def test_duplicate_names_skipped(self):
        config = load_template_config_from_dict({
            "template": {"sections": [{"name": "Notes"}, {"name": "Notes", "required": True}]}
        })
        assert len(config.sections) == 1
        assert config.sections[0].required is False

    def test_non_list_ignored(self):
        config = load_template_config_from_dict({"template": {"sections": {"name": "Summary"}}})
        assert config.sections is None

    def test_all_invalid_is_none(self):
        config = load_template_config_from_dict({"template": {"sections": [{"name": ""}]}})
        assert config.sections is None

    def test_resolve_options_carry_sections(self):
        config = load_template_config_from_dict({"template": {"sections": [{"name": "Notes"}]}})
        assert config.resolve_options().sections == config.sections


class TestGetRepoTemplateConfig:
    """Tests for get_repo_template_config function."""

    def test_from_file(self, temp_dir):
        _write_config(temp_dir, "template:\n  preset: security\n  detection:\n    max_depth: 3\n")

        config = get_repo_template_config(temp_dir)

        assert config.preset == "security"
        assert config.detection.max_depth == 3
        assert config.detection.max_files == DEFAULT_MAX_FILES

    def test_defaults_without_file(self, temp_dir):
        assert get_repo_template_config(temp_dir) == TemplateConfig()

    def test_empty_ticket_pattern_key(self, temp_dir):
        """Test that a ticket_pattern key with no value uses the default."""
        _write_config(temp_dir, "template:\n  ticket_pattern:\n")
        assert get_repo_template_config(temp_dir).ticket_pattern == DEFAULT_TICKET_PATTERN

    def test_empty_detection_bound_key(self, temp_dir):
        _write_config(temp_dir, "template:\n  detection:\n    max_files:\n    max_depth: '2'\n")

        config = get_repo_template_config(temp_dir)

        assert config.detection.max_files == DEFAULT_MAX_FILES
        assert config.detection.max_depth == DEFAULT_MAX_DEPTH

    def test_wrong_type_logs_warning(self, temp_dir, caplog):
        _write_config(temp_dir, "template:\n  detection:\n    max_depth: '2'\n")

        with caplog.at_level("WARNING", logger="prtemplate"):
            get_repo_template_config(temp_dir)

        assert "Ignoring template.detection.max_depth" in caplog.text

    def test_sections_from_file(self, temp_dir):
        _write_config(
            temp_dir,
            "template:\n"
            "  sections:\n"
            "    - name: Summary\n"
            "      required: true\n"
            "      auto_populate: purpose\n"
            "    - name: Migration Notes\n"
            "      condition: {type: file_pattern, pattern: 'migrations?/'}\n",
        )

        config = get_repo_template_config(temp_dir)

        assert [s.name for s in config.sections] == ["Summary", "Migration Notes"]
        assert config.sections[1].condition == FilePattern("migrations?/")
