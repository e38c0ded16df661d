"""Preset catalog for prtemplate.

Contains:
- PRESETS: Read-only mapping of preset name to its ordered sections
- PRESET_NAMES: Valid preset names (generic presets first, then domains)
- PRESET_DESCRIPTIONS: One-line descriptions for help/display
- get_preset_sections: Lookup with fallback to the default preset
"""

from types import MappingProxyType
from typing import Optional

from prtemplate.conditions import ALWAYS, HAS_TICKETS, CommitCountGt, FilePattern
from prtemplate.models import AutoPopulate, Section, SectionFormat

DEFAULT_PRESET = "default"

_TEST_PLAN_PLACEHOLDER = "_[Describe how you tested these changes]_"

# Sections shared by most presets
PURPOSE = Section(
    name="Purpose",
    required=True,
    auto_populate=AutoPopulate.PURPOSE,
)
TICKET = Section(
    name="Ticket",
    auto_populate=AutoPopulate.EXTRACTED,
    condition=HAS_TICKETS,
)
TYPE_OF_CHANGE = Section(
    name="Type of Change",
    auto_populate=AutoPopulate.CHANGE_TYPE,
)
TEST_PLAN = Section(
    name="Test Plan",
    required=True,
    placeholder=_TEST_PLAN_PLACEHOLDER,
)
CHECKLIST = Section(
    name="Checklist",
    auto_populate=AutoPopulate.CHECKLIST,
    format=SectionFormat.CHECKLIST,
)


def _manual(name: str, placeholder: str, condition=ALWAYS, required: bool = False) -> Section:
    """Build a section the author fills in by hand."""
    return Section(name=name, required=required, condition=condition, placeholder=placeholder)


def _test_plan(placeholder: str) -> Section:
    return _manual("Test Plan", placeholder, required=True)


_DEFAULT = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    Section(
        name="Changes",
        auto_populate=AutoPopulate.COMMITS,
        condition=CommitCountGt(threshold=1),
    ),
    TEST_PLAN,
    CHECKLIST,
)

_MINIMAL = (
    PURPOSE,
    TEST_PLAN,
)

_DETAILED = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    Section(name="Changes", auto_populate=AutoPopulate.COMMITS),
    _manual(
        "Screenshots",
        "_[Add screenshots if applicable]_",
        FilePattern(r"\.(css|scss|less|tsx|jsx|vue|svelte|html|storyboard|xib)$"),
    ),
    _manual(
        "Breaking Changes",
        "_[Describe any breaking changes and migration path]_",
        FilePattern(r"api/|routes?/|controller|schema|migration|swagger|openapi"),
    ),
    _manual("Performance Impact", "_[Describe any performance implications]_"),
    _manual("Deployment Notes", "_[Any special deployment steps or considerations]_"),
    TEST_PLAN,
    CHECKLIST,
)

_MOBILE = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    _manual(
        "Screenshots",
        "_[Add before/after screenshots for UI changes]_",
        FilePattern(r"\.(swift|kt|storyboard|xib|xml)$|view|screen|ui|component|activity|fragment|composable"),
    ),
    _manual(
        "Device Testing",
        "Tested on:\n"
        "- [ ] iPhone (model)\n"
        "- [ ] iPad (model)\n"
        "- [ ] Android phone (model)\n"
        "- [ ] Android tablet (model)\n"
        "- [ ] Simulator/Emulator",
    ),
    _manual(
        "Accessibility",
        "_[Describe accessibility impact of UI changes]_",
        FilePattern(r"view|screen|ui|component|controller|activity|fragment|composable|accessibility"),
    ),
    TEST_PLAN,
    CHECKLIST,
)

_FRONTEND = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    _manual(
        "Screenshots / Visual Changes",
        "_[Add before/after screenshots for visual changes]_",
        FilePattern(r"\.(css|scss|less|tsx|jsx|vue|svelte|html)$|component|page|layout|style"),
    ),
    _manual(
        "Browser Compatibility",
        "Tested in:\n"
        "- [ ] Chrome\n"
        "- [ ] Firefox\n"
        "- [ ] Safari\n"
        "- [ ] Edge\n"
        "- [ ] Mobile browsers",
        FilePattern(r"\.(css|scss|less)$|polyfill|compat|browserslist"),
    ),
    _manual(
        "Accessibility",
        "_[Describe accessibility considerations]_",
        FilePattern(r"\.(tsx|jsx|vue|svelte|html)$|a11y|accessibility|aria|component"),
    ),
    TEST_PLAN,
    CHECKLIST,
)

_BACKEND = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    _manual(
        "API Changes",
        "_[Describe API endpoint changes, new/modified/removed endpoints]_",
        FilePattern(r"routes?/|controllers?/|handlers?/|endpoints?/|resolvers?/|api/|swagger|openapi|\.graphql$"),
    ),
    _manual(
        "Database / Migration",
        "_[Describe schema changes, migration steps, rollback plan]_",
        FilePattern(r"migrations?/|schema|\.(sql)$|prisma|knex|typeorm|alembic|sequelize"),
    ),
    _manual(
        "Breaking Changes",
        "_[Describe impact on existing clients and migration path]_",
        FilePattern(r"api/|routes?/|controllers?/|schema|migration|swagger|openapi"),
    ),
    TEST_PLAN,
    CHECKLIST,
)

_DEVOPS = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    _manual(
        "Infrastructure Impact",
        "_[Describe what infrastructure is affected and how]_",
        required=True,
    ),
    _manual(
        "Affected Environments",
        "- [ ] Development\n- [ ] Staging\n- [ ] Production",
    ),
    _manual(
        "Rollback Plan",
        "_[Describe how to safely rollback these changes]_",
        required=True,
    ),
    _test_plan("_[Describe how you validated these infrastructure changes]_"),
    CHECKLIST,
)

_SECURITY = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    _manual(
        "Security Impact",
        "_[Describe the security implications of this change]_",
        required=True,
    ),
    _manual(
        "Threat Model Changes",
        "_[Describe changes to attack surface, trust boundaries, or authentication/authorization]_",
        FilePattern(r"auth|security|crypto|token|session|password|permission|rbac|oauth|saml|cert|ssl|tls"),
    ),
    _test_plan("_[Describe security testing performed]_"),
    CHECKLIST,
)

_ML = (
    PURPOSE,
    TICKET,
    TYPE_OF_CHANGE,
    _manual(
        "Model Changes",
        "_[Describe architecture, hyperparameter, or training changes]_",
        FilePattern(r"model|train|weights|checkpoint|\.(h5|pkl|onnx|pt|pth|safetensors)$"),
    ),
    _manual(
        "Dataset Changes",
        "_[Describe changes to data sources, preprocessing, or feature engineering]_",
        FilePattern(r"dataset|data/|pipeline|preprocess|feature|etl"),
    ),
    _manual(
        "Metrics / Evaluation",
        "_[Before/after metrics comparison. Include evaluation methodology.]_",
    ),
    _test_plan("_[Describe validation and testing approach]_"),
    CHECKLIST,
)


PRESETS = MappingProxyType({
    "default": _DEFAULT,
    "minimal": _MINIMAL,
    "detailed": _DETAILED,
    "mobile": _MOBILE,
    "frontend": _FRONTEND,
    "backend": _BACKEND,
    "devops": _DEVOPS,
    "security": _SECURITY,
    "ml": _ML,
})

PRESET_NAMES = list(PRESETS)

# Descriptions for help/display (same order as PRESET_NAMES)
PRESET_DESCRIPTIONS = {
    "default": "General-purpose template with purpose, ticket, change type, commits, test plan and checklist",
    "minimal": "Purpose and test plan only",
    "detailed": "Everything in default plus screenshots, breaking changes, performance and deployment notes",
    "mobile": "iOS/Android apps: screenshots, device testing and accessibility",
    "frontend": "Web UIs: visual changes, browser compatibility and accessibility",
    "backend": "Services and APIs: API changes, database migrations and breaking changes",
    "devops": "Infrastructure: impact, affected environments and rollback plan",
    "security": "Security-sensitive changes: security impact and threat model changes",
    "ml": "Machine learning: model changes, dataset changes and evaluation metrics",
}


def is_valid_preset(name: Optional[str]) -> bool:
    """Check whether a preset name exists in the catalog."""
    return bool(name) and name in PRESETS


def get_preset_sections(name: Optional[str]) -> tuple[Section, ...]:
    """Get the sections of a preset.

    Args:
        name: Preset or domain name.

    Returns:
        The preset's ordered sections, or the default preset's sections
        if the name is unknown.
    """
    if name and name in PRESETS:
        return PRESETS[name]
    return PRESETS[DEFAULT_PRESET]
