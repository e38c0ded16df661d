"""Domain detection for prtemplate.

Scores a repository's file tree against weighted per-domain signals to
pick a preset (mobile, frontend, backend, devops, ml, security). The
scan is bounded by depth and file count, so huge repositories degrade
to a capped scan instead of a full walk.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from prtemplate.logging import get_logger

logger = get_logger("domain")

DEFAULT_DOMAIN = "default"

DEFAULT_MAX_DEPTH = 2
DEFAULT_MAX_FILES = 500

# Minimum winning score, and the required lead over the runner-up
MIN_SCORE = 3
LEAD_FACTOR = 2

# Fixed ranking order; also breaks score ties
DOMAIN_PRIORITY = ["mobile", "frontend", "backend", "devops", "ml", "security"]

DEFAULT_SKIP_DIRS = {
    "node_modules",
    ".git",
    "vendor",
    "venv",
    ".venv",
    "__pycache__",
    "dist",
    "build",
}


def _signals(*pairs: tuple[str, int]) -> list[tuple[re.Pattern, int]]:
    return [(re.compile(pattern, re.IGNORECASE), weight) for pattern, weight in pairs]


DOMAIN_SIGNALS: dict[str, list[tuple[re.Pattern, int]]] = {
    "mobile": _signals(
        (r"\.swift$", 3),
        (r"\.kt$", 3),
        (r"\.xcodeproj", 5),
        (r"\.xcworkspace", 5),
        (r"Podfile$", 4),
        (r"Fastfile$", 3),
        (r"AndroidManifest\.xml$", 5),
        (r"\.storyboard$", 3),
        (r"\.xib$", 3),
        (r"build\.gradle(\.kts)?$", 2),
        (r"\.pbxproj$", 4),
        (r"Info\.plist$", 2),
    ),
    "frontend": _signals(
        (r"\.(tsx|jsx)$", 3),
        (r"\.(vue|svelte)$", 4),
        (r"\.(css|scss|less)$", 1),
        (r"next\.config\.", 4),
        (r"vite\.config\.", 4),
        (r"webpack\.config\.", 4),
        (r"nuxt\.config\.", 4),
        (r"tailwind\.config\.", 2),
        (r"postcss\.config", 2),
        (r"\.html$", 1),
    ),
    "backend": _signals(
        (r"\.(go|rs)$", 3),
        (r"\.java$", 2),
        (r"\.py$", 1),
        (r"migrations?/", 4),
        (r"controllers?/", 3),
        (r"routes?/", 3),
        (r"prisma/schema", 5),
        (r"alembic", 4),
        (r"sequelize", 4),
        (r"manage\.py$", 4),
        (r"Cargo\.toml$", 3),
        (r"go\.mod$", 4),
        (r"pom\.xml$", 3),
    ),
    "devops": _signals(
        (r"\.tf$", 5),
        (r"Dockerfile$", 3),
        (r"docker-compose", 4),
        (r"helm/", 5),
        (r"k8s/", 5),
        (r"kubernetes/", 5),
        (r"Jenkinsfile$", 4),
        (r"ansible/", 5),
        (r"pulumi/", 5),
        (r"\.github/workflows/", 2),
        (r"terragrunt", 5),
    ),
    "ml": _signals(
        (r"\.ipynb$", 5),
        (r"model/", 3),
        (r"training/", 4),
        (r"datasets?/", 4),
        (r"dvc\.yaml$", 5),
        (r"MLproject$", 5),
        (r"\.pkl$", 3),
        (r"\.h5$", 3),
        (r"\.onnx$", 4),
        (r"notebooks?/", 3),
    ),
    "security": _signals(
        (r"SECURITY\.md$", 2),
        (r"\.snyk$", 5),
        (r"tfsec", 5),
        (r"trivy", 4),
        (r"security-policy", 4),
    ),
}


@dataclass
class DetectionConfig:
    """Bounds for the repository scan."""

    max_depth: int = DEFAULT_MAX_DEPTH
    max_files: int = DEFAULT_MAX_FILES
    skip_dirs: set[str] = field(default_factory=lambda: DEFAULT_SKIP_DIRS.copy())


@dataclass
class DomainResult:
    """Result of domain detection."""

    domain: str
    scores: dict[str, int]
    files_scanned: int
    reason: str  # Human-readable explanation


def collect_files(repo_root: Path, config: Optional[DetectionConfig] = None) -> list[str]:
    """Collect relative paths of files and directories under a repository.

    Entries are visited in sorted order. Skipped directories are neither
    recorded nor descended into; unreadable directories contribute nothing.

    Args:
        repo_root: Repository root directory.
        config: Scan bounds.

    Returns:
        POSIX-style paths relative to repo_root, at most ``max_files`` long.
    """
    if config is None:
        config = DetectionConfig()

    results: list[str] = []

    def walk(directory: Path, depth: int) -> None:
        if depth > config.max_depth or len(results) >= config.max_files:
            return
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return

        for entry in entries:
            if len(results) >= config.max_files:
                return
            if entry.name in config.skip_dirs:
                continue
            results.append(entry.relative_to(repo_root).as_posix())
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            if is_dir:
                walk(entry, depth + 1)

    walk(Path(repo_root), 0)
    return results


def score_domains(paths: list[str]) -> dict[str, int]:
    """Score each domain against a list of repository paths.

    A path contributes the weight of every signal it matches, in every
    domain.

    Args:
        paths: Repository-relative paths.

    Returns:
        Mapping of domain name to score, in DOMAIN_PRIORITY order.
    """
    scores = {}
    for domain in DOMAIN_PRIORITY:
        score = 0
        for path in paths:
            for pattern, weight in DOMAIN_SIGNALS[domain]:
                if pattern.search(path):
                    score += weight
        scores[domain] = score
    return scores


def pick_domain(scores: dict[str, int]) -> tuple[str, str]:
    """Pick the winning domain from a score table.

    The top domain wins only if it reaches MIN_SCORE and at least
    LEAD_FACTOR times the runner-up's score. Ties are ranked by
    DOMAIN_PRIORITY, which can never produce a winner since equal scores
    fail the lead check.

    Args:
        scores: Mapping of domain name to score.

    Returns:
        Tuple of (domain or "default", reason).
    """
    if not scores:
        return DEFAULT_DOMAIN, "No domains scored"

    def rank(domain: str) -> int:
        return DOMAIN_PRIORITY.index(domain) if domain in DOMAIN_PRIORITY else len(DOMAIN_PRIORITY)

    ranked = sorted(scores.items(), key=lambda item: (-item[1], rank(item[0])))
    top_domain, top_score = ranked[0]
    second_score = ranked[1][1] if len(ranked) > 1 else 0

    if top_score < MIN_SCORE:
        return DEFAULT_DOMAIN, f"Top score {top_score} ({top_domain}) is below {MIN_SCORE}"
    if top_score < second_score * LEAD_FACTOR:
        return (
            DEFAULT_DOMAIN,
            f"Top score {top_score} ({top_domain}) is less than {LEAD_FACTOR}x runner-up {second_score}",
        )
    return top_domain, f"{top_domain} scored {top_score} (runner-up {second_score})"


def detect_domain(repo_root: Path, config: Optional[DetectionConfig] = None) -> DomainResult:
    """Detect the development domain of a repository, with diagnostics.

    Args:
        repo_root: Repository root directory.
        config: Scan bounds.

    Returns:
        DomainResult with the winning domain and the full score table.
    """
    paths = collect_files(repo_root, config)
    scores = score_domains(paths)
    domain, reason = pick_domain(scores)
    logger.debug("Domain detection for %s: %s", repo_root, reason)
    return DomainResult(domain=domain, scores=scores, files_scanned=len(paths), reason=reason)


def detect_repo_domain(repo_root: Path, config: Optional[DetectionConfig] = None) -> str:
    """Detect the development domain of a repository.

    Args:
        repo_root: Repository root directory.
        config: Scan bounds.

    Returns:
        A domain name from DOMAIN_PRIORITY, or "default".
    """
    return detect_domain(repo_root, config).domain
