"""Configuration loading and management for git-scanline.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in ScanlineConfig)
    2. Project config (./.git-scanline.toml)
    3. Explicit config file (--config)
    4. Environment variables (GIT_SCANLINE_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(top=10, bugs_only=True)
    >>> config.top
    10
"""

from __future__ import annotations

import math
import os
import sys
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_args, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError
from .filters import FilterOverrides
from .scoring import Weights

OutputFormat = Literal["terminal", "json"]

PROJECT_CONFIG_NAME = ".git-scanline.toml"
ENV_PREFIX = "GIT_SCANLINE_"

_LIST_FIELDS = ("exclude_dirs", "include_dirs", "exclude_files", "exclude_extensions")


@dataclass(frozen=True)
class ScanlineConfig:
    """Settings for one analysis run.

    Attributes:
        since: git date expression for the history window ("" = all history)
        path: Restrict analysis to this subdirectory of the repository
        top: Number of hotspots to show (every file is still analyzed)
        bugs_only: Only show files that appear in bug-fix commits
        format: Output format, "terminal" or "json"
        output: Write the report to this file instead of stdout
        exclude_dirs: Directory names added to the built-in exclusions
        include_dirs: Built-in excluded directory names to analyze anyway
        exclude_files: Exact filenames added to the built-in exclusions
        exclude_extensions: File suffixes added to the built-in exclusions
        weights: Per-signal weights, normalized at scoring time
    """

    since: str = ""
    path: Optional[str] = None
    top: int = 20
    bugs_only: bool = False
    format: OutputFormat = "terminal"
    output: Optional[str] = None

    exclude_dirs: tuple[str, ...] = ()
    include_dirs: tuple[str, ...] = ()
    exclude_files: tuple[str, ...] = ()
    exclude_extensions: tuple[str, ...] = ()

    weights: Weights = field(default_factory=Weights)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        allowed = get_args(OutputFormat)
        if self.format not in allowed:
            raise InvalidConfigError(
                "format", self.format, f"Expected one of: {', '.join(allowed)}"
            )
        if not isinstance(self.top, int) or self.top < 1:
            raise InvalidConfigError(
                "top", self.top, "Must be 1 or greater (use bugs_only to narrow results instead)"
            )
        for name in _LIST_FIELDS:
            value = getattr(self, name)
            if not all(isinstance(item, str) for item in value):
                raise InvalidConfigError(name, value, "Must be a list of strings")
        self.weights.validate()

    def filter_overrides(self) -> FilterOverrides:
        return FilterOverrides(
            extra_exclude_dirs=self.exclude_dirs,
            allow_dirs=self.include_dirs,
            extra_exclude_files=self.exclude_files,
            extra_exclude_extensions=self.exclude_extensions,
        )


def load_config(
    config_file: Optional[Path] = None,
    project_dir: Optional[Path] = None,
    **overrides: Any,
) -> ScanlineConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        project_dir: Directory searched for .git-scanline.toml (default: cwd)
        **overrides: Direct overrides (typically from CLI flags). None values
            are ignored; ``weights`` may be a partial dict of signal weights.

    Raises:
        ConfigFileError: If a config file is missing or unparseable
        InvalidConfigError: If any value is invalid or a key is unknown
    """
    merged: dict[str, Any] = {}
    weight_values: dict[str, Any] = {}

    def merge(source: dict[str, Any]) -> None:
        source = dict(source)
        weights = source.pop("weights", None)
        if isinstance(weights, Weights):
            weight_values.update(asdict(weights))
        elif isinstance(weights, dict):
            weight_values.update(weights)
        elif weights is not None:
            raise InvalidConfigError("weights", weights, "Must be a table of signal weights")
        merged.update(source)

    project_config = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    if project_config.exists():
        merge(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merge(_load_toml_file(config_file))

    merge(_load_env_vars())
    merge({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(ScanlineConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "Unknown configuration key")

    for name in _LIST_FIELDS:
        if name in merged:
            value = merged[name]
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise InvalidConfigError(name, value, "Must be a list of strings")
            merged[name] = tuple(value)

    if weight_values:
        merged["weights"] = _build_weights(weight_values)

    return ScanlineConfig(**merged)


def _build_weights(values: dict[str, Any]) -> Weights:
    known = {f.name for f in fields(Weights)}
    for key, value in values.items():
        if key not in known:
            raise InvalidConfigError(f"weights.{key}", value, "Unknown signal weight")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidConfigError(f"weights.{key}", value, "Must be a number")
        if not math.isfinite(value):
            raise InvalidConfigError(f"weights.{key}", value, "Must be a finite number")
    return Weights(**{**asdict(Weights()), **{k: float(v) for k, v in values.items()}})


def _load_env_vars() -> dict[str, Any]:
    """Load scalar settings from GIT_SCANLINE_* environment variables.

    Supported: GIT_SCANLINE_SINCE, GIT_SCANLINE_PATH, GIT_SCANLINE_TOP,
    GIT_SCANLINE_BUGS_ONLY, GIT_SCANLINE_FORMAT, GIT_SCANLINE_OUTPUT.
    """
    type_hints = get_type_hints(ScanlineConfig)
    result: dict[str, Any] = {}

    for f in fields(ScanlineConfig):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        try:
            parsed = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e
        if parsed is not None:
            result[f.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single value.
    """
    args = get_args(type_hint)
    if type(None) in args:
        non_none = [t for t in args if t is not type(None)]
        type_hint = non_none[0] if non_none else type_hint

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or getattr(type_hint, "__origin__", None) is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(path, str(e)) from e
    except OSError as e:
        raise ConfigFileError(path, e.strerror or str(e)) from e


CONFIG_TEMPLATE = """\
# git-scanline configuration file
# Generated by: git-scanline --generate-config
#
# All settings are optional. Omit any field to use the built-in default.
# CLI flags always take precedence over values in this file.
# Save this file as .git-scanline.toml in your repository root, or pass it
# explicitly with --config.

# -- Analysis scope -------------------------------------------------------------

# Analyze commits since this date. Leave empty (or omit) for all history.
# Accepts any git date format: "6 months ago", "2024-01-01", "1 year ago"
# since = ""

# Limit analysis to a subdirectory (relative path from the repo root).
# path = "src"

# Number of hotspot results to display. All files are always analyzed.
# top = 20

# Only show files that appear in bug-fix commits.
# bugs_only = false

# -- Output ---------------------------------------------------------------------

# Output format: terminal, json
# format = "terminal"

# Output file path (stdout when omitted).
# output = "hotspot-report.json"

# -- File filtering -------------------------------------------------------------

# Additional directories to exclude (merged with the built-in list).
# exclude_dirs = ["generated", "proto", "migrations", "fixtures"]

# Built-in excluded directories to allow back into analysis.
# include_dirs = ["dist", "public"]

# Additional filenames to exclude (exact match against the filename).
# exclude_files = ["schema.graphql", "openapi.json"]

# Additional file extensions to exclude.
# exclude_extensions = [".pb.go", ".generated.ts", ".d.ts"]

# -- Scoring weights ------------------------------------------------------------
# Weights are normalized at runtime so they always sum to 1.0.

# [weights]
# churn = 0.27           # Commit frequency with recency decay
# bugs = 0.27            # Correlation with bug-fix commit messages
# reverts = 0.14         # Files that have been reverted
# bursts = 0.09          # Rapid-commit windows (3+ commits in 24 h)
# coupling = 0.09        # Files that always change together
# silo = 0.05            # Single-author concentration risk
# commit_quality = 0.09  # WIP and oversized commits
"""


def write_template(output_path: Optional[Path] = None) -> None:
    """Print the annotated config template, or write it to ``output_path``."""
    if output_path is None:
        sys.stdout.write(CONFIG_TEMPLATE)
        return
    try:
        output_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(output_path, f"cannot write template: {e.strerror or e}") from e
