"""Remove noise paths before analysis.

Dependency manifests, lock files, build output and binary assets change
for reasons unrelated to code quality. Security-sensitive files (.env,
keys) are deliberately kept; the security scan reports them separately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

EXCLUDED_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        "vendor",
        "dist",
        "build",
        "coverage",
        ".nyc_output",
        "__pycache__",
        ".pytest_cache",
        "venv",
        ".venv",
        "env",
        ".next",
        ".nuxt",
        "target",
        "out",
        ".cache",
        ".turbo",
        ".parcel-cache",
        "public",
        "static",
    }
)

EXCLUDED_FILENAMES = frozenset(
    {
        # Dependency manifests and lock files
        "package.json",
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "composer.lock",
        "Gemfile.lock",
        "Pipfile.lock",
        "poetry.lock",
        "go.sum",
        "Cargo.lock",
        "packages.lock.json",
        "npm-shrinkwrap.json",
        # Editor/VCS config and OS artifacts
        ".gitignore",
        ".gitattributes",
        ".editorconfig",
        ".eslintrc",
        ".prettierrc",
        ".browserslistrc",
        "CHANGELOG.md",
        "CHANGELOG",
        ".DS_Store",
        "Thumbs.db",
    }
)

EXCLUDED_EXTENSIONS = (
    ".lock", ".map", ".snap",
    ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".webp", ".avif",
    ".woff", ".woff2", ".ttf", ".eot", ".otf",
    ".mp4", ".mp3", ".wav", ".ogg", ".webm",
    ".pdf", ".zip", ".tar", ".gz", ".bz2", ".xz", ".7z", ".dmg", ".exe",
    ".min.js", ".min.css",
)  # fmt: skip


@dataclass(frozen=True)
class FilterOverrides:
    """User adjustments to the built-in noise lists.

    Attributes:
        extra_exclude_dirs: Directory names added to the exclusion list
        allow_dirs: Built-in excluded directory names to analyze anyway
        extra_exclude_files: Exact filenames added to the exclusion list
        extra_exclude_extensions: Suffixes added to the exclusion list
    """

    extra_exclude_dirs: tuple[str, ...] = ()
    allow_dirs: tuple[str, ...] = ()
    extra_exclude_files: tuple[str, ...] = ()
    extra_exclude_extensions: tuple[str, ...] = ()


def _normalize_scope(path_filter: Optional[str]) -> Optional[str]:
    if path_filter is None:
        return None
    scope = path_filter.strip()
    while scope.startswith("./"):
        scope = scope[2:]
    scope = scope.rstrip("/")
    return scope or None


class FileFilter:
    """Decides which touched paths are candidates for hotspot analysis."""

    def __init__(
        self,
        path_filter: Optional[str] = None,
        overrides: Optional[FilterOverrides] = None,
    ):
        overrides = overrides or FilterOverrides()
        self.scope = _normalize_scope(path_filter)
        self.excluded_dirs = (EXCLUDED_DIRS | set(overrides.extra_exclude_dirs)) - set(
            overrides.allow_dirs
        )
        self.excluded_filenames = EXCLUDED_FILENAMES | set(overrides.extra_exclude_files)
        self.excluded_extensions = tuple(
            ext.lower() for ext in EXCLUDED_EXTENSIONS + tuple(overrides.extra_exclude_extensions)
        )

    def in_scope(self, path: str) -> bool:
        if self.scope is None:
            return True
        return path == self.scope or path.startswith(self.scope + "/")

    def accepts(self, path: str) -> bool:
        if not self.in_scope(path):
            return False

        segments = path.split("/")
        filename = segments[-1]

        if any(seg in self.excluded_dirs for seg in segments[:-1]):
            return False
        if filename in self.excluded_filenames:
            return False
        if filename.lower().endswith(self.excluded_extensions):
            return False
        return True

    def apply(self, files: Iterable[str]) -> list[str]:
        """Return accepted paths, sorted for deterministic reporting."""
        return sorted({f for f in files if self.accepts(f)})


def filter_files(
    files: Iterable[str],
    path_filter: Optional[str] = None,
    overrides: Optional[FilterOverrides] = None,
) -> list[str]:
    """Filter touched paths down to the analysis candidates."""
    return FileFilter(path_filter, overrides).apply(files)
