"""Helpers shared by the per-file analyzers."""

from __future__ import annotations

from typing import Iterable, Mapping

from ..history.models import Commit

# Guards max-normalization when no file has any occurrence.
EPSILON = 1e-4


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 100]."""
    return max(0.0, min(100.0, value))


def max_normalized(count: float, max_count: float) -> float:
    """Scale ``count`` so the observed maximum maps to 100."""
    return clamp_score(count / max(max_count, EPSILON) * 100.0)


def max_of(counts: Mapping[str, float]) -> float:
    return max(counts.values(), default=0)


def candidate_files(commit: Commit, file_set: frozenset[str] | set[str]) -> list[str]:
    """Candidate paths touched by ``commit``, de-duplicated, in commit order."""
    return [f for f in dict.fromkeys(commit.files) if f in file_set]


def as_file_set(files: Iterable[str]) -> frozenset[str]:
    return frozenset(files)
