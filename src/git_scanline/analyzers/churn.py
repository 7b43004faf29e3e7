"""Commit frequency with exponential recency decay."""

from __future__ import annotations

import time
from collections import defaultdict
from typing import Optional, Sequence

import numpy as np

from ..history.models import Commit
from .models import ChurnData
from .normalize import as_file_set, candidate_files, clamp_score, max_normalized

# Exponential decay: lambda = 0.005 gives a half-life of about 139 days
DECAY_LAMBDA = 0.005
SECONDS_PER_DAY = 86400
# A file in 20% of all commits reaches the raw-score ceiling.
RAW_SCORE_SCALE = 500.0


def decay_weights(commits: Sequence[Commit], now: Optional[float] = None) -> np.ndarray:
    """Recency weight ``exp(-lambda * days_since)`` for every commit.

    Age is counted in whole days. Future-dated commits are treated as made
    right now.
    """
    if now is None:
        now = time.time()
    timestamps = np.fromiter((c.timestamp for c in commits), dtype=float, count=len(commits))
    days_since = np.maximum(0.0, (now - timestamps) // SECONDS_PER_DAY)
    return np.exp(-DECAY_LAMBDA * days_since)


def analyze_churn(
    commits: Sequence[Commit], files: Sequence[str], now: Optional[float] = None
) -> dict[str, ChurnData]:
    """Per-file commit count, raw share of commits, and decayed churn score."""
    file_set = as_file_set(files)
    counts: dict[str, int] = defaultdict(int)
    weighted: dict[str, float] = defaultdict(float)

    for commit, weight in zip(commits, decay_weights(commits, now).tolist()):
        for f in candidate_files(commit, file_set):
            counts[f] += 1
            weighted[f] += weight

    total_commits = max(len(commits), 1)
    max_weighted = max(weighted.values(), default=0.0)

    return {
        f: ChurnData(
            commit_count=counts.get(f, 0),
            raw_score=clamp_score(counts.get(f, 0) / total_commits * RAW_SCORE_SCALE),
            weighted_score=max_normalized(weighted.get(f, 0.0), max_weighted),
        )
        for f in files
    }
