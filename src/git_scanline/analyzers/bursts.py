"""Detect rapid successive commits to the same file (patch-on-patch fixing)."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from ..history.models import Commit
from .models import BurstData
from .normalize import as_file_set, candidate_files, max_normalized

BURST_WINDOW_SECS = 24 * 3600
BURST_MIN_COMMITS = 3


def count_bursts(
    timestamps: Sequence[int],
    window_secs: int = BURST_WINDOW_SECS,
    min_commits: int = BURST_MIN_COMMITS,
) -> int:
    """Count non-overlapping bursts in a list of commit times.

    Scans greedily: a window anchored at each unconsumed timestamp extends
    while later commits fall within ``window_secs`` of the anchor. A window
    with at least ``min_commits`` commits is one incident and is consumed
    whole; otherwise the scan moves on by one commit.
    """
    ordered = sorted(timestamps)
    incidents = 0
    i = 0
    while i < len(ordered):
        j = i + 1
        while j < len(ordered) and ordered[j] - ordered[i] <= window_secs:
            j += 1
        if j - i >= min_commits:
            incidents += 1
            i = j
        else:
            i += 1
    return incidents


def analyze_bursts(commits: Sequence[Commit], files: Sequence[str]) -> dict[str, BurstData]:
    file_set = as_file_set(files)
    file_timestamps: dict[str, list[int]] = defaultdict(list)

    for commit in commits:
        for f in candidate_files(commit, file_set):
            file_timestamps[f].append(commit.timestamp)

    incidents = {f: count_bursts(file_timestamps.get(f, [])) for f in files}
    max_incidents = max(incidents.values(), default=0)

    return {
        f: BurstData(burst_incidents=n, burst_score=max_normalized(n, max_incidents))
        for f, n in incidents.items()
    }
