"""Per-file involvement in low-quality (WIP) and oversized commits."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from ..history.models import Commit
from .models import CommitQualityData
from .normalize import as_file_set, candidate_files, clamp_score, max_normalized, max_of
from .patterns import GENERIC_SUBJECT_PATTERN, WIP_KEYWORD_PATTERN

LARGE_COMMIT_THRESHOLD = 30
SHORT_MESSAGE_MIN_LENGTH = 10
WIP_SHARE = 0.6
LARGE_SHARE = 0.4


def is_low_quality(subject: str) -> bool:
    """WIP keyword, generic one-word message, or too short to be useful."""
    subject = subject.strip()
    return (
        len(subject) < SHORT_MESSAGE_MIN_LENGTH
        or WIP_KEYWORD_PATTERN.search(subject) is not None
        or GENERIC_SUBJECT_PATTERN.match(subject) is not None
    )


def is_large(commit: Commit) -> bool:
    return len(commit.files) > LARGE_COMMIT_THRESHOLD


def analyze_commit_quality(
    commits: Sequence[Commit], files: Sequence[str]
) -> dict[str, CommitQualityData]:
    file_set = as_file_set(files)
    wip_counts: Counter[str] = Counter()
    large_counts: Counter[str] = Counter()

    for commit in commits:
        wip = is_low_quality(commit.subject)
        large = is_large(commit)
        if not (wip or large):
            continue
        touched = candidate_files(commit, file_set)
        if wip:
            wip_counts.update(touched)
        if large:
            large_counts.update(touched)

    max_wip = max_of(wip_counts)
    max_large = max_of(large_counts)

    results: dict[str, CommitQualityData] = {}
    for f in files:
        score = (
            max_normalized(wip_counts[f], max_wip) * WIP_SHARE
            + max_normalized(large_counts[f], max_large) * LARGE_SHARE
        )
        results[f] = CommitQualityData(
            wip_commits=wip_counts[f],
            large_commit_count=large_counts[f],
            commit_quality_score=clamp_score(score),
        )
    return results
