"""Correlate files with bug-fix commits."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from ..history.models import Commit
from .models import BugData
from .normalize import as_file_set, candidate_files, max_normalized, max_of
from .patterns import is_bug_fix


def analyze_bug_correlation(commits: Sequence[Commit], files: Sequence[str]) -> dict[str, BugData]:
    """Count bug-fix commits per file and scale by the most bug-prone file."""
    file_set = as_file_set(files)
    bug_counts: Counter[str] = Counter()

    for commit in commits:
        if not is_bug_fix(commit.subject):
            continue
        bug_counts.update(candidate_files(commit, file_set))

    max_count = max_of(bug_counts)
    return {
        f: BugData(bug_commits=bug_counts[f], bug_score=max_normalized(bug_counts[f], max_count))
        for f in files
    }
