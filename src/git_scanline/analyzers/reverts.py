"""Track files that appear in revert commits."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from ..history.models import Commit
from .models import RevertData
from .normalize import as_file_set, candidate_files, max_normalized, max_of
from .patterns import is_revert


def analyze_reverts(commits: Sequence[Commit], files: Sequence[str]) -> dict[str, RevertData]:
    file_set = as_file_set(files)
    revert_counts: Counter[str] = Counter()

    for commit in commits:
        if is_revert(commit.subject):
            revert_counts.update(candidate_files(commit, file_set))

    max_count = max_of(revert_counts)
    return {
        f: RevertData(
            revert_count=revert_counts[f],
            revert_score=max_normalized(revert_counts[f], max_count),
        )
        for f in files
    }
