"""Co-change coupling between files, measured by Jaccard overlap."""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import Sequence

from ..history.models import Commit
from .models import CouplingEntry
from .normalize import as_file_set, candidate_files, clamp_score

# Commits touching more candidate files are bulk changes (reformats,
# mass renames) and contribute no pairs.
MAX_FILES_PER_COMMIT = 20
MIN_CO_CHANGES = 3


def analyze_coupling(
    commits: Sequence[Commit],
    files: Sequence[str],
    max_files_per_commit: int = MAX_FILES_PER_COMMIT,
    min_co_changes: int = MIN_CO_CHANGES,
) -> list[CouplingEntry]:
    """Find file pairs that change together at least ``min_co_changes`` times.

    Strength is ``co / (touches_a + touches_b - co) * 100``. Touch totals
    count every commit, including bulk commits skipped for pairing.
    Entries are sorted by descending co-change count, then by pair.
    """
    file_set = as_file_set(files)
    touches: Counter[str] = Counter()
    pair_counts: Counter[tuple[str, str]] = Counter()

    for commit in commits:
        touched = candidate_files(commit, file_set)
        touches.update(touched)
        if len(touched) > max_files_per_commit:
            continue
        pair_counts.update(combinations(sorted(touched), 2))

    couplings = []
    for (a, b), co_changes in pair_counts.items():
        if co_changes < min_co_changes:
            continue
        union = touches[a] + touches[b] - co_changes
        strength = co_changes / union * 100.0 if union > 0 else 0.0
        couplings.append(
            CouplingEntry(file_a=a, file_b=b, co_changes=co_changes, strength=clamp_score(strength))
        )

    couplings.sort(key=lambda c: (-c.co_changes, c.file_a, c.file_b))
    return couplings


def coupling_scores(files: Sequence[str], couplings: Sequence[CouplingEntry]) -> dict[str, float]:
    """Each file's strongest coupling, or 0.0 if it has none."""
    scores = {f: 0.0 for f in files}
    for c in couplings:
        for f in (c.file_a, c.file_b):
            if f in scores:
                scores[f] = max(scores[f], c.strength)
    return scores
