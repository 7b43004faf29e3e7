"""Author concentration per file (knowledge silos)."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Sequence

from ..history.models import Commit
from .models import SiloData
from .normalize import as_file_set, candidate_files

UNKNOWN_AUTHOR = "unknown"


def top_author(author_counts: Counter[str]) -> tuple[str, int]:
    """Author with the most commits; ties go to the smallest identifier."""
    return min(author_counts.items(), key=lambda item: (-item[1], item[0]))


def analyze_authors(commits: Sequence[Commit], files: Sequence[str]) -> dict[str, SiloData]:
    """Share of each file's commits made by its most active author.

    Files without attributable history report a synthetic unknown author
    at 100%.
    """
    file_set = as_file_set(files)
    file_authors: dict[str, Counter[str]] = defaultdict(Counter)

    for commit in commits:
        for f in candidate_files(commit, file_set):
            file_authors[f][commit.author] += 1

    results: dict[str, SiloData] = {}
    for f in files:
        authors = file_authors.get(f)
        if not authors:
            results[f] = SiloData(top_author=UNKNOWN_AUTHOR, top_author_percent=100.0, author_count=1)
            continue
        name, count = top_author(authors)
        total = sum(authors.values())
        results[f] = SiloData(
            top_author=name,
            top_author_percent=count / total * 100.0,
            author_count=len(authors),
        )
    return results
