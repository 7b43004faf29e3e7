"""Data models for parsed version-control history."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Commit:
    hash: str
    author: str  # author email
    timestamp: int  # unix seconds
    subject: str
    files: tuple[str, ...] = ()  # paths touched, after rename resolution


@dataclass
class DiffStats:
    additions: int = 0
    deletions: int = 0

    def add(self, additions: int, deletions: int) -> None:
        self.additions += additions
        self.deletions += deletions


DiffStatsMap = dict[str, DiffStats]


@dataclass
class ParsedLog:
    commits: list[Commit]  # in log order, newest first
    diff_stats: DiffStatsMap = field(default_factory=dict)

    @property
    def total_commits(self) -> int:
        return len(self.commits)

    def touched_files(self) -> set[str]:
        """Union of every path touched by any commit."""
        files: set[str] = set()
        for commit in self.commits:
            files.update(commit.files)
        return files
