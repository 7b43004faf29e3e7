"""Per-signal result types produced by the analyzers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChurnData:
    commit_count: int
    raw_score: float  # share of all commits, scaled x5 and capped
    weighted_score: float  # recency-decayed, normalized to the busiest file


@dataclass(frozen=True)
class BugData:
    bug_commits: int
    bug_score: float


@dataclass(frozen=True)
class RevertData:
    revert_count: int
    revert_score: float


@dataclass(frozen=True)
class BurstData:
    burst_incidents: int
    burst_score: float


@dataclass(frozen=True)
class SiloData:
    top_author: str
    top_author_percent: float
    author_count: int


@dataclass(frozen=True)
class CommitQualityData:
    wip_commits: int
    large_commit_count: int
    commit_quality_score: float


@dataclass(frozen=True)
class CouplingEntry:
    file_a: str  # file_a < file_b
    file_b: str
    co_changes: int
    strength: float  # Jaccard overlap, 0-100


@dataclass(frozen=True)
class SecurityRisk:
    file: str
    risk_type: str  # "env-file" | "key-or-cert" | "credential-file"
    commit_count: int
    first_seen: str  # YYYY-MM-DD (UTC)
    last_seen: str
