"""Combine every per-file signal into one weighted hotspot score and tier."""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass, fields
from enum import Enum
from typing import Mapping, Optional, Sequence

import numpy as np

from .analyzers.coupling import coupling_scores
from .analyzers.models import (
    BugData,
    BurstData,
    ChurnData,
    CommitQualityData,
    CouplingEntry,
    RevertData,
    SiloData,
)
from .analyzers.normalize import clamp_score
from .analyzers.silo import UNKNOWN_AUTHOR
from .exceptions import InvalidConfigError
from .history.models import DiffStats, DiffStatsMap

TIER_CRITICAL = 75.0
TIER_HIGH = 50.0
TIER_MEDIUM = 25.0


class Tier(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def get_tier(score: float) -> Tier:
    """Map a 0-100 score to a tier; lower bounds are inclusive."""
    if score >= TIER_CRITICAL:
        return Tier.CRITICAL
    if score >= TIER_HIGH:
        return Tier.HIGH
    if score >= TIER_MEDIUM:
        return Tier.MEDIUM
    return Tier.LOW


@dataclass(frozen=True)
class Weights:
    """Relative importance of each signal. Only the ratios matter."""

    churn: float = 0.27
    bugs: float = 0.27
    reverts: float = 0.14
    bursts: float = 0.09
    coupling: float = 0.09
    silo: float = 0.05
    commit_quality: float = 0.09

    def validate(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidConfigError(f"weights.{f.name}", value, "Must be a finite number")
            if value <= 0:
                raise InvalidConfigError(
                    f"weights.{f.name}",
                    value,
                    "Weights must be greater than 0. They are normalized automatically, "
                    "so only the ratios matter",
                )

    def total(self) -> float:
        return float(sum(astuple(self)))

    def normalized(self) -> "Weights":
        """Weights divided by their sum, so they add up to 1.0."""
        total = self.total()
        if not math.isfinite(total) or total <= 0:
            raise InvalidConfigError("weights", astuple(self), "Weights must have a positive sum")
        return Weights(*(w / total for w in astuple(self)))

    def as_array(self) -> np.ndarray:
        return np.array(astuple(self), dtype=float)


@dataclass(frozen=True)
class HotspotDetails:
    """Raw counts carried through for reporting."""

    commit_count: int = 0
    bug_commits: int = 0
    revert_count: int = 0
    burst_incidents: int = 0
    wip_commits: int = 0
    large_commit_count: int = 0
    top_author: str = UNKNOWN_AUTHOR
    top_author_percent: float = 0.0
    author_count: int = 1
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class HotspotResult:
    file: str
    hotspot_score: float
    churn_score: float
    bug_fix_score: float
    revert_score: float
    burst_score: float
    coupling_score: float
    silo_score: float
    commit_quality_score: float
    tier: Tier
    details: HotspotDetails


_NO_CHURN = ChurnData(commit_count=0, raw_score=0.0, weighted_score=0.0)
_NO_BUGS = BugData(bug_commits=0, bug_score=0.0)
_NO_REVERTS = RevertData(revert_count=0, revert_score=0.0)
_NO_BURSTS = BurstData(burst_incidents=0, burst_score=0.0)
_NO_SILO = SiloData(top_author=UNKNOWN_AUTHOR, top_author_percent=0.0, author_count=1)
_NO_QUALITY = CommitQualityData(wip_commits=0, large_commit_count=0, commit_quality_score=0.0)
_NO_DIFF = DiffStats()


def score_hotspots(
    files: Sequence[str],
    churn_data: Mapping[str, ChurnData],
    bug_data: Mapping[str, BugData],
    revert_data: Mapping[str, RevertData],
    burst_data: Mapping[str, BurstData],
    couplings: Sequence[CouplingEntry],
    silo_data: Mapping[str, SiloData],
    commit_quality_data: Mapping[str, CommitQualityData],
    diff_stats: Optional[DiffStatsMap] = None,
    weights: Optional[Weights] = None,
) -> list[HotspotResult]:
    """Build one HotspotResult per file, in input order.

    Churn contributes its recency-weighted score; silo contributes the top
    author's share directly. A file missing from any signal map scores the
    neutral value for that signal. Sorting and truncation are left to the
    caller.
    """
    weight_vector = (weights or Weights()).normalized().as_array()
    diff_stats = diff_stats or {}
    coupling_by_file = coupling_scores(files, couplings)

    results: list[HotspotResult] = []
    for f in files:
        churn = churn_data.get(f, _NO_CHURN)
        bugs = bug_data.get(f, _NO_BUGS)
        reverts = revert_data.get(f, _NO_REVERTS)
        bursts = burst_data.get(f, _NO_BURSTS)
        silo = silo_data.get(f, _NO_SILO)
        quality = commit_quality_data.get(f, _NO_QUALITY)
        diff = diff_stats.get(f, _NO_DIFF)

        signals = np.array(
            [
                churn.weighted_score,
                bugs.bug_score,
                reverts.revert_score,
                bursts.burst_score,
                coupling_by_file.get(f, 0.0),
                silo.top_author_percent,
                quality.commit_quality_score,
            ],
            dtype=float,
        )
        signals = np.clip(signals, 0.0, 100.0)
        hotspot_score = clamp_score(float(signals @ weight_vector))

        results.append(
            HotspotResult(
                file=f,
                hotspot_score=hotspot_score,
                churn_score=float(signals[0]),
                bug_fix_score=float(signals[1]),
                revert_score=float(signals[2]),
                burst_score=float(signals[3]),
                coupling_score=float(signals[4]),
                silo_score=float(signals[5]),
                commit_quality_score=float(signals[6]),
                tier=get_tier(hotspot_score),
                details=HotspotDetails(
                    commit_count=churn.commit_count,
                    bug_commits=bugs.bug_commits,
                    revert_count=reverts.revert_count,
                    burst_incidents=bursts.burst_incidents,
                    wip_commits=quality.wip_commits,
                    large_commit_count=quality.large_commit_count,
                    top_author=silo.top_author,
                    top_author_percent=silo.top_author_percent,
                    author_count=silo.author_count,
                    additions=diff.additions,
                    deletions=diff.deletions,
                ),
            )
        )
    return results
