"""Independent per-file signal analyzers over parsed commit history."""

from .bugs import analyze_bug_correlation
from .bursts import analyze_bursts, count_bursts
from .churn import analyze_churn
from .commit_quality import analyze_commit_quality
from .coupling import analyze_coupling, coupling_scores
from .models import (
    BugData,
    BurstData,
    ChurnData,
    CommitQualityData,
    CouplingEntry,
    RevertData,
    SecurityRisk,
    SiloData,
)
from .reverts import analyze_reverts
from .security import analyze_security, classify_file
from .silo import analyze_authors

__all__ = [
    "BugData",
    "BurstData",
    "ChurnData",
    "CommitQualityData",
    "CouplingEntry",
    "RevertData",
    "SecurityRisk",
    "SiloData",
    "analyze_authors",
    "analyze_bug_correlation",
    "analyze_bursts",
    "analyze_churn",
    "analyze_commit_quality",
    "analyze_coupling",
    "analyze_reverts",
    "analyze_security",
    "classify_file",
    "count_bursts",
    "coupling_scores",
]
