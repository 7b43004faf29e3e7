"""Flag security-sensitive files anywhere in history.

Runs over unfiltered commits: a secret deleted from the tree is still
retrievable from git history.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..history.models import Commit
from .models import SecurityRisk
from .patterns import CREDENTIAL_FILE_PATTERN, ENV_FILE_PATTERN, KEY_FILE_PATTERN

_RISK_CLASSES = (
    ("env-file", ENV_FILE_PATTERN),
    ("key-or-cert", KEY_FILE_PATTERN),
    ("credential-file", CREDENTIAL_FILE_PATTERN),
)


def classify_file(path: str) -> Optional[str]:
    """Risk type for ``path``, or None if it looks harmless."""
    for risk_type, pattern in _RISK_CLASSES:
        if pattern.search(path):
            return risk_type
    return None


def format_date(timestamp: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return "unknown"


@dataclass
class _Sighting:
    risk_type: str
    count: int
    first: int
    last: int


def analyze_security(commits: Sequence[Commit]) -> list[SecurityRisk]:
    """One entry per flagged path, most frequently committed first."""
    sightings: dict[str, _Sighting] = {}

    for commit in commits:
        for path in dict.fromkeys(commit.files):
            seen = sightings.get(path)
            if seen is not None:
                seen.count += 1
                seen.first = min(seen.first, commit.timestamp)
                seen.last = max(seen.last, commit.timestamp)
                continue
            risk_type = classify_file(path)
            if risk_type is not None:
                sightings[path] = _Sighting(risk_type, 1, commit.timestamp, commit.timestamp)

    risks = [
        SecurityRisk(
            file=path,
            risk_type=s.risk_type,
            commit_count=s.count,
            first_seen=format_date(s.first),
            last_seen=format_date(s.last),
        )
        for path, s in sightings.items()
    ]
    risks.sort(key=lambda r: (-r.commit_count, r.file))
    return risks
