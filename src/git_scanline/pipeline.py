"""End-to-end analysis of one or more repositories.

Parsing happens once, synchronously. The seven analyzers then run as a
fixed fork-join fan-out over the same immutable inputs; scoring starts
only after every analyzer has returned.
"""

from __future__ import annotations

import os
import re
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from .analyzers import (
    analyze_authors,
    analyze_bug_correlation,
    analyze_bursts,
    analyze_churn,
    analyze_commit_quality,
    analyze_coupling,
    analyze_reverts,
    analyze_security,
)
from .analyzers.models import CouplingEntry, SecurityRisk
from .exceptions import NoCommitsError, NoFilesError, ScanlineError
from .filters import FilterOverrides, filter_files
from .history import GitLogRunner, LogRunner, parse_log
from .logging_config import get_logger
from .scoring import HotspotResult, Weights, score_hotspots

logger = get_logger(__name__)

ProgressCallback = Callable[[str], None]

PHASES = (
    "Parsing commit log + diff stats",
    "Scanning for security risks",
    "Filtering files",
    "Running all analyzers in parallel",
    "Scoring hotspots",
)


@dataclass(frozen=True)
class ReportMeta:
    since: str
    commit_count: int
    file_count: int
    analyzed_at: str
    repo_path: str


@dataclass
class Report:
    meta: ReportMeta
    results: list[HotspotResult]  # one per candidate file, unsorted
    couplings: list[CouplingEntry] = field(default_factory=list)
    security_risks: list[SecurityRisk] = field(default_factory=list)


def run_analysis(
    repo_path: str | Path,
    since: str = "",
    path_filter: Optional[str] = None,
    weights: Optional[Weights] = None,
    filter_overrides: Optional[FilterOverrides] = None,
    runner: Optional[LogRunner] = None,
    max_workers: Optional[int] = None,
    now: Optional[float] = None,
    progress: Optional[ProgressCallback] = None,
) -> Report:
    """Analyze one repository and return its full, unsorted report.

    Raises:
        GitLaunchError / GitLogError: the log command failed
        NoCommitsError: the history window is empty
        NoFilesError: nothing survived the file filter
    """
    repo_path = Path(repo_path)
    runner = runner or GitLogRunner(repo_path)
    weights = (weights or Weights()).normalized()
    if now is None:
        now = time.time()

    def step(index: int) -> float:
        if progress is not None:
            progress(f"[{index + 1}/{len(PHASES)}] {PHASES[index]}...")
        return time.perf_counter()

    started = step(0)
    parsed = parse_log(runner, since=since, path_filter=path_filter)
    if parsed.total_commits == 0:
        raise NoCommitsError(str(repo_path), since)
    commits = tuple(parsed.commits)
    logger.info("Parsed %d commits in %.2fs", parsed.total_commits, time.perf_counter() - started)

    started = step(1)
    security_risks = analyze_security(commits)
    logger.info("Security scan found %d risk(s) in %.2fs", len(security_risks), time.perf_counter() - started)

    started = step(2)
    files = tuple(filter_files(parsed.touched_files(), path_filter, filter_overrides))
    if not files:
        raise NoFilesError(path_filter)
    logger.info("Kept %d files after filtering in %.2fs", len(files), time.perf_counter() - started)

    started = step(3)
    with ThreadPoolExecutor(max_workers=max_workers or min(7, os.cpu_count() or 1)) as executor:
        churn_f = executor.submit(analyze_churn, commits, files, now)
        bugs_f = executor.submit(analyze_bug_correlation, commits, files)
        reverts_f = executor.submit(analyze_reverts, commits, files)
        bursts_f = executor.submit(analyze_bursts, commits, files)
        coupling_f = executor.submit(analyze_coupling, commits, files)
        silo_f = executor.submit(analyze_authors, commits, files)
        quality_f = executor.submit(analyze_commit_quality, commits, files)

        churn_data = churn_f.result()
        bug_data = bugs_f.result()
        revert_data = reverts_f.result()
        burst_data = bursts_f.result()
        couplings = coupling_f.result()
        silo_data = silo_f.result()
        quality_data = quality_f.result()
    logger.info("Ran 7 analyzers in %.2fs", time.perf_counter() - started)

    started = step(4)
    results = score_hotspots(
        files,
        churn_data,
        bug_data,
        revert_data,
        burst_data,
        couplings,
        silo_data,
        quality_data,
        parsed.diff_stats,
        weights,
    )
    logger.info("Scored %d files in %.2fs", len(results), time.perf_counter() - started)

    meta = ReportMeta(
        since=since or "all history",
        commit_count=parsed.total_commits,
        file_count=len(files),
        analyzed_at=datetime.fromtimestamp(now, tz=timezone.utc).isoformat(),
        repo_path=str(repo_path),
    )
    return Report(meta=meta, results=results, couplings=couplings, security_risks=security_risks)


def select_results(
    results: Iterable[HotspotResult], top: Optional[int] = None, bugs_only: bool = False
) -> list[HotspotResult]:
    """Highest scores first, optionally bug-fix files only, truncated to ``top``."""
    ranked = sorted(results, key=lambda r: (-r.hotspot_score, r.file))
    if bugs_only:
        ranked = [r for r in ranked if r.details.bug_commits > 0]
    if top is not None:
        ranked = ranked[:top]
    return ranked


def run_many(
    repos: Sequence[Path],
    analyze: Optional[Callable[[Path], Report]] = None,
) -> tuple[dict[Path, Report], dict[Path, ScanlineError]]:
    """Analyze each repository independently.

    A failure in one repository is logged and recorded; its siblings still
    run.
    """
    analyze = analyze or run_analysis
    reports: dict[Path, Report] = {}
    errors: dict[Path, ScanlineError] = {}
    for repo in repos:
        try:
            reports[repo] = analyze(repo)
        except ScanlineError as e:
            logger.warning("Skipping %s: %s", repo, e)
            errors[repo] = e
    return reports, errors


SKIP_SCAN_DIRS = frozenset(
    {
        "node_modules",
        "vendor",
        "target",
        "dist",
        "build",
        ".cache",
        ".git",
        "__pycache__",
        ".npm",
        ".yarn",
    }
)
MAX_SCAN_DEPTH = 6


def find_git_repos(root: Path, max_depth: int = MAX_SCAN_DEPTH) -> list[Path]:
    """Find repository roots at or below ``root``.

    A repository's own subdirectories are not searched for nested
    repositories.
    """
    if (root / ".git").exists():
        return [root]
    repos: list[Path] = []
    _scan_for_repos(root, 0, max_depth, repos)
    return sorted(repos)


def _scan_for_repos(directory: Path, depth: int, max_depth: int, repos: list[Path]) -> None:
    if depth > max_depth:
        return
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return
    for entry in entries:
        if not entry.is_dir() or entry.name.startswith(".") or entry.name in SKIP_SCAN_DIRS:
            continue
        if (entry / ".git").exists():
            repos.append(entry)
        else:
            _scan_for_repos(entry, depth + 1, max_depth, repos)


_UNSAFE_NAME_CHARS = re.compile(r"[^\w-]")


def make_output_path(base: Path, repo_name: str) -> Path:
    """``report.json`` + ``my-app`` -> ``report-my-app.json``."""
    safe = _UNSAFE_NAME_CHARS.sub("-", repo_name)
    suffix = base.suffix or ".json"
    return base.with_name(f"{base.stem}-{safe}{suffix}")
