"""Rich terminal formatter for git-scanline."""

import io
from typing import List, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..pipeline import Report
from ..scoring import HotspotResult, Tier
from .base import MAX_COUPLINGS, BaseFormatter

TIER_STYLES = {
    Tier.CRITICAL: "red bold",
    Tier.HIGH: "red",
    Tier.MEDIUM: "yellow",
    Tier.LOW: "green",
}


def _tier_label(tier: Tier) -> str:
    style = TIER_STYLES[tier]
    return f"[{style}]{tier.value}[/{style}]"


def _short_author(author: str) -> str:
    return author.split("@", 1)[0]


class TerminalFormatter(BaseFormatter):
    """Hotspot table, coupling pairs and security risks as rich tables."""

    def __init__(self, width: int = 120):
        self.width = width

    def render(
        self, report: Report, results: List[HotspotResult], out: Optional[TextIO] = None
    ) -> None:
        console = Console(file=out, width=self.width)
        self._print(console, report, results)

    def format(self, report: Report, results: List[HotspotResult]) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, width=self.width, force_terminal=False, color_system=None)
        self._print(console, report, results)
        return buffer.getvalue()

    def _print(self, console: Console, report: Report, results: List[HotspotResult]) -> None:
        meta = report.meta
        console.print()
        console.print(f"[bold cyan]GIT-SCANLINE[/]  [dim]{escape(meta.repo_path)}[/]")
        console.print(
            f"[dim]{meta.commit_count} commits, {meta.file_count} files, since {escape(meta.since)}[/]"
        )
        console.print()

        if results:
            console.print(self._hotspot_table(results))
        else:
            console.print("[yellow]No hotspots matched the current filters.[/yellow]")

        if report.couplings:
            console.print()
            console.print(self._coupling_table(report))

        if report.security_risks:
            console.print()
            console.print(self._security_table(report))

        console.print()
        counts = {tier: 0 for tier in Tier}
        for r in report.results:
            counts[r.tier] += 1
        summary = "  ".join(f"{_tier_label(t)} {counts[t]}" for t in Tier)
        console.print(f"[bold]Tiers:[/bold] {summary}")

    def _hotspot_table(self, results: List[HotspotResult]) -> Table:
        table = Table(title="Hotspots", title_justify="left", expand=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("File", overflow="fold")
        table.add_column("Score", justify="right")
        table.add_column("Tier")
        table.add_column("Commits", justify="right")
        table.add_column("Bugs", justify="right")
        table.add_column("Reverts", justify="right")
        table.add_column("Bursts", justify="right")
        table.add_column("Top author")
        table.add_column("+/-", justify="right")

        for rank, r in enumerate(results, start=1):
            d = r.details
            table.add_row(
                str(rank),
                escape(r.file),
                f"{r.hotspot_score:.1f}",
                _tier_label(r.tier),
                str(d.commit_count),
                str(d.bug_commits),
                str(d.revert_count),
                str(d.burst_incidents),
                f"{escape(_short_author(d.top_author))} ({d.top_author_percent:.0f}%)",
                f"+{d.additions}/-{d.deletions}",
            )
        return table

    def _coupling_table(self, report: Report) -> Table:
        table = Table(title="Co-change coupling", title_justify="left")
        table.add_column("File A", overflow="fold")
        table.add_column("File B", overflow="fold")
        table.add_column("Together", justify="right")
        table.add_column("Strength", justify="right")
        for c in report.couplings[:MAX_COUPLINGS]:
            table.add_row(escape(c.file_a), escape(c.file_b), str(c.co_changes), f"{c.strength:.0f}%")
        return table

    def _security_table(self, report: Report) -> Table:
        table = Table(title="[red]Security risks in history[/red]", title_justify="left")
        table.add_column("File", overflow="fold")
        table.add_column("Type")
        table.add_column("Commits", justify="right")
        table.add_column("First seen")
        table.add_column("Last seen")
        for s in report.security_risks:
            table.add_row(escape(s.file), s.risk_type, str(s.commit_count), s.first_seen, s.last_seen)
        return table
