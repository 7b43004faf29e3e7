"""Main analysis command."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..config import ScanlineConfig, load_config, write_template
from ..exceptions import ScanlineError
from ..formatters import BaseFormatter, get_formatter
from ..logging_config import setup_logging
from ..pipeline import Report, find_git_repos, make_output_path, run_analysis, run_many, select_results
from . import app
from ._common import console, err_console, print_error
from .progress import AnalysisProgress


def _collect_weights(**weights: Optional[float]) -> Optional[dict]:
    given = {name: value for name, value in weights.items() if value is not None}
    return given or None


def _write_report(
    formatter: BaseFormatter,
    report: Report,
    config: ScanlineConfig,
    output: Optional[Path],
) -> None:
    results = select_results(report.results, top=config.top, bugs_only=config.bugs_only)
    if output is None:
        formatter.render(report, results)
        return
    output.write_text(formatter.format(report, results), encoding="utf-8")
    err_console.print(f"[dim]Report written to {escape(str(output))}[/dim]")


@app.command()
def main(
    path: Optional[Path] = typer.Argument(
        None,
        help="Git repository, or a parent folder containing several repositories",
        file_okay=False,
        dir_okay=True,
    ),
    since: Optional[str] = typer.Option(
        None, "--since", help='History window, e.g. "6 months ago" (default: all history)'
    ),
    scope: Optional[str] = typer.Option(
        None, "--path", help="Restrict analysis to a subdirectory of the repository"
    ),
    top: Optional[int] = typer.Option(None, "--top", "-t", help="Number of hotspots to show", min=1),
    bugs_only: bool = typer.Option(
        False, "--bugs-only", help="Only show files that appear in bug-fix commits"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: terminal, json"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the report to a file (one per repository)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="TOML config file", dir_okay=False
    ),
    weight_churn: Optional[float] = typer.Option(None, "--weight-churn"),
    weight_bugs: Optional[float] = typer.Option(None, "--weight-bugs"),
    weight_reverts: Optional[float] = typer.Option(None, "--weight-reverts"),
    weight_bursts: Optional[float] = typer.Option(None, "--weight-bursts"),
    weight_coupling: Optional[float] = typer.Option(None, "--weight-coupling"),
    weight_silo: Optional[float] = typer.Option(None, "--weight-silo"),
    weight_commit_quality: Optional[float] = typer.Option(None, "--weight-commit-quality"),
    generate_config: bool = typer.Option(
        False, "--generate-config", help="Print an annotated config template (or write it to --output)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Append logs to this file"),
) -> None:
    """
    Scan git history to surface bug-prone code hotspots.

    Files are ranked by churn, bug-fix correlation, reverts, commit bursts,
    co-change coupling, author concentration and commit hygiene.
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    try:
        if generate_config:
            write_template(output)
            raise typer.Exit(0)

        config = load_config(
            config_file=config_file,
            since=since,
            path=scope,
            top=top,
            bugs_only=True if bugs_only else None,
            format=output_format,
            output=str(output) if output else None,
            weights=_collect_weights(
                churn=weight_churn,
                bugs=weight_bugs,
                reverts=weight_reverts,
                bursts=weight_bursts,
                coupling=weight_coupling,
                silo=weight_silo,
                commit_quality=weight_commit_quality,
            ),
        )
    except ScanlineError as e:
        print_error(str(e))
        raise typer.Exit(1)

    root = path or Path.cwd()
    if not root.exists():
        print_error(f"Path does not exist: {root}")
        raise typer.Exit(1)

    repos = find_git_repos(root)
    if not repos:
        print_error(f"No git repositories found under: {root}")
        raise typer.Exit(1)

    is_multi = len(repos) > 1
    if is_multi:
        err_console.print(f"[bold]Found {len(repos)} git repositories[/bold]")
        for repo in repos:
            err_console.print(f"  [dim]•[/dim] {escape(str(repo))}")

    def analyze_repo(repo: Path) -> Report:
        label = repo.name if is_multi else ""
        with AnalysisProgress(err_console, label=label, enabled=config.format == "terminal") as progress:
            return run_analysis(
                repo,
                since=config.since,
                path_filter=config.path,
                weights=config.weights,
                filter_overrides=config.filter_overrides(),
                progress=progress.update,
            )

    reports, errors = run_many(repos, analyze=analyze_repo)
    for repo, error in errors.items():
        print_error(f"{repo.name}: {error}")

    formatter = get_formatter(config.format)
    base_output = Path(config.output) if config.output else None
    for repo, report in reports.items():
        target = base_output
        if base_output is not None and is_multi:
            target = make_output_path(base_output, repo.name)
        if is_multi and target is None and config.format == "terminal":
            console.rule(f"[bold]{escape(repo.name)}[/bold]")
        _write_report(formatter, report, config, target)

    if not reports:
        raise typer.Exit(1)
