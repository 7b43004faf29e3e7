"""Spinner showing the analysis phases on stderr."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class AnalysisProgress:
    """Transient spinner that follows pipeline phase messages."""

    def __init__(self, console: Console, label: str = "", enabled: bool = True):
        self.console = console
        self.label = label
        self.enabled = enabled
        self._progress: Optional[Progress] = None
        self._task_id = None

    def __enter__(self) -> "AnalysisProgress":
        if self.enabled:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[bold]{task.description}"),
                TimeElapsedColumn(),
                console=self.console,
                transient=True,
            )
            self._progress.start()
            self._task_id = self._progress.add_task("Starting...", total=None)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def update(self, message: str) -> None:
        if self._progress is None or self._task_id is None:
            return
        prefix = escape(f"[{self.label}] ") if self.label else ""
        self._progress.update(self._task_id, description=f"{prefix}{message}")
