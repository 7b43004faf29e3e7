"""CLI entry point for git-scanline."""

import typer

app = typer.Typer(
    name="git-scanline",
    help="Scan git history to surface bug-prone code hotspots",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command module to register it
from .analyze import main as _main  # noqa: F401, E402
