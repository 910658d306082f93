"""Console output for pipeline results."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from .pipeline import PipelineResult


def make_console() -> Console:
    return Console(soft_wrap=True, highlight=False, emoji=False)


def report(result: PipelineResult, console: Console) -> None:
    if result.ok:
        console.print(f"[yellow]Successfully {result.mode.past} {escape(result.repo_name or '')}![/yellow]")
    else:
        console.print(f"[red]Error {result.mode.gerund} git repository: {escape(result.error or '')}[/red]")


__all__ = ["make_console", "report"]
