"""Renderer for CLI output.

Formats detection results as Rich tables. One row per input path; unknown
values are shown as a dim dash so gaps in detection stand out.
"""

from typing import Iterable, Tuple

from rich.console import Console
from rich.table import Table

from seasonscout.models.core import MatchResult

_MISSING = "[dim]-[/dim]"


def _format_episodes(result: MatchResult) -> str:
    return ", ".join(str(ep) for ep in result.episodes) or _MISSING


def render_results(
    rows: Iterable[Tuple[str, MatchResult]],
    console: Console | None = None,
    title: str = "Detected Episodes",
) -> None:
    """Render ``(source, result)`` pairs as a table.

    Args:
        rows: Input string and its detection result.
        console: Optional Console instance to use for rendering.
        title: Table title.
    """
    console = console or Console()

    table = Table(title=title)
    table.add_column("Source", style="cyan", overflow="fold")
    table.add_column("Season", justify="right", style="bold")
    table.add_column("Episodes", style="green")
    table.add_column("Date", style="magenta")
    table.add_column("Title", style="yellow", overflow="fold")
    table.add_column("Stacked")

    count = 0
    for source, result in rows:
        count += 1
        table.add_row(
            source,
            str(result.season) if result.has_season else _MISSING,
            _format_episodes(result),
            result.date.isoformat() if result.date else _MISSING,
            result.name or _MISSING,
            "yes" if result.stacking_marker_found else "no",
        )

    console.print(table)
    console.print(f"Total: {count}")
