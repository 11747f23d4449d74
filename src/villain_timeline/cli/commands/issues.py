from __future__ import annotations

from typing import List, Optional

import typer
from rich.markup import escape

from villain_timeline.cli.utils import console, fail
from villain_timeline.core.exceptions import TimelineError
from villain_timeline.series import SeriesName, default_issues_for_series, parse_issue_spec


def format_ranges(issues: List[int]) -> str:
    """[1, 2, 3, 5, 7, 8] -> "1-3, 5, 7-8" """
    parts: List[str] = []
    start = prev = None
    for n in issues:
        if prev is not None and n == prev + 1:
            prev = n
            continue
        if start is not None:
            parts.append(f"{start}-{prev}" if prev != start else str(start))
        start = prev = n
    if start is not None:
        parts.append(f"{start}-{prev}" if prev != start else str(start))
    return ", ".join(parts)


def issues_command(
    series: str = typer.Argument(..., help='Series name, e.g. "Amazing Spider-Man Vol 1"'),
    issues: Optional[str] = typer.Option(
        None,
        "--issues",
        "-i",
        help='Issue list such as "1-20,50" (default: the full known volume)',
    ),
):
    """
    Show which issues of a series the page fetcher should request.
    """
    try:
        numbers = parse_issue_spec(issues) if issues is not None else default_issues_for_series(series)
    except TimelineError as exc:
        fail(exc)
        return

    console.print(
        f"[bold]{escape(SeriesName(series).to_display())}[/bold]: {len(numbers)} issues "
        f"({format_ranges(numbers)})"
    )
