from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from villain_timeline.cli.utils import fail
from villain_timeline.core.exceptions import TimelineError
from villain_timeline.exporter import read_json
from villain_timeline.validation import validate_serialized_dataset

console = Console()


def stats_command(
    dataset: Path = typer.Argument(..., exists=True, readable=True),
    top: int = typer.Option(
        10,
        "--top",
        "-n",
        min=0,
        help="How many of the most frequent villains to list",
    ),
):
    """
    Show summary statistics for a processed or merged villains file.
    """
    try:
        data = validate_serialized_dataset(read_json(dataset), source=str(dataset))
    except TimelineError as exc:
        fail(exc)
        return

    stats = data.get("stats") or {}

    table = Table(title=f"{data.get('series') or dataset.stem} Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Villains", str(stats.get("totalVillains", len(data.get("villains") or []))))
    table.add_row("Groups", str(len(data.get("groups") or [])))
    table.add_row("Timeline entries", str(len(data.get("timeline") or [])))
    table.add_row("Most frequent", str(stats.get("mostFrequent", "")))
    table.add_row("Most frequent count", str(stats.get("mostFrequentCount", 0)))
    table.add_row("Average frequency", f"{stats.get('averageFrequency', 0):.2f}")

    console.print(table)

    if top <= 0:
        return

    ranked = sorted(data.get("villains") or [], key=lambda v: v.get("frequency", 0), reverse=True)[:top]

    villains = Table(title="Most Frequent Villains")
    villains.add_column("Name", style="bold")
    villains.add_column("Appearances", justify="right")
    villains.add_column("First", justify="right")
    villains.add_column("Source")

    for v in ranked:
        villains.add_row(
            v["name"],
            str(v.get("frequency", len(v.get("appearances") or []))),
            str(v.get("firstAppearance", "")),
            str(v.get("identitySource", "")),
        )

    console.print(villains)
