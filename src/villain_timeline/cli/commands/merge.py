from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from villain_timeline.cli.utils import build_context, console, fail, print_warnings
from villain_timeline.core.exceptions import TimelineError
from villain_timeline.core.pipeline import Pipeline


def merge_command(
    inputs: Optional[List[Path]] = typer.Argument(
        None,
        help="Series files to merge (default: villains.*.json in the data directory)",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output file (default: <data-dir>/villains.json)",
    ),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        help="Data directory (default: paths.data_dir from config)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Merge per-series outputs into one chronologically ordered dataset.
    """
    ctx = build_context(inputs=inputs, out=out, data_dir=data_dir, verbose=verbose)

    try:
        result = Pipeline(ctx).run_merge()
    except TimelineError as exc:
        fail(exc)
        return

    print_warnings(ctx.warnings)
    stats = result["stats"]
    console.print(
        f"[green]Merged[/green] {stats['totalVillains']} villains across "
        f"{len(result['timeline'])} issues -> {ctx.output_path}"
    )
