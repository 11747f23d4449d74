from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from villain_timeline.cli.utils import build_context, console, fail, print_warnings
from villain_timeline.core.exceptions import TimelineError
from villain_timeline.core.pipeline import Pipeline


def process_command(
    input_path: Optional[Path] = typer.Option(
        None,
        "--in",
        "-i",
        exists=True,
        readable=True,
        help="Raw series JSON (raw.<Series>.json)",
    ),
    series: Optional[str] = typer.Option(
        None,
        "--series",
        "-s",
        help="Series name; reads raw.<Series>.json from the data directory",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output file (default: <data-dir>/villains.<Series>.json)",
    ),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        help="Data directory (default: paths.data_dir from config)",
    ),
    validate: Optional[bool] = typer.Option(
        None,
        "--validate/--no-validate",
        help="Fail when the processed series has no villains or no timeline",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Process one series' raw issue data into identities, timeline and stats.
    """
    ctx = build_context(
        inputs=[input_path] if input_path else None,
        out=out,
        data_dir=data_dir,
        validate=validate,
        verbose=verbose,
    )

    try:
        result = Pipeline(ctx).run_process(series)
    except TimelineError as exc:
        fail(exc)
        return

    print_warnings(ctx.warnings)
    stats = result["stats"]
    console.print(
        f"[green]Processed[/green] {result['series']}: "
        f"{stats['totalVillains']} villains, {len(result['timeline'])} issues "
        f"-> {ctx.output_path}"
    )
