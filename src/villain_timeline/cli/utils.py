from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from villain_timeline.config import get_config
from villain_timeline.core.context import RunContext
from villain_timeline.core.exceptions import TimelineError
from villain_timeline.logging import get_logger, set_debug

console = Console()
err_console = Console(stderr=True)


def build_context(
    *,
    inputs: Optional[Iterable[Path]] = None,
    out: Optional[Path] = None,
    data_dir: Optional[Path] = None,
    validate: Optional[bool] = None,
    verbose: bool = False,
) -> RunContext:
    """RunContext from CLI options, falling back to the YAML config."""
    cfg = get_config()
    if verbose:
        set_debug(True)

    input_paths: List[str] = [str(p) for p in inputs or []]

    return RunContext(
        config=cfg,
        logger=get_logger("cli"),
        input_paths=input_paths,
        output_path=str(out) if out else None,
        data_dir=str(data_dir) if data_dir else None,
        validate=(
            validate
            if validate is not None
            else bool(cfg.processing.get("validate", False))
        ),
        debug=verbose or bool(cfg.debug),
    )


def fail(exc: TimelineError) -> None:
    """Print a TimelineError and exit with status 1."""
    err_console.print(f"[bold red]Error ({exc.code})[/bold red]: {escape(exc.message)}")
    for key, value in exc.context.items():
        err_console.print(f"  {key}: {escape(str(value))}")
    raise typer.Exit(code=1)


def print_warnings(warnings: Iterable[str]) -> None:
    for message in warnings:
        console.print(f"[yellow]warning:[/yellow] {escape(message)}")
