from __future__ import annotations

import typer

from villain_timeline.cli.commands.issues import issues_command
from villain_timeline.cli.commands.merge import merge_command
from villain_timeline.cli.commands.process import process_command
from villain_timeline.cli.commands.stats import stats_command

app = typer.Typer(
    name="villain-timeline",
    help="Villain timeline processor and cross-series merger",
    add_completion=False,
)

app.command("process")(process_command)
app.command("merge")(merge_command)
app.command("stats")(stats_command)
app.command("issues")(issues_command)


def main():
    app()


if __name__ == "__main__":
    main()
