"""
CLI command modules for villain_timeline.

Each command module defines a single Typer-compatible command function.
"""

from villain_timeline.cli.commands.issues import issues_command
from villain_timeline.cli.commands.merge import merge_command
from villain_timeline.cli.commands.process import process_command
from villain_timeline.cli.commands.stats import stats_command

__all__ = [
    "issues_command",
    "merge_command",
    "process_command",
    "stats_command",
]
