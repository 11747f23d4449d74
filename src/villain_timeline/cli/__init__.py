"""
CLI package for villain_timeline.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from villain_timeline.cli.app import app, main

__all__ = [
    "app",
    "main",
]
