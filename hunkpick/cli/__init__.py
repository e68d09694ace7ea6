"""CLI entry point for hunkpick.

This module provides the Typer application. hunkpick has a single
command, so it runs without a subcommand name.
"""

import typer

from hunkpick.cli.main import main_command


app = typer.Typer(
    name="hunkpick",
    help="hunkpick: pick hunks from a unified diff into a new patch",
    add_completion=False,
)

app.command()(main_command)


def main() -> None:
    app()


__all__ = [
    "app",
    "main",
    "main_command",
]
