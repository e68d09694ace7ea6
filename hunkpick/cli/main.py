"""Main CLI command for picking hunks from a patch."""

import logging
from pathlib import Path
from typing import Optional

import typer

from hunkpick import __version__
from hunkpick.config import PickerConfig, load_config
from hunkpick.diff.exceptions import ConfigError, TerminalError
from hunkpick.diff.labels import format_issues
from hunkpick.diff.parser import load_patch
from hunkpick.logging_utils import configure_logging
from hunkpick.session import PickerSession
from hunkpick.tui import run_picker

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hunkpick {__version__}")
        raise typer.Exit()


def _load_settings(config_path: Optional[Path]) -> PickerConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def main_command(
    input_path: Path = typer.Argument(
        ...,
        metavar="INPUT",
        help="Input patch file (unified diff)",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Output patch file, rewritten every time the selection changes",
    ),
    none: bool = typer.Option(
        False,
        "--none",
        help="Start with every hunk deselected",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a config.yaml (default: ~/.hunkpick/config.yaml)",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log verbosity (-v info, -vv debug)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write log records to this file instead of stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Select hunks from a patch in a TUI and write a filtered patch."""
    settings = _load_settings(config_path)
    configure_logging(
        verbose,
        log_file or settings.log_file,
        default_level=settings.log_level,
    )

    try:
        patch = load_patch(input_path)
    except OSError as e:
        typer.echo(f"Error: failed to read {input_path}: {e.strerror or e}", err=True)
        raise typer.Exit(1)

    for line in format_issues(patch.issues):
        typer.echo(line, err=True)

    if patch.hunk_count == 0:
        typer.echo(f"No hunks found in {input_path}", err=True)
        raise typer.Exit(1)

    start_selected = settings.start_selected and not none
    session = PickerSession(
        patch,
        output,
        start_selected=start_selected,
        keep_header_only_files=settings.keep_header_only_files,
    )
    logger.info(
        "Loaded %d hunk(s) in %d file(s) from %s",
        patch.hunk_count,
        len(patch.files),
        input_path,
    )

    if settings.write_on_start and not session.save():
        typer.echo(f"Warning: {session.last_error}", err=True)

    try:
        run_picker(session)
    except TerminalError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if session.last_error:
        typer.echo(f"Last write failed: {session.last_error}", err=True)
        raise typer.Exit(1)
