"""Logging helpers for hunkpick.

The terminal interface owns the screen while it runs, so a log file is
the useful destination for anything above WARNING during a session.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def verbosity_to_level(verbosity: int, default: str = "WARNING") -> int:
    """Map a -v count to a logging level.

    verbosity == 0 -> ``default``
    verbosity == 1 -> INFO
    verbosity >= 2 -> DEBUG
    """
    if verbosity <= 0:
        return logging.getLevelName(default.upper())
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(
    verbosity: int = 0,
    log_file: Optional[Path] = None,
    default_level: str = "WARNING",
) -> None:
    """Configure the hunkpick logger.

    Args:
        verbosity: Number of -v flags given.
        log_file: File to append log records to. Logs go to stderr otherwise.
        default_level: Level used when no -v flag is given.
    """
    level = verbosity_to_level(verbosity, default_level)

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("hunkpick")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.setLevel(level)
