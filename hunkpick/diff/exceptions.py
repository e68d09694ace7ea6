"""Exception classes for hunkpick.

Contains:
- HunkpickError: Base exception for all hunkpick errors
- ParseError: Raised for a malformed hunk header (recovered by the parser)
- SelectionIndexError: Raised when a hunk position does not exist
- PatchWriteError: Raised when the output patch cannot be written
- TerminalError: Raised when the terminal interface fails
- ConfigError: Raised when the configuration file is invalid
"""

from typing import Optional

from hunkpick.diff.models import ParseIssueKind


class HunkpickError(Exception):
    """Base exception for hunkpick errors."""

    pass


class ParseError(HunkpickError):
    """Raised when part of a diff cannot be parsed.

    The parser catches these and records them as ParseIssue entries,
    so they never abort loading a whole patch.
    """

    def __init__(self, kind: ParseIssueKind, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.line_number = line_number


class SelectionIndexError(HunkpickError, IndexError):
    """Raised when a (file, hunk) position is outside the selection."""

    pass


class PatchWriteError(HunkpickError):
    """Raised when the filtered patch cannot be written."""

    pass


class TerminalError(HunkpickError):
    """Raised when the terminal interface fails."""

    pass


class ConfigError(HunkpickError):
    """Raised when the configuration cannot be loaded."""

    pass
