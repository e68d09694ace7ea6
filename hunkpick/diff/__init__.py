"""Unified diff handling for hunkpick.

This package provides the diff core with:
- models: LineRole, Line, Hunk, FileDiff, ParseIssue, Patch
- classifier: classify_line, classify_body_line
- parser: parse_patch, load_patch, parse_hunk_header
- selection: SelectionStore, FileSelection
- writer: render_patch, write_patch
- labels: file_label, hunk_preview
- exceptions: HunkpickError and subclasses
"""

# Models
from hunkpick.diff.models import (
    FileDiff,
    Hunk,
    Line,
    LineRole,
    ParseIssue,
    ParseIssueKind,
    Patch,
)

# Exceptions
from hunkpick.diff.exceptions import (
    ConfigError,
    HunkpickError,
    ParseError,
    PatchWriteError,
    SelectionIndexError,
    TerminalError,
)

# Classifier
from hunkpick.diff.classifier import (
    NO_NEWLINE_MARKER,
    classify_body_line,
    classify_line,
)

# Parser
from hunkpick.diff.parser import (
    load_patch,
    parse_hunk_header,
    parse_patch,
)

# Selection
from hunkpick.diff.selection import (
    FileSelection,
    SelectionStore,
)

# Writer
from hunkpick.diff.writer import (
    render_patch,
    write_patch,
)

# Labels
from hunkpick.diff.labels import (
    display_text,
    file_label,
    format_issues,
    hunk_preview,
)


__all__ = [
    # Models
    "FileDiff",
    "Hunk",
    "Line",
    "LineRole",
    "ParseIssue",
    "ParseIssueKind",
    "Patch",
    # Exceptions
    "ConfigError",
    "HunkpickError",
    "ParseError",
    "PatchWriteError",
    "SelectionIndexError",
    "TerminalError",
    # Classifier
    "NO_NEWLINE_MARKER",
    "classify_body_line",
    "classify_line",
    # Parser
    "load_patch",
    "parse_hunk_header",
    "parse_patch",
    # Selection
    "FileSelection",
    "SelectionStore",
    # Writer
    "render_patch",
    "write_patch",
    # Labels
    "display_text",
    "file_label",
    "format_issues",
    "hunk_preview",
]
