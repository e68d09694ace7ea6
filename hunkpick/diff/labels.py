"""Display labels for hunkpick.

Contains functions for turning model objects into short display text:
- file_label: "old → new" label for a FileDiff
- hunk_preview: One-line summary of a hunk for the hunk list
- display_text: Line text made safe for a terminal cell
- format_issues: Parse issues as printable lines
"""

from hunkpick.diff.models import FileDiff, Hunk, LineRole, ParseIssue

TAB_WIDTH = 4


def display_text(text: str) -> str:
    """Expand tabs and drop carriage returns for display only."""
    return text.rstrip("\r").replace("\t", " " * TAB_WIDTH)


def file_label(file_diff: FileDiff) -> str:
    """Build a label like ``a/foo.c → b/foo.c`` for a file.

    Args:
        file_diff: The file section.

    Returns:
        Label text, or "file" when no path can be found.
    """
    old_path = file_diff.old_path
    new_path = file_diff.new_path
    if not old_path and not new_path:
        return "file"
    return f"{old_path or '?'} → {new_path or '?'}"


def hunk_preview(hunk: Hunk) -> str:
    """Header text followed by the first non-empty content line."""
    header = display_text(hunk.header.text).strip()
    for line in hunk.lines:
        if line.role in (LineRole.CONTEXT, LineRole.ADDITION, LineRole.REMOVAL):
            first = display_text(line.text).strip()
            if first:
                return f"{header}  —  {first}"
    return header


def format_issues(issues: tuple[ParseIssue, ...]) -> list[str]:
    return [f"warning: {issue}" for issue in issues]
