"""Line classifier for unified diffs.

Contains:
- classify_body_line: Role of a line inside a hunk body
- classify_line: Role of any line of a diff document
- is_hunk_header / is_file_boundary: Boundary checks used by the parser
"""

from hunkpick.diff.models import LineRole

NO_NEWLINE_MARKER = "\\ No newline at end of file"

_BODY_MARKERS = {
    "+": LineRole.ADDITION,
    "-": LineRole.REMOVAL,
    " ": LineRole.CONTEXT,
    # git accepts any text after the backslash (the marker is localized by diff)
    "\\": LineRole.NO_NEWLINE,
}

_FILE_HEADER_PREFIXES = (
    "diff --git ",
    "--- ",
    "+++ ",
    "index ",
    "old mode ",
    "new mode ",
    "new file mode ",
    "deleted file mode ",
    "similarity index ",
    "dissimilarity index ",
    "rename from ",
    "rename to ",
    "copy from ",
    "copy to ",
    "Binary files ",
    "GIT binary patch",
)


def is_hunk_header(text: str) -> bool:
    return text.startswith("@@")


def is_file_boundary(text: str) -> bool:
    return text.startswith("diff --git ")


def classify_body_line(text: str) -> LineRole:
    """Classify one line of a hunk body.

    Lines without a recognized marker (including empty lines, which some
    editors produce by stripping the space of a blank context line) are
    treated as context rather than rejected.

    Args:
        text: Raw line text without its newline.

    Returns:
        One of CONTEXT, ADDITION, REMOVAL or NO_NEWLINE.
    """
    if not text:
        return LineRole.CONTEXT
    return _BODY_MARKERS.get(text[0], LineRole.CONTEXT)


def classify_line(text: str, in_hunk: bool = False) -> LineRole:
    """Classify any line of a diff document.

    Args:
        text: Raw line text without its newline.
        in_hunk: Whether the line follows a hunk header in the same section.

    Returns:
        The LineRole of the line.
    """
    if is_hunk_header(text):
        return LineRole.HUNK_HEADER
    if is_file_boundary(text):
        return LineRole.FILE_HEADER
    if in_hunk:
        return classify_body_line(text)
    if text.startswith(_FILE_HEADER_PREFIXES):
        return LineRole.FILE_HEADER
    return LineRole.METADATA
