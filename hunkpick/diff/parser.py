"""Diff parser for hunkpick.

Contains functions for parsing unified diff text:
- parse_patch: Parse a whole unified diff into a Patch
- load_patch: Read a diff file from disk and parse it
- parse_hunk_header: Parse the ranges of an @@ header line
- parse_hunk: Parse one hunk starting at an @@ line
- _parse_section: Parse one file section (or a run of plain-diff files)

Parsing is tolerant. Anomalies are recorded as ParseIssue entries on the
returned Patch (and logged) instead of aborting the load.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from hunkpick.diff.classifier import (
    classify_body_line,
    classify_line,
    is_file_boundary,
    is_hunk_header,
)
from hunkpick.diff.exceptions import ParseError
from hunkpick.diff.models import (
    FileDiff,
    Hunk,
    Line,
    LineRole,
    ParseIssue,
    ParseIssueKind,
    Patch,
)

logger = logging.getLogger(__name__)

# Format: @@ -old_start[,old_count] +new_start[,new_count] @@ optional context
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))?"
    r" \+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@(?P<context>.*)$"
)

# (line number, text without newline, has newline)
_RawLine = tuple[int, str, bool]


def _split_lines(text: str) -> list[_RawLine]:
    """Split text on ``\\n`` only, remembering whether each line had one."""
    parts = text.split("\n")
    last_has_newline = parts[-1] == ""
    if last_has_newline:
        parts.pop()
    raw: list[_RawLine] = [(i + 1, part, True) for i, part in enumerate(parts)]
    if raw and not last_has_newline:
        number, part, _ = raw[-1]
        raw[-1] = (number, part, False)
    return raw


def _starts_plain_file(lines: list[_RawLine], index: int) -> bool:
    """Check for a ``--- ``/``+++ `` pair that opens a file in plain diff -u output."""
    return (
        index + 1 < len(lines)
        and lines[index][1].startswith("--- ")
        and lines[index + 1][1].startswith("+++ ")
    )


def _is_body_text(text: str) -> bool:
    return text[:1] in (" ", "+", "-", "\\")


def _record(issues: list[ParseIssue], kind: ParseIssueKind, line_number: int, message: str) -> None:
    issue = ParseIssue(kind=kind, line_number=line_number, message=message)
    logger.warning("%s", issue)
    issues.append(issue)


def parse_hunk_header(text: str, line_number: Optional[int] = None) -> tuple[int, int, int, int, Optional[str]]:
    """Parse an ``@@ -a,b +c,d @@ context`` line.

    Omitted counts default to 1, per unified diff convention.

    Args:
        text: The header line without its newline.
        line_number: Position of the line in the input, for error reporting.

    Returns:
        Tuple of (old_start, old_count, new_start, new_count, header_context).

    Raises:
        ParseError: If the @@ markers or the -/+ ranges are missing.
    """
    match = _HUNK_HEADER_RE.match(text.rstrip("\r"))
    if not match:
        raise ParseError(
            ParseIssueKind.MALFORMED_HUNK_HEADER,
            f"malformed hunk header: {text.rstrip()!r}",
            line_number,
        )

    old_count = match.group("old_count")
    new_count = match.group("new_count")
    context = match.group("context").strip()

    return (
        int(match.group("old_start")),
        int(old_count) if old_count is not None else 1,
        int(match.group("new_start")),
        int(new_count) if new_count is not None else 1,
        context or None,
    )


def parse_hunk(
    lines: list[_RawLine],
    start: int,
    issues: list[ParseIssue],
    split_plain: bool = False,
) -> tuple[Hunk, int]:
    """Parse one hunk starting at the @@ line ``lines[start]``.

    Body lines are consumed until the next @@ header, the next
    ``diff --git`` line or the end of input. With ``split_plain``, once the
    declared counts are fulfilled the hunk also ends at a ``--- ``/``+++ ``
    pair or at the first line without a body marker (such as the
    ``diff -ruN a/x b/x`` line that opens the next file).

    Args:
        lines: All raw lines of the section.
        start: Index of the @@ header line.
        issues: List to append count anomalies to.
        split_plain: Whether plain diff -u file pairs are boundaries.

    Returns:
        Tuple of (Hunk, index of the first line after the hunk).

    Raises:
        ParseError: If the header line is malformed.
    """
    line_number, header_text, header_newline = lines[start]
    old_start, old_count, new_start, new_count, context = parse_hunk_header(header_text, line_number)

    body: list[Line] = []
    old_seen = 0
    new_seen = 0
    index = start + 1

    while index < len(lines):
        _, text, has_newline = lines[index]
        if is_hunk_header(text) or is_file_boundary(text):
            break
        fulfilled = old_seen >= old_count and new_seen >= new_count
        if split_plain and fulfilled and (
            _starts_plain_file(lines, index) or not _is_body_text(text)
        ):
            break

        role = classify_body_line(text)
        body.append(Line(role, text, has_newline))
        if role in (LineRole.CONTEXT, LineRole.REMOVAL):
            old_seen += 1
        if role in (LineRole.CONTEXT, LineRole.ADDITION):
            new_seen += 1
        index += 1

    hunk = Hunk(
        old_start=old_start,
        old_count=old_count,
        new_start=new_start,
        new_count=new_count,
        header=Line(LineRole.HUNK_HEADER, header_text, header_newline),
        lines=tuple(body),
        header_context=context,
    )

    if not hunk.counts_match:
        expected = f"-{old_count} +{new_count}"
        found = f"-{old_seen} +{new_seen}"
        if index >= len(lines) and (old_seen < old_count or new_seen < new_count):
            _record(
                issues,
                ParseIssueKind.UNEXPECTED_END_OF_INPUT,
                line_number,
                f"input ended inside hunk (expected {expected}, found {found})",
            )
        else:
            _record(
                issues,
                ParseIssueKind.COUNT_MISMATCH,
                line_number,
                f"hunk line counts differ from header (expected {expected}, found {found})",
            )

    return hunk, index


def _skip_malformed(lines: list[_RawLine], start: int, split_plain: bool) -> int:
    """Return the index of the next recognizable boundary after ``start``."""
    index = start + 1
    while index < len(lines):
        text = lines[index][1]
        if is_hunk_header(text) or is_file_boundary(text):
            break
        if split_plain and (
            _starts_plain_file(lines, index) or (text and not _is_body_text(text))
        ):
            break
        index += 1
    return index


def _parse_section(
    lines: list[_RawLine], issues: list[ParseIssue], split_plain: bool = False
) -> list[FileDiff]:
    """Parse the lines of one file section.

    Every line before the first @@ is header metadata, kept verbatim.
    Without ``diff --git`` boundaries (``split_plain``) a section may hold
    several files. A new file starts at a ``--- ``/``+++ `` pair or at the first
    unmarked line (such as ``diff -ruN a/x b/x``) after a finished hunk.

    Args:
        lines: Raw lines of the section.
        issues: List to append parse issues to.
        split_plain: Whether plain diff -u file pairs are boundaries.

    Returns:
        List of FileDiff objects (exactly one unless ``split_plain``).
    """
    files: list[FileDiff] = []
    header: list[Line] = []
    hunks: list[Hunk] = []
    in_hunks = False
    index = 0

    while index < len(lines):
        line_number, text, has_newline = lines[index]

        if is_hunk_header(text):
            in_hunks = True
            try:
                hunk, index = parse_hunk(lines, index, issues, split_plain)
            except ParseError as e:
                next_index = _skip_malformed(lines, index, split_plain)
                skipped = next_index - index
                _record(
                    issues,
                    e.kind,
                    line_number,
                    f"{e}; skipped {skipped} line(s)",
                )
                index = next_index
                continue
            hunks.append(hunk)
            continue

        if in_hunks:
            # A finished plain-diff hunk was followed by the next file's header
            files.append(FileDiff(header_lines=tuple(header), hunks=tuple(hunks)))
            header, hunks, in_hunks = [], [], False

        header.append(Line(classify_line(text), text, has_newline))
        index += 1

    if header or hunks:
        files.append(FileDiff(header_lines=tuple(header), hunks=tuple(hunks)))

    return files


def parse_patch(text: str) -> Patch:
    """Parse unified diff text into a Patch.

    The text is split into sections at every line starting with
    ``diff --git``. Lines before the first such line form the preamble.
    Input without any ``diff --git`` line (plain ``diff -u`` output, or a
    single headerless hunk) is parsed as one section whose header block
    includes everything up to the first @@.

    Args:
        text: The complete diff text.

    Returns:
        Patch with files in input order and any parse issues.
    """
    if not text.strip():
        return Patch()

    lines = _split_lines(text)
    issues: list[ParseIssue] = []

    boundaries = [i for i, (_, line_text, _) in enumerate(lines) if is_file_boundary(line_text)]

    if not boundaries:
        files = _parse_section(lines, issues, split_plain=True)
        patch = Patch(files=tuple(files), issues=tuple(issues))
    else:
        preamble = tuple(
            Line(LineRole.METADATA, line_text, has_newline)
            for _, line_text, has_newline in lines[: boundaries[0]]
        )
        files = []
        ends = boundaries[1:] + [len(lines)]
        for start, end in zip(boundaries, ends):
            files.extend(_parse_section(lines[start:end], issues))
        patch = Patch(files=tuple(files), preamble=preamble, issues=tuple(issues))

    logger.debug(
        "Parsed %d file(s), %d hunk(s), %d issue(s)",
        len(patch.files),
        patch.hunk_count,
        len(patch.issues),
    )
    return patch


def load_patch(path: Union[str, Path]) -> Patch:
    """Read a unified diff file and parse it.

    The file is decoded as UTF-8 with ``surrogateescape`` so bytes that are
    not valid UTF-8 survive a round trip through the writer.

    Args:
        path: Path to the diff file.

    Returns:
        The parsed Patch.

    Raises:
        OSError: If the file cannot be read.
    """
    data = Path(path).read_bytes()
    logger.debug("Read %d byte(s) from %s", len(data), path)
    return parse_patch(data.decode("utf-8", errors="surrogateescape"))
