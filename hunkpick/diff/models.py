"""Data models for hunkpick diffs.

Contains:
- LineRole: Role of a single physical line in a unified diff
- Line: One physical line with its role and terminator
- Hunk: One @@ block with its ranges and body lines
- FileDiff: Header lines plus hunks for a single file
- ParseIssueKind / ParseIssue: Anomalies recorded while parsing
- Patch: The whole parsed document

A Patch is built once by the parser and never mutated afterwards. Which
hunks are included in the output lives in a SelectionStore instead.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class LineRole(str, Enum):
    """Role of a line in a unified diff."""

    CONTEXT = "context"
    ADDITION = "addition"
    REMOVAL = "removal"
    NO_NEWLINE = "no_newline"
    HUNK_HEADER = "hunk_header"
    FILE_HEADER = "file_header"
    METADATA = "metadata"


_MARKERS = {
    LineRole.CONTEXT: " ",
    LineRole.ADDITION: "+",
    LineRole.REMOVAL: "-",
}


@dataclass(frozen=True)
class Line:
    """One physical line of a diff.

    ``text`` is the raw line without its trailing ``\\n``. A ``\\r`` from a
    CRLF file is kept in ``text`` so the line renders back unchanged.
    ``has_newline`` is False only for the final line of an input that does
    not end with a newline.
    """

    role: LineRole
    text: str
    has_newline: bool = True

    @property
    def is_implicit_context(self) -> bool:
        """Context line whose leading space marker is missing."""
        return self.role == LineRole.CONTEXT and not self.text.startswith(" ")

    @property
    def content(self) -> str:
        """The line text without its diff marker."""
        marker = _MARKERS.get(self.role)
        if marker is not None and self.text.startswith(marker):
            return self.text[1:]
        return self.text

    def render(self) -> str:
        return self.text + "\n" if self.has_newline else self.text


@dataclass(frozen=True)
class Hunk:
    """A single ``@@ -a,b +c,d @@`` block.

    The declared counts come from the header. They may disagree with the
    body on malformed input; see ``counts_match``.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header: Line
    lines: tuple[Line, ...] = ()
    header_context: Optional[str] = None

    @property
    def old_line_count(self) -> int:
        """Number of body lines that exist in the old file."""
        return sum(1 for ln in self.lines if ln.role in (LineRole.CONTEXT, LineRole.REMOVAL))

    @property
    def new_line_count(self) -> int:
        """Number of body lines that exist in the new file."""
        return sum(1 for ln in self.lines if ln.role in (LineRole.CONTEXT, LineRole.ADDITION))

    @property
    def counts_match(self) -> bool:
        return self.old_line_count == self.old_count and self.new_line_count == self.new_count

    @property
    def ends_without_newline(self) -> bool:
        """Whether the hunk carries a ``\\ No newline at end of file`` marker."""
        return any(ln.role == LineRole.NO_NEWLINE for ln in self.lines)

    def render(self) -> str:
        return self.header.render() + "".join(ln.render() for ln in self.lines)


# diff --git a/path b/path (paths without spaces or quoting)
_DIFF_GIT_RE = re.compile(r"^diff --git (?P<old>\S+) (?P<new>\S+)")


def _strip_path(raw: str) -> str:
    """Strip the trailing timestamp that ``diff -u`` appends after a tab."""
    return raw.rstrip("\r").split("\t", 1)[0]


@dataclass(frozen=True)
class FileDiff:
    """Diff section for a single file.

    ``header_lines`` holds every line from ``diff --git`` (or the start of
    input) up to the first hunk, exactly as read. They are never re-derived.
    """

    header_lines: tuple[Line, ...] = ()
    hunks: tuple[Hunk, ...] = ()

    def _header_value(self, prefix: str) -> Optional[str]:
        for line in self.header_lines:
            if line.text.startswith(prefix):
                return _strip_path(line.text[len(prefix):])
        return None

    def _git_paths(self) -> tuple[Optional[str], Optional[str]]:
        for line in self.header_lines:
            match = _DIFF_GIT_RE.match(line.text)
            if match:
                return match.group("old"), match.group("new")
        return None, None

    @property
    def old_path(self) -> Optional[str]:
        return self._header_value("--- ") or self._git_paths()[0]

    @property
    def new_path(self) -> Optional[str]:
        return self._header_value("+++ ") or self._git_paths()[1]

    @property
    def is_binary(self) -> bool:
        return any(
            ln.text.startswith("GIT binary patch") or ln.text.startswith("Binary files")
            for ln in self.header_lines
        )

    @property
    def is_new_file(self) -> bool:
        return any(ln.text.startswith("new file mode") for ln in self.header_lines)

    @property
    def is_deleted_file(self) -> bool:
        return any(ln.text.startswith("deleted file mode") for ln in self.header_lines)

    @property
    def is_rename(self) -> bool:
        return any(ln.text.startswith("rename from ") for ln in self.header_lines)

    @property
    def has_mode_change(self) -> bool:
        return any(ln.text.startswith(("old mode ", "new mode ")) for ln in self.header_lines)

    @property
    def is_copy(self) -> bool:
        return any(ln.text.startswith("copy from ") for ln in self.header_lines)

    @property
    def has_hunk_headers(self) -> bool:
        """Whether the header promises hunks with a ---/+++ pair."""
        return any(ln.text.startswith(("--- ", "+++ ")) for ln in self.header_lines)

    @property
    def is_header_only(self) -> bool:
        """Binary, mode-only, rename-only or empty new/deleted file section.

        A section whose hunks were all dropped as malformed keeps its
        ---/+++ pair and is never header-only.
        """
        if self.hunks or self.has_hunk_headers:
            return False
        return (
            self.is_binary
            or self.is_rename
            or self.is_copy
            or self.has_mode_change
            or self.is_new_file
            or self.is_deleted_file
        )

    def render_header(self) -> str:
        return "".join(ln.render() for ln in self.header_lines)


class ParseIssueKind(str, Enum):
    """Kinds of anomalies the parser tolerates."""

    MALFORMED_HUNK_HEADER = "malformed_hunk_header"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    COUNT_MISMATCH = "count_mismatch"


@dataclass(frozen=True)
class ParseIssue:
    """An anomaly found while parsing, kept as data on the Patch."""

    kind: ParseIssueKind
    line_number: int  # 1-based line in the input
    message: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.message}"


@dataclass(frozen=True)
class Patch:
    """The whole parsed diff document."""

    files: tuple[FileDiff, ...] = ()
    preamble: tuple[Line, ...] = ()
    issues: tuple[ParseIssue, ...] = field(default=(), compare=False)

    @property
    def hunk_count(self) -> int:
        return sum(len(f.hunks) for f in self.files)

    @property
    def is_empty(self) -> bool:
        return not self.files

    def iter_hunks(self) -> Iterator[tuple[int, int, Hunk]]:
        """Yield ``(file_index, hunk_index, hunk)`` in document order."""
        for file_index, file_diff in enumerate(self.files):
            for hunk_index, hunk in enumerate(file_diff.hunks):
                yield file_index, hunk_index, hunk

    def render_preamble(self) -> str:
        return "".join(ln.render() for ln in self.preamble)
