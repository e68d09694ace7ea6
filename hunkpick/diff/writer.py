"""Patch writer for hunkpick.

Contains:
- render_patch: Serialize the selected hunks of a Patch to diff text
- write_patch: Render and overwrite the output file
"""

import logging
from pathlib import Path
from typing import Union

from hunkpick.diff.exceptions import PatchWriteError
from hunkpick.diff.models import Patch
from hunkpick.diff.selection import SelectionStore

logger = logging.getLogger(__name__)


def render_patch(
    patch: Patch,
    selection: SelectionStore,
    keep_header_only_files: bool = True,
) -> str:
    """Build diff text containing only the selected hunks.

    A file is emitted (header lines verbatim, then its selected hunks in
    order) only if at least one of its hunks is selected. Hunk headers are
    never renumbered: git apply does not need hunks to be contiguous, so
    each hunk stays valid against the original file.

    Files without hunks (binary, mode or rename only) are emitted whenever
    anything else is, unless ``keep_header_only_files`` is False.

    Args:
        patch: The parsed patch
        selection: Selection store shaped like ``patch``
        keep_header_only_files: Whether to keep sections that have no hunks

    Returns:
        Patch content as string (empty when nothing is selected)
    """
    if selection.shape != tuple(len(f.hunks) for f in patch.files):
        raise ValueError("Selection store does not match the patch shape")

    chunks: list[str] = []
    any_hunk = False

    for file_index, file_diff in enumerate(patch.files):
        if file_diff.is_header_only:
            if keep_header_only_files:
                chunks.append(file_diff.render_header())
            continue

        if not selection.has_selection(file_index):
            continue

        any_hunk = True
        chunks.append(file_diff.render_header())
        for hunk_index, hunk in enumerate(file_diff.hunks):
            if selection.is_selected(file_index, hunk_index):
                chunks.append(hunk.render())

    if not any_hunk:
        return ""

    return patch.render_preamble() + "".join(chunks)


def write_patch(
    patch: Patch,
    selection: SelectionStore,
    path: Union[str, Path],
    keep_header_only_files: bool = True,
) -> int:
    """Render the selected hunks and overwrite ``path`` with them.

    Args:
        patch: The parsed patch
        selection: Selection store shaped like ``patch``
        path: Output file, replaced in full
        keep_header_only_files: Whether to keep sections that have no hunks

    Returns:
        Number of selected hunks written

    Raises:
        PatchWriteError: If the file cannot be written
    """
    content = render_patch(patch, selection, keep_header_only_files)
    data = content.encode("utf-8", errors="surrogateescape")

    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise PatchWriteError(f"Failed to write {path}: {e.strerror or e}") from e

    count = selection.selected_count
    logger.debug("Wrote %d hunk(s), %d byte(s) to %s", count, len(data), path)
    return count
