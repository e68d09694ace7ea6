"""Picker session for hunkpick.

Contains:
- Action: Actions the front end can dispatch
- HunkEntry: One row of the flat hunk list
- PickerSession: Cursor, selection and output handling for one run

Every action that changes the selection is followed by exactly one write
of the output file. A failed write only changes the status line; the
selection is kept so the next toggle retries the write.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from hunkpick.diff.exceptions import PatchWriteError
from hunkpick.diff.labels import file_label, hunk_preview
from hunkpick.diff.models import FileDiff, Hunk, Patch
from hunkpick.diff.selection import SelectionStore
from hunkpick.diff.writer import write_patch

logger = logging.getLogger(__name__)

KEY_HELP = "Keys: ↑/↓ or j/k = move • Space/Enter = toggle & save • f = file • a/n = all/none • q = quit"


class Action(str, Enum):
    """Actions bound to keys by the front end."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    TOGGLE_CURRENT_HUNK = "toggle_current_hunk"
    TOGGLE_CURRENT_FILE = "toggle_current_file"
    SELECT_ALL = "select_all"
    DESELECT_ALL = "deselect_all"
    QUIT = "quit"


@dataclass(frozen=True)
class HunkEntry:
    """A hunk's position in the Patch plus its display labels."""

    file_index: int
    hunk_index: int
    hunk: Hunk
    file_label: str
    preview: str


class PickerSession:
    """State of one interactive run over a parsed Patch."""

    def __init__(
        self,
        patch: Patch,
        output_path: Path,
        start_selected: bool = True,
        keep_header_only_files: bool = True,
    ):
        self.patch = patch
        self.output_path = Path(output_path)
        self.keep_header_only_files = keep_header_only_files
        self.selection = SelectionStore.from_patch(patch, selected=start_selected)

        labels = [file_label(f) for f in patch.files]
        self.entries: list[HunkEntry] = [
            HunkEntry(
                file_index=file_index,
                hunk_index=hunk_index,
                hunk=hunk,
                file_label=labels[file_index],
                preview=hunk_preview(hunk),
            )
            for file_index, hunk_index, hunk in patch.iter_hunks()
        ]
        self.cursor: Optional[int] = 0 if self.entries else None
        self.status = f"{self.selection.selected_count} of {len(self.entries)} hunk(s) selected"
        self.last_error: Optional[str] = None

    @property
    def current(self) -> Optional[HunkEntry]:
        if self.cursor is None:
            return None
        return self.entries[self.cursor]

    @property
    def current_file(self) -> Optional[FileDiff]:
        entry = self.current
        if entry is None:
            return None
        return self.patch.files[entry.file_index]

    def is_selected(self, position: int) -> bool:
        entry = self.entries[position]
        return self.selection.is_selected(entry.file_index, entry.hunk_index)

    def move_cursor(self, delta: int) -> None:
        """Move the cursor, clamping at both ends of the list."""
        if not self.entries:
            self.cursor = None
            return
        position = (self.cursor or 0) + delta
        self.cursor = max(0, min(position, len(self.entries) - 1))

    def move_to(self, position: int) -> None:
        if not self.entries:
            self.cursor = None
            return
        self.cursor = max(0, min(position, len(self.entries) - 1))

    def save(self) -> bool:
        """Write the selected hunks to the output file.

        Returns:
            True if the write succeeded.
        """
        try:
            count = write_patch(
                self.patch,
                self.selection,
                self.output_path,
                keep_header_only_files=self.keep_header_only_files,
            )
        except PatchWriteError as e:
            logger.error("%s", e)
            self.last_error = str(e)
            self.status = f"ERROR: {e}"
            return False

        self.last_error = None
        self.status = f"Saved {count} selected hunk(s) → {self.output_path}"
        return True

    def toggle_current(self) -> bool:
        entry = self.current
        if entry is None:
            return False
        self.selection.toggle(entry.file_index, entry.hunk_index)
        return self.save()

    def toggle_current_file(self) -> bool:
        entry = self.current
        if entry is None:
            return False
        self.selection.toggle_file(entry.file_index)
        return self.save()

    def select_all(self) -> bool:
        self.selection.select_all()
        return self.save()

    def deselect_all(self) -> bool:
        self.selection.deselect_all()
        return self.save()

    def dispatch(self, action: Action) -> bool:
        """Handle one action.

        Args:
            action: The action to run.

        Returns:
            False when the session should end, True otherwise.
        """
        logger.debug("Action %s at cursor %s", action.value, self.cursor)
        if action == Action.QUIT:
            return False
        if action == Action.MOVE_UP:
            self.move_cursor(-1)
        elif action == Action.MOVE_DOWN:
            self.move_cursor(1)
        elif action == Action.TOGGLE_CURRENT_HUNK:
            self.toggle_current()
        elif action == Action.TOGGLE_CURRENT_FILE:
            self.toggle_current_file()
        elif action == Action.SELECT_ALL:
            self.select_all()
        elif action == Action.DESELECT_ALL:
            self.deselect_all()
        return True
