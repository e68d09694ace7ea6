"""Selection store for hunkpick.

Contains:
- FileSelection: Aggregate selection state of one file
- SelectionStore: Which hunks of a Patch are included in the output

Hunks are identified by position (file index, hunk index within file).
This is only sound because a Patch never changes after it is parsed; a
new Patch needs a new SelectionStore.
"""

from enum import Enum

from hunkpick.diff.exceptions import SelectionIndexError
from hunkpick.diff.models import Patch


class FileSelection(str, Enum):
    """How many hunks of a file are selected."""

    ALL = "all"
    PARTIAL = "partial"
    NONE = "none"


class SelectionStore:
    """A boolean flag per hunk, parallel to a Patch.

    The shape (number of files and hunks per file) is fixed at construction.
    """

    def __init__(self, shape: list[int], selected: bool = True):
        self._flags: list[list[bool]] = [[selected] * count for count in shape]

    @classmethod
    def from_patch(cls, patch: Patch, selected: bool = True) -> "SelectionStore":
        """Create a store shaped like ``patch`` with every hunk set to ``selected``."""
        return cls([len(f.hunks) for f in patch.files], selected=selected)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(len(flags) for flags in self._flags)

    @property
    def total(self) -> int:
        return sum(len(flags) for flags in self._flags)

    @property
    def selected_count(self) -> int:
        return sum(sum(flags) for flags in self._flags)

    def _check(self, file_index: int, hunk_index: int) -> None:
        if not 0 <= file_index < len(self._flags):
            raise SelectionIndexError(
                f"File index {file_index} out of range (0..{len(self._flags) - 1})"
            )
        count = len(self._flags[file_index])
        if not 0 <= hunk_index < count:
            raise SelectionIndexError(
                f"Hunk index {hunk_index} out of range for file {file_index} (0..{count - 1})"
            )

    def is_selected(self, file_index: int, hunk_index: int) -> bool:
        self._check(file_index, hunk_index)
        return self._flags[file_index][hunk_index]

    def toggle(self, file_index: int, hunk_index: int) -> bool:
        """Flip the flag of one hunk.

        Args:
            file_index: Index of the file in the Patch.
            hunk_index: Index of the hunk within that file.

        Returns:
            The new value of the flag.

        Raises:
            SelectionIndexError: If either index is invalid.
        """
        self._check(file_index, hunk_index)
        value = not self._flags[file_index][hunk_index]
        self._flags[file_index][hunk_index] = value
        return value

    def select_all(self) -> None:
        for flags in self._flags:
            flags[:] = [True] * len(flags)

    def deselect_all(self) -> None:
        for flags in self._flags:
            flags[:] = [False] * len(flags)

    def file_state(self, file_index: int) -> FileSelection:
        if not 0 <= file_index < len(self._flags):
            raise SelectionIndexError(f"File index {file_index} out of range")
        flags = self._flags[file_index]
        if flags and all(flags):
            return FileSelection.ALL
        if any(flags):
            return FileSelection.PARTIAL
        return FileSelection.NONE

    def has_selection(self, file_index: int) -> bool:
        """Whether at least one hunk of the file is selected."""
        return self.file_state(file_index) != FileSelection.NONE

    def toggle_file(self, file_index: int) -> bool:
        """Select every hunk of a file, or deselect them if all are selected.

        Returns:
            The value every hunk of the file now has.
        """
        value = self.file_state(file_index) != FileSelection.ALL
        flags = self._flags[file_index]
        flags[:] = [value] * len(flags)
        return value
