"""Terminal interface for hunkpick.

Contains:
- HunkPickerApp: Textual application showing the hunk list and a preview
- run_picker: Run the application and report terminal failures

Textual's application mode switches the terminal to raw mode and the
alternate screen, and restores both on every exit path, including an
unhandled exception inside the app.
"""

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Label, ListItem, ListView, Static

from hunkpick.diff.exceptions import TerminalError
from hunkpick.diff.labels import display_text
from hunkpick.diff.models import LineRole
from hunkpick.session import KEY_HELP, Action, PickerSession

logger = logging.getLogger(__name__)

_LINE_STYLES = {
    LineRole.ADDITION: "green",
    LineRole.REMOVAL: "red",
    LineRole.NO_NEWLINE: "grey50",
}


def _row_text(session: PickerSession, position: int) -> Text:
    entry = session.entries[position]
    marker = "[x]" if session.is_selected(position) else "[ ]"
    return Text.assemble(
        f"{marker} ",
        (entry.file_label, "bold"),
        "  ",
        entry.preview,
        no_wrap=True,
        overflow="ellipsis",
    )


def _preview_text(session: PickerSession) -> Text:
    entry = session.current
    if entry is None:
        return Text("No hunk selected")

    text = Text()
    text.append(display_text(entry.hunk.header.text), style="bold")
    for line in entry.hunk.lines:
        text.append("\n")
        text.append(display_text(line.text), style=_LINE_STYLES.get(line.role, ""))
    return text


class HunkPickerApp(App):
    """Select hunks of a patch; the output is saved after every change."""

    TITLE = "hunkpick"

    CSS = """
    #main {
        height: 1fr;
    }
    #hunks {
        width: 45%;
        border: solid $accent;
        border-title-align: left;
    }
    #preview-pane {
        width: 55%;
        border: solid $accent;
    }
    #status {
        height: 4;
        border: solid $secondary;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("up", "dispatch('move_up')", "Up", show=False, priority=True),
        Binding("k", "dispatch('move_up')", "Up", show=False, priority=True),
        Binding("down", "dispatch('move_down')", "Down", show=False, priority=True),
        Binding("j", "dispatch('move_down')", "Down", show=False, priority=True),
        Binding("space", "dispatch('toggle_current_hunk')", "Toggle & save", priority=True),
        Binding("enter", "dispatch('toggle_current_hunk')", "Toggle & save", show=False, priority=True),
        Binding("f", "dispatch('toggle_current_file')", "Toggle file"),
        Binding("a", "dispatch('select_all')", "Select all"),
        Binding("n", "dispatch('deselect_all')", "Deselect all"),
        Binding("q", "dispatch('quit')", "Quit"),
    ]

    def __init__(self, session: PickerSession):
        super().__init__()
        self.session = session
        self._labels: list[Label] = []

    def compose(self) -> ComposeResult:
        items = []
        for position in range(len(self.session.entries)):
            label = Label(_row_text(self.session, position))
            self._labels.append(label)
            items.append(ListItem(label))

        with Horizontal(id="main"):
            hunk_list = ListView(*items, id="hunks", initial_index=self.session.cursor)
            hunk_list.border_title = "Hunks"
            yield hunk_list
            with VerticalScroll(id="preview-pane") as pane:
                pane.border_title = "Preview"
                yield Static(_preview_text(self.session), id="preview")
        status = Static(self._status_text(), id="status")
        status.border_title = "Status"
        yield status

    def on_mount(self) -> None:
        self.query_one("#hunks", ListView).focus()

    def _status_text(self) -> Text:
        style = "bold red" if self.session.last_error else ""
        return Text.assemble((self.session.status, style), "\n", KEY_HELP)

    def _refresh_rows(self) -> None:
        for position, label in enumerate(self._labels):
            label.update(_row_text(self.session, position))

    def _refresh(self) -> None:
        self._refresh_rows()
        hunk_list = self.query_one("#hunks", ListView)
        if self.session.cursor is not None and hunk_list.index != self.session.cursor:
            hunk_list.index = self.session.cursor
        self.query_one("#preview", Static).update(_preview_text(self.session))
        self.query_one("#preview-pane", VerticalScroll).scroll_home(animate=False)
        self.query_one("#status", Static).update(self._status_text())

    def action_dispatch(self, name: str) -> None:
        if not self.session.dispatch(Action(name)):
            self.exit()
            return
        self._refresh()

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        # Mouse clicks move the list highlight directly
        index = event.list_view.index
        if index is not None and index != self.session.cursor:
            self.session.move_to(index)
            self._refresh()


def run_picker(session: PickerSession) -> None:
    """Run the interactive picker until the user quits.

    Raises:
        TerminalError: If the interface could not start or crashed. The
            terminal has already been restored when this is raised.
    """
    app = HunkPickerApp(session)
    try:
        app.run()
    except Exception as e:
        raise TerminalError(f"Terminal interface failed: {e}") from e

    if app.return_code:
        raise TerminalError(f"Terminal interface exited with status {app.return_code}")
    logger.info("Picker closed with %d of %d hunk(s) selected",
                session.selection.selected_count, session.selection.total)
