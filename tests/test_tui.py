"""Tests for hunkpick.tui module."""

import asyncio

import pytest

from hunkpick.diff import TerminalError, parse_patch, render_patch
from hunkpick.session import KEY_HELP, PickerSession
from hunkpick.tui import HunkPickerApp, _preview_text, _row_text, run_picker


@pytest.fixture
def session(sample_diff, temp_dir):
    """Session over the sample patch writing to a temp file."""
    return PickerSession(parse_patch(sample_diff), temp_dir / "out.diff")


class TestRendering:
    """Tests for the text shown in the list and preview."""

    def test_row_text(self, session):
        """Test the list row of a selected and a deselected hunk."""
        assert _row_text(session, 0).plain.startswith("[x] a/src/app.py → b/src/app.py  @@ -1,3 +1,4 @@")

        session.toggle_current()
        assert _row_text(session, 0).plain.startswith("[ ] ")

    def test_row_text_does_not_parse_markup(self, temp_dir):
        """Test that brackets in the diff are shown literally."""
        session = PickerSession(parse_patch("@@ -1 +1 @@\n-[bold]x\n+[/]y\n"), temp_dir / "o")

        assert "[bold]x" in _row_text(session, 0).plain

    def test_preview_text(self, session):
        """Test the preview of the current hunk."""
        text = _preview_text(session).plain.split("\n")

        assert text[0] == "@@ -1,3 +1,4 @@"
        assert text[2] == "+import json"

    def test_preview_expands_tabs(self, temp_dir):
        """Test that tabs and carriage returns are cleaned for display."""
        session = PickerSession(parse_patch("@@ -1 +1 @@\r\n-\ta\r\n+\tb\r\n"), temp_dir / "o")

        assert _preview_text(session).plain.split("\n")[1] == "-    a"


class TestHunkPickerApp:
    """Tests driving the Textual app headlessly."""

    def test_status_bar_shows_status_and_key_help(self, session):
        """Test that the status bar pairs the session status with the key help."""
        shown = []

        async def drive():
            app = HunkPickerApp(session)
            async with app.run_test() as pilot:
                shown.append(app._status_text().plain)
                await pilot.press("space")
                await pilot.pause()
                shown.append(app._status_text().plain)
                await pilot.press("q")

        asyncio.run(drive())

        assert shown[0] == f"3 of 3 hunk(s) selected\n{KEY_HELP}"
        assert shown[1].startswith("Saved 2 selected hunk(s)")
        assert shown[1].endswith(KEY_HELP)

    def test_keys_toggle_and_save(self, session):
        """Test that space toggles the highlighted hunk and saves."""

        async def drive():
            app = HunkPickerApp(session)
            async with app.run_test() as pilot:
                await pilot.press("down", "down")
                await pilot.press("space")
                await pilot.pause()
                await pilot.press("q")

        asyncio.run(drive())

        assert session.cursor == 2
        assert session.selection.is_selected(1, 0)
        assert not session.selection.is_selected(1, 1)
        assert session.output_path.read_text() == render_patch(session.patch, session.selection)

    def test_vim_keys_and_bulk_actions(self, session):
        """Test j/k movement and the select-none key."""

        async def drive():
            app = HunkPickerApp(session)
            async with app.run_test() as pilot:
                await pilot.press("j", "j", "k")
                await pilot.press("n")
                await pilot.pause()

        asyncio.run(drive())

        assert session.cursor == 1
        assert session.selection.selected_count == 0
        assert session.output_path.read_text() == ""


class TestRunPicker:
    """Tests for run_picker error handling."""

    def test_crash_becomes_terminal_error(self, session, mocker):
        """Test that an exception from the app is wrapped."""
        mocker.patch.object(HunkPickerApp, "run", side_effect=RuntimeError("no tty"))

        with pytest.raises(TerminalError, match="no tty"):
            run_picker(session)

    def test_non_zero_return_code(self, session, mocker):
        """Test that a failed app run is reported."""
        mocker.patch.object(HunkPickerApp, "run")
        mocker.patch.object(
            HunkPickerApp, "return_code", new_callable=mocker.PropertyMock, return_value=1
        )

        with pytest.raises(TerminalError, match="status 1"):
            run_picker(session)

    def test_clean_exit(self, session, mocker):
        """Test that a normal quit returns quietly."""
        mocker.patch.object(HunkPickerApp, "run")
        mocker.patch.object(
            HunkPickerApp, "return_code", new_callable=mocker.PropertyMock, return_value=0
        )

        run_picker(session)
