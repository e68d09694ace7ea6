"""Tests for hunkpick.cli module."""

from typer.testing import CliRunner

from hunkpick import __version__
from hunkpick.cli import app
from hunkpick.diff import TerminalError


runner = CliRunner()


class TestMainCommand:
    """Tests for the hunkpick command."""

    def test_shows_help(self):
        """Test that help is displayed."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--output" in result.output
        assert "--none" in result.output

    def test_version(self):
        """Test the --version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"hunkpick {__version__}" in result.output

    def test_requires_output(self, sample_patch_file):
        """Test that the output option is mandatory."""
        result = runner.invoke(app, [str(sample_patch_file)])

        assert result.exit_code != 0

    def test_runs_picker(self, mocker, sample_patch_file, temp_dir):
        """Test that a valid patch starts the picker with everything selected."""
        run_picker = mocker.patch("hunkpick.cli.main.run_picker")
        output = temp_dir / "out.diff"

        result = runner.invoke(
            app,
            [str(sample_patch_file), "-o", str(output), "--config", str(temp_dir / "none.yaml")],
        )

        assert result.exit_code == 0
        run_picker.assert_called_once()
        session = run_picker.call_args.args[0]
        assert session.output_path == output
        assert session.selection.selected_count == 3
        assert not output.exists()

    def test_none_flag(self, mocker, sample_patch_file, temp_dir):
        """Test that --none starts with nothing selected."""
        run_picker = mocker.patch("hunkpick.cli.main.run_picker")

        result = runner.invoke(
            app,
            [
                str(sample_patch_file),
                "-o", str(temp_dir / "out.diff"),
                "--none",
                "--config", str(temp_dir / "none.yaml"),
            ],
        )

        assert result.exit_code == 0
        assert run_picker.call_args.args[0].selection.selected_count == 0

    def test_missing_input(self, temp_dir):
        """Test error when the input file does not exist."""
        result = runner.invoke(
            app,
            [str(temp_dir / "missing.diff"), "-o", str(temp_dir / "out.diff"),
             "--config", str(temp_dir / "none.yaml")],
        )

        assert result.exit_code == 1
        assert "failed to read" in result.output

    def test_no_hunks(self, temp_dir):
        """Test error when the input has no hunks."""
        source = temp_dir / "empty.diff"
        source.write_text("just some text\n")

        result = runner.invoke(
            app,
            [str(source), "-o", str(temp_dir / "out.diff"), "--config", str(temp_dir / "none.yaml")],
        )

        assert result.exit_code == 1
        assert "No hunks found" in result.output

    def test_reports_parse_issues(self, mocker, temp_dir):
        """Test that parse anomalies are shown before the picker starts."""
        mocker.patch("hunkpick.cli.main.run_picker")
        source = temp_dir / "odd.diff"
        source.write_text("@@ bad @@\n+x\n@@ -1 +1 @@\n-a\n+b\n")

        result = runner.invoke(
            app,
            [str(source), "-o", str(temp_dir / "out.diff"), "--config", str(temp_dir / "none.yaml")],
        )

        assert result.exit_code == 0
        assert "warning: line 1: malformed hunk header" in result.output

    def test_terminal_error(self, mocker, sample_patch_file, temp_dir):
        """Test that a terminal failure exits non-zero."""
        mocker.patch(
            "hunkpick.cli.main.run_picker",
            side_effect=TerminalError("Terminal interface exited with status 1"),
        )

        result = runner.invoke(
            app,
            [str(sample_patch_file), "-o", str(temp_dir / "out.diff"),
             "--config", str(temp_dir / "none.yaml")],
        )

        assert result.exit_code == 1
        assert "Terminal interface exited with status 1" in result.output

    def test_invalid_config(self, sample_patch_file, temp_dir):
        """Test that a broken config file is reported."""
        config = temp_dir / "config.yaml"
        config.write_text("log_level: loud\n")

        result = runner.invoke(
            app,
            [str(sample_patch_file), "-o", str(temp_dir / "out.diff"), "--config", str(config)],
        )

        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_config_start_selected_and_write_on_start(self, mocker, sample_patch_file, temp_dir):
        """Test settings read from the config file."""
        mocker.patch("hunkpick.cli.main.run_picker")
        config = temp_dir / "config.yaml"
        config.write_text("start_selected: false\nwrite_on_start: true\n")
        output = temp_dir / "out.diff"

        result = runner.invoke(
            app,
            [str(sample_patch_file), "-o", str(output), "--config", str(config)],
        )

        assert result.exit_code == 0
        assert output.exists()
        assert output.read_text() == ""

    def test_last_write_failure_exits_non_zero(self, mocker, sample_patch_file, temp_dir):
        """Test that quitting after a failed write is reported."""
        def fail_write(session):
            session.toggle_current()

        mocker.patch("hunkpick.cli.main.run_picker", side_effect=fail_write)

        result = runner.invoke(
            app,
            [str(sample_patch_file), "-o", str(temp_dir / "missing" / "out.diff"),
             "--config", str(temp_dir / "none.yaml")],
        )

        assert result.exit_code == 1
        assert "Last write failed" in result.output
