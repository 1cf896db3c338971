"""Tests for the CLI entry point and its subcommands.

Tests the main CLI group, lazy command loading, and the non-interactive
``run`` and ``commands`` subcommands.
"""

from unittest import mock

import pytest
import yaml
from click.testing import CliRunner

from wren.cli.main import LazyGroup, cli, main


@pytest.fixture
def runner():
    """Provide a Click CLI runner for testing."""
    return CliRunner()


class TestLazyGroup:
    """Test the LazyGroup command loading mechanism."""

    def test_list_commands(self):
        group = LazyGroup(name="test")
        assert group.list_commands(mock.Mock()) == ["compose", "run", "commands"]

    def test_unknown_command_returns_none(self):
        group = LazyGroup(name="test")
        assert group.get_command(mock.Mock(), "nonexistent") is None

    def test_command_imported_on_demand(self):
        group = LazyGroup(name="test")

        with mock.patch("importlib.import_module") as mock_import:
            mock_import.return_value = mock.Mock(run="run-command")
            assert group.get_command(mock.Mock(), "run") == "run-command"
            mock_import.assert_called_once_with("wren.cli.run_cmd")

    def test_real_commands_load(self):
        group = LazyGroup(name="test")
        for name in group.list_commands(mock.Mock()):
            assert group.get_command(mock.Mock(), name).name == name


class TestCliGroup:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("compose", "run", "commands"):
            assert name in result.output

    def test_version(self, runner):
        from wren import __version__

        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output

    def test_main_handles_keyboard_interrupt(self):
        with mock.patch("wren.cli.main.cli", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 130

    def test_main_reports_errors(self):
        with mock.patch("wren.cli.main.cli", side_effect=RuntimeError("bad")):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1


class TestRunCommand:
    def test_prints_inserted_content(self, runner):
        result = runner.invoke(cli, ["run", "/todo milk eggs"])

        assert result.exit_code == 0
        assert "- [ ] milk\n- [ ] eggs\n" in result.output

    def test_marker_is_optional(self, runner):
        result = runner.invoke(cli, ["run", "ping"])

        assert result.exit_code == 0
        assert "Pong! Commands are working." in result.output

    def test_multiple_words_are_joined(self, runner):
        result = runner.invoke(cli, ["run", "/tag", "work", "home"])
        assert "#work #home" in result.output

    def test_unknown_command_fails(self, runner):
        result = runner.invoke(cli, ["run", "/nope"])

        assert result.exit_code == 1
        assert "Unknown command: /nope" in result.output

    def test_validation_failure_fails(self, runner):
        result = runner.invoke(cli, ["run", "/tag"])

        assert result.exit_code == 1
        assert "Please provide at least one tag" in result.output

    def test_help_note_is_printed(self, runner):
        result = runner.invoke(cli, ["run", "/help ping"])

        assert result.exit_code == 0
        assert "Test if commands are working" in result.output

    def test_notebook_option(self, runner):
        result = runner.invoke(cli, ["--notebook", "Work", "run", "/nb inbox"])

        assert result.exit_code == 0
        assert "Switched to notebook: Inbox" in result.output

    def test_config_marker(self, runner, tmp_path):
        config = tmp_path / "config.yml"
        config.write_text(yaml.safe_dump({"commands": {"marker": "!"}}))

        result = runner.invoke(cli, ["--config", str(config), "run", "!ping"])

        assert result.exit_code == 0
        assert "Pong!" in result.output


class TestCommandsCommand:
    def test_table(self, runner):
        result = runner.invoke(cli, ["commands"])

        assert result.exit_code == 0
        assert "/ping" in result.output
        assert "/reminder" in result.output

    def test_markdown(self, runner):
        result = runner.invoke(cli, ["commands", "--markdown"])

        assert result.exit_code == 0
        assert "# Available Commands" in result.output

    def test_category_filter(self, runner):
        result = runner.invoke(cli, ["commands", "--category", "note", "--markdown"])

        assert "**/todo**" in result.output
        assert "**/ping**" not in result.output

    def test_invalid_category(self, runner):
        result = runner.invoke(cli, ["commands", "--category", "bogus"])
        assert result.exit_code != 0
