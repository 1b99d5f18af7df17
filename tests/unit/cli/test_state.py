"""Tests for CLIState dataclass.

Tests the immutable state object built by the root Typer callback and
passed to commands.
"""

from dataclasses import FrozenInstanceError

import pytest


class TestCLIState:
    def test_defaults(self) -> None:
        from c8ctl.cli.state import CLIState

        state = CLIState()

        assert state.json_mode is False
        assert state.verbose is False

    def test_is_immutable(self) -> None:
        """CLIState cannot be modified after creation."""
        from c8ctl.cli.state import CLIState

        state = CLIState()

        with pytest.raises(FrozenInstanceError):
            state.json_mode = True  # type: ignore[misc]


class TestRootCallback:
    """The root callback decides json_mode from --json and the session."""

    def test_json_flag(self, runner, app) -> None:
        result = runner.invoke(app, ["--json", "list", "profiles"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "[]"

    def test_session_output_mode(self, runner, app) -> None:
        """A session output mode of json applies without --json."""
        from c8ctl.config import set_output_mode

        set_output_mode("json")

        result = runner.invoke(app, ["list", "profiles"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "[]"

    def test_text_by_default(self, runner, app) -> None:
        result = runner.invoke(app, ["list", "profiles"])

        assert result.exit_code == 0
        assert "No profiles configured" in result.output
