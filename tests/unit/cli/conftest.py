"""Shared fixtures for CLI tests."""

import re
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from typer.testing import CliRunner

if TYPE_CHECKING:
    from typer.testing import Result

# ANSI escape code pattern for stripping styling from output
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


class CleanResult:
    """Result wrapper that strips ANSI codes from stdout/stderr/output.

    Rich/Typer applies bold/dim styling to help text even with NO_COLOR=1,
    which breaks plain string assertions.
    """

    def __init__(self, result: "Result") -> None:
        self._result = result

    @property
    def exit_code(self) -> int:
        return self._result.exit_code

    @property
    def stdout(self) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", self._result.stdout)

    @property
    def output(self) -> str:
        """The terminal output (mixed stdout+stderr) with ANSI codes stripped."""
        return ANSI_ESCAPE_PATTERN.sub("", self._result.output)

    @property
    def exception(self):
        return self._result.exception


class CleanCliRunner(CliRunner):
    """CLI runner that returns results with ANSI codes stripped."""

    def invoke(self, *args, **kwargs) -> CleanResult:
        result = super().invoke(*args, **kwargs)
        return CleanResult(result)


@pytest.fixture
def runner():
    """CLI runner with NO_COLOR set and ANSI codes stripped."""
    return CleanCliRunner(env={"NO_COLOR": "1"})


@pytest.fixture
def app():
    from c8ctl.cli.app import app

    return app


def _make_mock_client(**responses: Any) -> MagicMock:
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    for name, value in responses.items():
        setattr(client, name, AsyncMock(return_value=value))
    return client


@pytest.fixture
def mock_client():
    """Factory for OrchestrationClient stand-ins usable with `async with`.

    Each keyword becomes an AsyncMock method returning the given value.
    """
    return _make_mock_client


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Render Rich output wide enough that table cells are not folded."""
    from c8ctl.cli.output import console, error_console

    monkeypatch.setattr(console, "width", 200)
    monkeypatch.setattr(error_console, "width", 200)
