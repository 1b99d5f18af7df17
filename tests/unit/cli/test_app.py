"""Tests for CLI app entry point.

Tests built-in command registration, the --version flag, and main()'s
startup sequence and plugin dispatch.
"""

from pathlib import Path
from textwrap import dedent

import pytest

MARKER_PLUGIN = """
from pathlib import Path

def record(args):
    Path("called.txt").write_text(" ".join(args))

def explode(args):
    raise ValueError("bad input")

commands = {"record": record, "list": record, "explode": explode}
"""


@pytest.fixture
def marker_plugin(work_dir: Path) -> Path:
    """Install a plugin that writes called.txt when run."""
    entry = work_dir / "c8ctl_plugins" / "marker" / "c8ctl_plugin.py"
    entry.parent.mkdir(parents=True)
    entry.write_text(dedent(MARKER_PLUGIN))
    return work_dir / "called.txt"


class TestBuiltinCommands:
    def test_builtin_names(self) -> None:
        from c8ctl.cli.app import builtin_command_names

        names = builtin_command_names()

        for expected in [
            "list",
            "show",
            "add",
            "remove",
            "use",
            "output",
            "load",
            "unload",
            "sync",
            "get",
            "create",
            "cancel",
            "deploy",
        ]:
            assert expected in names

    def test_version(self, runner, app) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.stdout.startswith("c8ctl ")

    def test_help_lists_groups(self, runner, app) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "list" in result.output
        assert "use" in result.output


class TestFirstPositional:
    def test_skips_root_options(self) -> None:
        from c8ctl.cli.app import _first_positional

        assert _first_positional(["--json", "-v", "hello", "x"]) == 2
        assert _first_positional(["--json"]) is None
        assert _first_positional(["--", "hello"]) == 1


class TestMain:
    """Startup and dispatch through the console script entry point."""

    def test_plugin_command_runs(self, marker_plugin: Path) -> None:
        from c8ctl.cli.app import main

        main(["record", "a", "b"])

        assert marker_plugin.read_text() == "a b"

    def test_builtin_takes_precedence(
        self, marker_plugin: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """A plugin exporting 'list' does not shadow the built-in."""
        from c8ctl.cli.app import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--json", "list", "profiles"])

        assert exc_info.value.code == 0
        assert not marker_plugin.exists()
        assert capsys.readouterr().out.strip() == "[]"

    def test_failing_plugin_exits_1(
        self, marker_plugin: Path, capsys: pytest.CaptureFixture
    ) -> None:
        from c8ctl.cli.app import main

        with pytest.raises(SystemExit) as exc_info:
            main(["explode"])

        assert exc_info.value.code == 1
        assert "bad input" in capsys.readouterr().err

    def test_unknown_command_is_usage_error(self) -> None:
        from c8ctl.cli.app import main

        with pytest.raises(SystemExit) as exc_info:
            main(["no-such-command"])

        assert exc_info.value.code == 2

    def test_startup_loads_session(self) -> None:
        """main() reads session.json before dispatching."""
        from c8ctl.cli.app import main
        from c8ctl.config import OutputMode, SessionState, save_session_state
        from c8ctl.runtime import c8ctl

        save_session_state(SessionState(active_tenant="acme"))
        c8ctl.reset()

        with pytest.raises(SystemExit):
            main(["list", "profiles"])

        assert c8ctl.active_tenant == "acme"
        assert c8ctl.output_mode == OutputMode.TEXT

    def test_plugin_verbose_flag_does_not_enable_debug(
        self, marker_plugin: Path
    ) -> None:
        """-v after the command name belongs to the plugin."""
        from c8ctl.cli.app import main
        from c8ctl.logging import is_debug_mode

        main(["record", "-v", "--verbose"])

        assert marker_plugin.read_text() == "-v --verbose"
        assert is_debug_mode() is False

    def test_root_verbose_flag_enables_debug(self, marker_plugin: Path) -> None:
        from c8ctl.cli.app import main
        from c8ctl.logging import is_debug_mode

        main(["-v", "record", "x"])

        assert marker_plugin.read_text() == "x"
        assert is_debug_mode() is True

    def test_broken_plugin_does_not_block_builtins(self, work_dir: Path) -> None:
        from c8ctl.cli.app import main

        entry = work_dir / "c8ctl_plugins" / "broken" / "c8ctl_plugin.py"
        entry.parent.mkdir(parents=True)
        entry.write_text("raise ImportError('missing dependency')\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["list", "profiles"])

        assert exc_info.value.code == 0
