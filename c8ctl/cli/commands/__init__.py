"""CLI command implementations.

Commands are grouped by verb (`c8ctl list ...`, `c8ctl get ...`), one
module per verb. Each command builds its async implementation and hands it
to run_command(), which reports errors and sets the exit code.
"""

import asyncio
from typing import Any, Coroutine

import typer

from c8ctl.cli.output import print_error
from c8ctl.cli.state import CLIState
from c8ctl.logging import get_logger

logger = get_logger(__name__)

PROFILE_OPTION_HELP = "Profile to use instead of the active one"


def profile_option() -> Any:
    return typer.Option(None, "--profile", help=PROFILE_OPTION_HELP)


def run_command(state: CLIState, coro: Coroutine[Any, Any, None]) -> None:
    """Run a command implementation, mapping any failure to exit code 1."""
    try:
        asyncio.run(coro)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print_error(str(e), state, e)
        raise typer.Exit(1) from None


def fail(state: CLIState, error: Exception) -> None:
    """Report a synchronous command failure and exit with status 1."""
    print_error(str(error), state, error)
    raise typer.Exit(1) from None
