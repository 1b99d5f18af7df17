"""CLI state management.

Provides a typed, immutable state object holding invocation-wide settings.
It is built by the root Typer callback and passed to commands via ctx.obj.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CLIState:
    """Immutable state object for CLI-wide configuration.

    Attributes:
        json_mode: If True, output JSON for scripting. Set by --json or by a
            session output mode of "json".
        verbose: If True, show debug logging on stderr.
    """

    json_mode: bool = False
    verbose: bool = False
