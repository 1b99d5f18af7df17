"""CLI output helpers.

Formats messages for human or JSON consumption based on CLIState.json_mode.
Human mode uses Rich formatting; JSON mode writes one JSON document per
message to stdout so output can be piped into other tools.

OutputLogger offers the same behavior to plugins, keyed on the session's
output mode instead of a CLIState.
"""

import json
import sys
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from c8ctl.cli.state import CLIState
from c8ctl.config.models import OutputMode
from c8ctl.config.settings import get_c8ctl_settings
from c8ctl.logging import is_debug_mode

# Console instances for stdout and stderr
console = Console()
error_console = Console(stderr=True)


def _dumps(data: Any, pretty: bool = False) -> str:
    return json.dumps(data, indent=2 if pretty else None, default=str)


def print_success(
    message: str,
    state: CLIState,
    data: Optional[dict] = None,
) -> None:
    """Print success message (human) or JSON response.

    Args:
        message: The success message to display.
        state: CLI state with json_mode flag.
        data: Optional data dict to include (JSON mode only).
    """
    if state.json_mode:
        output: dict = {"status": "success", "message": message}
        if data is not None:
            output["data"] = data
        print(_dumps(output))
    else:
        console.print(f"[green]✓ {escape(message)}[/green]", soft_wrap=True)


def print_info(message: str, state: CLIState) -> None:
    if state.json_mode:
        print(_dumps({"status": "info", "message": message}))
    else:
        console.print(escape(message), soft_wrap=True)


def print_warning(message: str, state: CLIState) -> None:
    """Warnings always go to stderr so they never corrupt JSON output."""
    if state.json_mode:
        print(_dumps({"status": "warning", "message": message}), file=sys.stderr)
    else:
        error_console.print(
            f"[yellow]⚠ {escape(message)}[/yellow]", soft_wrap=True
        )


def print_error(message: str, state: CLIState, error: Optional[Exception] = None) -> None:
    """Print error message (human) or JSON response with optional exception context.

    In human mode, prints to stderr with red formatting and the error's
    suggestion when it has one. In JSON mode, prints to stdout for parsability.

    Args:
        message: The error message to display.
        state: CLI state with json_mode flag.
        error: Optional exception object with additional context.
    """
    error_code = getattr(error, "error_code", None)
    suggestion = getattr(error, "suggestion", None)
    status_code = getattr(error, "status_code", None)

    if state.json_mode:
        output: dict = {"status": "error", "message": message}
        if error_code:
            output["error_code"] = error_code
        if status_code:
            output["status_code"] = status_code
        if suggestion:
            output["suggestion"] = suggestion
        print(_dumps(output))
        return

    error_console.print(
        f"[red bold]Error:[/red bold] {escape(message)}", soft_wrap=True
    )
    if suggestion:
        error_console.print(
            f"[cyan]Suggestion:[/cyan] {escape(suggestion)}", soft_wrap=True
        )


def print_json(data: Any, state: CLIState) -> None:
    """Print data as JSON; pretty-printed in human mode, compact in JSON mode."""
    print(_dumps(data, pretty=not state.json_mode))


def sort_table_data(
    rows: list[dict[str, Any]], sort_by: Optional[str], state: CLIState
) -> list[dict[str, Any]]:
    """Sort rows by a column name (case-insensitive).

    Numeric values compare numerically; missing values sort last. An unknown
    column produces a warning and leaves the order unchanged.
    """
    if not sort_by or not rows:
        return rows

    keys = list(rows[0].keys())
    matched = next((k for k in keys if k.lower() == sort_by.lower()), None)
    if matched is None:
        print_warning(
            f"Column '{sort_by}' not found in output. "
            f"Available columns: {', '.join(keys)}",
            state,
        )
        return rows

    def sort_key(row: dict[str, Any]) -> tuple:
        value = row.get(matched)
        if value is None or value == "":
            return (2, 0, "")
        text = str(value)
        try:
            return (0, float(text), "")
        except ValueError:
            return (1, 0, text)

    return sorted(rows, key=sort_key)


def print_table(
    rows: Sequence[dict[str, Any]],
    state: CLIState,
    columns: Optional[Sequence[str]] = None,
    title: Optional[str] = None,
    empty_message: str = "No data to display",
) -> None:
    """Print rows as a Rich table (human) or a JSON array.

    Args:
        rows: Row dicts
        state: CLI state with json_mode flag
        columns: Column order; defaults to the union of row keys
        title: Optional table title (human mode only)
        empty_message: Shown when rows is empty (human mode only)
    """
    if state.json_mode:
        print(_dumps(list(rows), pretty=True))
        return

    if not rows:
        console.print(escape(empty_message), soft_wrap=True)
        return

    if columns is None:
        columns = list(dict.fromkeys(k for row in rows for k in row))

    table = Table(title=title)
    for index, column in enumerate(columns):
        table.add_column(column, style="cyan" if index == 0 else None, overflow="fold")
    for row in rows:
        table.add_row(
            *(escape("" if row.get(c) is None else str(row.get(c))) for c in columns)
        )
    console.print(table)


def _debug_requested() -> bool:
    return is_debug_mode() or get_c8ctl_settings().debug_enabled


class OutputLogger:
    """Mode-aware user output for plugins and shared command code."""

    def __init__(self, mode: OutputMode = OutputMode.TEXT) -> None:
        self.mode = mode

    @property
    def state(self) -> CLIState:
        return CLIState(json_mode=self.mode == OutputMode.JSON)

    def info(self, message: str) -> None:
        print_info(message, self.state)

    def warn(self, message: str) -> None:
        print_warning(message, self.state)

    def debug(self, message: str, *args: Any) -> None:
        if not _debug_requested():
            return
        timestamp = datetime.now(timezone.utc).isoformat()
        if self.mode == OutputMode.JSON:
            record = {
                "level": "debug",
                "message": message,
                "timestamp": timestamp,
                "args": list(args),
            }
            print(_dumps(record), file=sys.stderr)
        else:
            extra = " ".join(str(a) for a in args)
            print(f"[DEBUG {timestamp}] {message} {extra}".rstrip(), file=sys.stderr)

    def success(self, message: str, key: Optional[Any] = None) -> None:
        if self.mode == OutputMode.JSON:
            output: dict = {"status": "success", "message": message}
            if key is not None:
                output["key"] = key
            print(_dumps(output))
        elif key is not None:
            console.print(
                f"[green]✓ {escape(message)}[/green] {escape(f'[Key: {key}]')}",
                soft_wrap=True,
            )
        else:
            console.print(f"[green]✓ {escape(message)}[/green]", soft_wrap=True)

    def error(self, message: str, error: Optional[Exception] = None) -> None:
        if self.mode == OutputMode.JSON:
            output: dict = {"status": "error", "message": message}
            if error is not None:
                output["error"] = str(error)
            print(_dumps(output), file=sys.stderr)
        else:
            error_console.print(f"[red]✗ {escape(message)}[/red]", soft_wrap=True)
            if error is not None:
                error_console.print(f"  {escape(str(error))}", soft_wrap=True)

    def table(self, rows: Sequence[dict[str, Any]]) -> None:
        print_table(rows, self.state)

    def json(self, data: Any) -> None:
        print_json(data, self.state)
