"""Session commands.

    c8ctl use profile NAME     - set the active profile
    c8ctl use profile --none   - clear it
    c8ctl use tenant ID        - set the active tenant
    c8ctl use tenant --none    - clear it
    c8ctl output json|text     - set the output mode

Each command is a single read-modify-write of session.json.
"""

from typing import Optional

import typer

from c8ctl.cli.commands import fail
from c8ctl.cli.output import print_success
from c8ctl.cli.state import CLIState
from c8ctl.config import (
    clear_active_profile,
    clear_active_tenant,
    set_active_profile,
    set_active_tenant,
    set_output_mode,
)
from c8ctl.errors import C8ctlError, ValidationError

use_app = typer.Typer(name="use", help="Set the active profile or tenant", no_args_is_help=True)


def _missing_argument(what: str) -> ValidationError:
    return ValidationError(
        message=f"Specify a {what} or --none",
        error_code="INPUT-MissingArgument",
    )


@use_app.command("profile")
def use_profile(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Profile name"),
    none: bool = typer.Option(False, "--none", help="Clear the active profile"),
) -> None:
    """Set the active profile for subsequent commands.

    Examples:
        c8ctl use profile prod
    """
    state: CLIState = ctx.obj

    try:
        if none:
            clear_active_profile()
            print_success("Active profile cleared", state)
            return
        if not name:
            raise _missing_argument("profile name")
        set_active_profile(name)
    except C8ctlError as e:
        fail(state, e)
        return

    print_success(f"Now using profile: {name}", state, data={"activeProfile": name})


@use_app.command("tenant")
def use_tenant(
    ctx: typer.Context,
    tenant_id: Optional[str] = typer.Argument(None, help="Tenant ID"),
    none: bool = typer.Option(False, "--none", help="Clear the active tenant"),
) -> None:
    """Set the active tenant for subsequent commands.

    Examples:
        c8ctl use tenant customer-a
    """
    state: CLIState = ctx.obj

    try:
        if none:
            clear_active_tenant()
            print_success("Active tenant cleared", state)
            return
        if not tenant_id:
            raise _missing_argument("tenant ID")
        session = set_active_tenant(tenant_id)
    except C8ctlError as e:
        fail(state, e)
        return

    print_success(
        f"Now using tenant: {session.active_tenant}",
        state,
        data={"activeTenant": session.active_tenant},
    )


def output(
    ctx: typer.Context,
    mode: str = typer.Argument(..., help="Output mode: json or text"),
) -> None:
    """Set the output mode for subsequent commands.

    Examples:
        c8ctl output json

        c8ctl output text
    """
    state: CLIState = ctx.obj

    try:
        session = set_output_mode(mode)
    except C8ctlError as e:
        fail(state, e)
        return

    # Confirm in the newly selected mode
    new_state = CLIState(
        json_mode=session.output_mode.value == "json", verbose=state.verbose
    )
    print_success(
        f"Output mode set to {session.output_mode.value}",
        new_state,
        data={"outputMode": session.output_mode.value},
    )
