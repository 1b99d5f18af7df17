"""Show command implementation.

    c8ctl show profile NAME   - a saved profile, secrets masked
    c8ctl show session        - the session plus what it resolves to
"""

import typer
from rich.markup import escape

from c8ctl.cli.commands import fail
from c8ctl.cli.output import console, print_json
from c8ctl.cli.state import CLIState
from c8ctl.config import get_profile, resolve_cluster_config, resolve_tenant_id
from c8ctl.errors import C8ctlError, ProfileNotFoundError
from c8ctl.runtime import c8ctl

show_app = typer.Typer(name="show", help="Show configuration details", no_args_is_help=True)


@show_app.command("profile")
def show_profile(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name"),
) -> None:
    """Show a saved profile.

    Examples:
        c8ctl show profile prod
    """
    state: CLIState = ctx.obj

    profile = get_profile(name)
    if profile is None:
        fail(state, ProfileNotFoundError(name))
        return

    data = profile.to_display_dict()
    if state.json_mode:
        print_json(data, state)
        return

    marker = " [green](active)[/green]" if c8ctl.active_profile == name else ""
    console.print(f"[bold]{profile.name}[/bold]{marker}")
    for key, value in data.items():
        if key != "name":
            console.print(f"  {key}: {escape(str(value))}")


@show_app.command("session")
def show_session(ctx: typer.Context) -> None:
    """Show the session and the configuration it resolves to.

    Examples:
        c8ctl show session
    """
    state: CLIState = ctx.obj
    session = c8ctl.session

    try:
        cluster = resolve_cluster_config(session=session)
        tenant = resolve_tenant_id(session=session)
    except C8ctlError as e:
        fail(state, e)
        return

    data = {
        "activeProfile": session.active_profile,
        "activeTenant": session.active_tenant,
        "outputMode": session.output_mode.value,
        "resolved": {
            "baseUrl": cluster.base_url,
            "auth": cluster.auth_type,
            "tenantId": tenant,
        },
    }
    if state.json_mode:
        print_json(data, state)
        return

    console.print(f"Active profile: {session.active_profile or '(none)'}")
    console.print(f"Active tenant:  {session.active_tenant or '(none)'}")
    console.print(f"Output mode:    {session.output_mode.value}")
    console.print(f"Base URL:       {cluster.base_url} ({cluster.auth_type} auth)")
    console.print(f"Tenant:         {tenant}")
