"""Profile management commands.

    c8ctl add profile NAME --base-url URL [auth options]
    c8ctl remove profile NAME
"""

from typing import Optional

import typer

from c8ctl.cli.commands import fail
from c8ctl.cli.output import print_success, print_warning
from c8ctl.cli.state import CLIState
from c8ctl.config import add_profile as store_profile
from c8ctl.config import clear_active_profile, remove_profile as delete_profile
from c8ctl.errors import C8ctlError
from c8ctl.runtime import c8ctl

add_app = typer.Typer(name="add", help="Add resources", no_args_is_help=True)
remove_app = typer.Typer(name="remove", help="Remove resources", no_args_is_help=True)


@add_app.command("profile")
def add_profile(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name"),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Cluster REST base URL (e.g. http://localhost:8080/v2)"
    ),
    client_id: Optional[str] = typer.Option(None, "--client-id", help="OAuth client ID"),
    client_secret: Optional[str] = typer.Option(
        None, "--client-secret", help="OAuth client secret"
    ),
    audience: Optional[str] = typer.Option(None, "--audience", help="OAuth audience"),
    oauth_url: Optional[str] = typer.Option(
        None, "--oauth-url", help="OAuth token endpoint"
    ),
    username: Optional[str] = typer.Option(None, "--username", help="Basic auth user"),
    password: Optional[str] = typer.Option(
        None, "--password", help="Basic auth password"
    ),
    default_tenant_id: Optional[str] = typer.Option(
        None, "--default-tenant-id", help="Tenant used when no session tenant is set"
    ),
) -> None:
    """Add or replace a profile.

    A profile uses OAuth (--client-id/--client-secret), basic auth
    (--username/--password), or no auth; never both.

    Examples:
        c8ctl add profile local --base-url http://localhost:8080/v2

        c8ctl add profile prod --base-url https://cluster.example.com/v2 \\
            --client-id abc --client-secret s3cret --audience zeebe-api
    """
    state: CLIState = ctx.obj

    fields = {
        "name": name,
        "base_url": base_url,
        "client_id": client_id,
        "client_secret": client_secret,
        "audience": audience,
        "oauth_url": oauth_url,
        "username": username,
        "password": password,
        "default_tenant_id": default_tenant_id,
    }
    try:
        profile = store_profile({k: v for k, v in fields.items() if v is not None})
    except C8ctlError as e:
        fail(state, e)
        return

    print_success(f"Profile '{profile.name}' saved", state, data=profile.to_display_dict())


@remove_app.command("profile")
def remove_profile(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile name"),
) -> None:
    """Remove a profile.

    Removing the active profile also clears it from the session.

    Examples:
        c8ctl remove profile prod
    """
    state: CLIState = ctx.obj

    if not delete_profile(name):
        print_warning(f"Profile '{name}' not found", state)
        raise typer.Exit(1)

    if c8ctl.active_profile == name:
        clear_active_profile()

    print_success(f"Profile '{name}' removed", state, data={"name": name})
