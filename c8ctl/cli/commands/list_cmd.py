"""List command implementation.

Implements `c8ctl list <resource>` for profiles, plugins and cluster
resources. Cluster resources are fetched with the search endpoints and
rendered as a table, or as the raw item array in JSON mode.
"""

from typing import Any, Optional

import typer

from c8ctl.cli.commands import profile_option, run_command
from c8ctl.cli.commands.plugins import list_plugins
from c8ctl.cli.output import print_table, sort_table_data
from c8ctl.cli.state import CLIState
from c8ctl.client import create_client
from c8ctl.config import load_profiles
from c8ctl.runtime import c8ctl

list_app = typer.Typer(name="list", help="List resources", no_args_is_help=True)

PROCESS_INSTANCE_COLUMNS = {
    "Key": "processInstanceKey",
    "Process ID": "processDefinitionId",
    "Version": "processDefinitionVersion",
    "State": "state",
    "Start Date": "startDate",
    "Tenant ID": "tenantId",
}

INCIDENT_COLUMNS = {
    "Key": "incidentKey",
    "Type": "errorType",
    "Message": "errorMessage",
    "State": "state",
    "Process Instance": "processInstanceKey",
    "Tenant ID": "tenantId",
}

USER_TASK_COLUMNS = {
    "Key": "userTaskKey",
    "Name": "name",
    "State": "state",
    "Assignee": "assignee",
    "Process Instance": "processInstanceKey",
    "Tenant ID": "tenantId",
}

JOB_COLUMNS = {
    "Key": "jobKey",
    "Type": "type",
    "State": "state",
    "Retries": "retries",
    "Worker": "worker",
    "Process Instance": "processInstanceKey",
}

LIMIT_OPTION_HELP = "Maximum number of items to return"
SORT_OPTION_HELP = "Column to sort by (case-insensitive)"


def to_rows(items: list[dict[str, Any]], columns: dict[str, str]) -> list[dict[str, Any]]:
    """Project API items onto display columns."""
    return [{label: item.get(field) for label, field in columns.items()} for item in items]


def _render_items(
    state: CLIState,
    result: dict[str, Any],
    columns: dict[str, str],
    title: str,
    sort_by: Optional[str],
) -> None:
    items = result.get("items", [])
    if state.json_mode:
        print_table(items, state)
        return
    rows = sort_table_data(to_rows(items, columns), sort_by, state)
    print_table(rows, state, title=title, empty_message=f"No {title.lower()} found")


@list_app.command("profiles")
def list_profiles(ctx: typer.Context) -> None:
    """List saved profiles.

    The active profile is marked with '*'.

    Examples:
        c8ctl list profiles
    """
    state: CLIState = ctx.obj
    active = c8ctl.active_profile

    profiles = load_profiles()
    if state.json_mode:
        print_table(
            [{**p.to_display_dict(), "active": p.name == active} for p in profiles],
            state,
        )
        return

    rows = [
        {
            "": "*" if p.name == active else "",
            "Name": p.name,
            "Base URL": p.base_url,
            "Auth": p.auth_type,
            "Default Tenant": p.default_tenant_id or "",
        }
        for p in profiles
    ]
    print_table(
        rows,
        state,
        title="Profiles",
        empty_message="No profiles configured. Add one with 'c8ctl add profile'",
    )


list_app.command("plugins")(list_plugins)


@list_app.command("process-instances")
def list_process_instances(
    ctx: typer.Context,
    process_id: Optional[str] = typer.Option(
        None, "--id", "--bpmn-process-id", help="Filter by process definition ID"
    ),
    instance_state: Optional[str] = typer.Option(
        None, "--state", help="Filter by state (ACTIVE, COMPLETED, TERMINATED)"
    ),
    limit: int = typer.Option(100, "--limit", help=LIMIT_OPTION_HELP),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help=SORT_OPTION_HELP),
    profile: Optional[str] = profile_option(),
) -> None:
    """List process instances.

    Examples:
        c8ctl list process-instances --state ACTIVE

        c8ctl list pi --id order-process --sort-by "Start Date"
    """
    state: CLIState = ctx.obj

    async def _list() -> None:
        async with create_client(profile) as client:
            result = await client.search_process_instances(
                process_definition_id=process_id, state=instance_state, limit=limit
            )
        _render_items(state, result, PROCESS_INSTANCE_COLUMNS, "Process Instances", sort_by)

    run_command(state, _list())


@list_app.command("incidents")
def list_incidents(
    ctx: typer.Context,
    incident_state: Optional[str] = typer.Option(
        None, "--state", help="Filter by state (ACTIVE, RESOLVED)"
    ),
    process_instance: Optional[str] = typer.Option(
        None, "--process-instance", help="Filter by process instance key"
    ),
    limit: int = typer.Option(100, "--limit", help=LIMIT_OPTION_HELP),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help=SORT_OPTION_HELP),
    profile: Optional[str] = profile_option(),
) -> None:
    """List incidents.

    Examples:
        c8ctl list incidents --state ACTIVE
    """
    state: CLIState = ctx.obj

    async def _list() -> None:
        async with create_client(profile) as client:
            result = await client.search_incidents(
                state=incident_state,
                process_instance_key=process_instance,
                limit=limit,
            )
        _render_items(state, result, INCIDENT_COLUMNS, "Incidents", sort_by)

    run_command(state, _list())


@list_app.command("user-tasks")
def list_user_tasks(
    ctx: typer.Context,
    task_state: Optional[str] = typer.Option(
        None, "--state", help="Filter by state (CREATED, COMPLETED, CANCELED)"
    ),
    assignee: Optional[str] = typer.Option(None, "--assignee", help="Filter by assignee"),
    limit: int = typer.Option(100, "--limit", help=LIMIT_OPTION_HELP),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help=SORT_OPTION_HELP),
    profile: Optional[str] = profile_option(),
) -> None:
    """List user tasks.

    Examples:
        c8ctl list user-tasks --assignee demo
    """
    state: CLIState = ctx.obj

    async def _list() -> None:
        async with create_client(profile) as client:
            result = await client.search_user_tasks(
                state=task_state, assignee=assignee, limit=limit
            )
        _render_items(state, result, USER_TASK_COLUMNS, "User Tasks", sort_by)

    run_command(state, _list())


@list_app.command("jobs")
def list_jobs(
    ctx: typer.Context,
    job_type: Optional[str] = typer.Option(None, "--type", help="Filter by job type"),
    job_state: Optional[str] = typer.Option(None, "--state", help="Filter by state"),
    limit: int = typer.Option(100, "--limit", help=LIMIT_OPTION_HELP),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help=SORT_OPTION_HELP),
    profile: Optional[str] = profile_option(),
) -> None:
    """List jobs.

    Examples:
        c8ctl list jobs --type send-email
    """
    state: CLIState = ctx.obj

    async def _list() -> None:
        async with create_client(profile) as client:
            result = await client.search_jobs(job_type=job_type, state=job_state, limit=limit)
        _render_items(state, result, JOB_COLUMNS, "Jobs", sort_by)

    run_command(state, _list())


# Short aliases
list_app.command("pi", hidden=True)(list_process_instances)
list_app.command("inc", hidden=True)(list_incidents)
list_app.command("ut", hidden=True)(list_user_tasks)
