"""User task, job and incident commands.

    c8ctl complete user-task KEY [--variables JSON]   (alias: ut)
    c8ctl complete job KEY [--variables JSON]
    c8ctl fail job KEY [--retries N] [--error-message TEXT]
    c8ctl activate jobs TYPE [--max-jobs N] [--timeout MS] [--worker NAME]
    c8ctl resolve incident KEY                        (alias: inc)
"""

from typing import Optional

import typer

from c8ctl.cli.commands import profile_option, run_command
from c8ctl.cli.output import print_json, print_success
from c8ctl.cli.state import CLIState
from c8ctl.client import create_client
from c8ctl.client.core import parse_variables

complete_app = typer.Typer(name="complete", help="Complete user tasks and jobs", no_args_is_help=True)
fail_app = typer.Typer(name="fail", help="Fail jobs", no_args_is_help=True)
activate_app = typer.Typer(name="activate", help="Activate jobs", no_args_is_help=True)
resolve_app = typer.Typer(name="resolve", help="Resolve incidents", no_args_is_help=True)

VARIABLES_HELP = "Variables as a JSON object"


@complete_app.command("user-task")
def complete_user_task(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="User task key"),
    variables: Optional[str] = typer.Option(None, "--variables", help=VARIABLES_HELP),
    profile: Optional[str] = profile_option(),
) -> None:
    """Complete a user task.

    Examples:
        c8ctl complete user-task 2251799813685300 --variables '{"approved": true}'
    """
    state: CLIState = ctx.obj

    async def _complete() -> None:
        payload = parse_variables(variables)
        async with create_client(profile) as client:
            await client.complete_user_task(key, variables=payload)
        print_success(f"User task {key} completed", state, data={"key": key})

    run_command(state, _complete())


@complete_app.command("job")
def complete_job(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Job key"),
    variables: Optional[str] = typer.Option(None, "--variables", help=VARIABLES_HELP),
    profile: Optional[str] = profile_option(),
) -> None:
    """Complete a job.

    Examples:
        c8ctl complete job 2251799813685400
    """
    state: CLIState = ctx.obj

    async def _complete() -> None:
        payload = parse_variables(variables)
        async with create_client(profile) as client:
            await client.complete_job(key, variables=payload)
        print_success(f"Job {key} completed", state, data={"key": key})

    run_command(state, _complete())


@fail_app.command("job")
def fail_job(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Job key"),
    retries: int = typer.Option(0, "--retries", help="Remaining retries"),
    error_message: Optional[str] = typer.Option(
        None, "--error-message", help="Reason for the failure"
    ),
    profile: Optional[str] = profile_option(),
) -> None:
    """Fail a job, optionally leaving retries.

    Examples:
        c8ctl fail job 2251799813685400 --retries 2 --error-message "SMTP down"
    """
    state: CLIState = ctx.obj

    async def _fail() -> None:
        async with create_client(profile) as client:
            await client.fail_job(key, retries=retries, error_message=error_message)
        print_success(
            f"Job {key} failed", state, data={"key": key, "retries": retries}
        )

    run_command(state, _fail())


@activate_app.command("jobs")
def activate_jobs(
    ctx: typer.Context,
    job_type: str = typer.Argument(..., help="Job type"),
    max_jobs: int = typer.Option(10, "--max-jobs", help="Maximum jobs to activate"),
    timeout: int = typer.Option(
        300000, "--timeout", help="Job lock timeout in milliseconds"
    ),
    worker: str = typer.Option("c8ctl", "--worker", help="Worker name"),
    profile: Optional[str] = profile_option(),
) -> None:
    """Activate jobs of a type and print them.

    Examples:
        c8ctl activate jobs send-email --max-jobs 5
    """
    state: CLIState = ctx.obj

    async def _activate() -> None:
        async with create_client(profile) as client:
            result = await client.activate_jobs(
                job_type, max_jobs=max_jobs, timeout_ms=timeout, worker=worker
            )
        print_json(result.get("jobs", []), state)

    run_command(state, _activate())


@resolve_app.command("incident")
def resolve_incident(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Incident key"),
    profile: Optional[str] = profile_option(),
) -> None:
    """Resolve an incident.

    Examples:
        c8ctl resolve incident 2251799813685500
    """
    state: CLIState = ctx.obj

    async def _resolve() -> None:
        async with create_client(profile) as client:
            await client.resolve_incident(key)
        print_success(f"Incident {key} resolved", state, data={"key": key})

    run_command(state, _resolve())


complete_app.command("ut", hidden=True)(complete_user_task)
resolve_app.command("inc", hidden=True)(resolve_incident)
