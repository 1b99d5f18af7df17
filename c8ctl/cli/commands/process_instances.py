"""Process instance lifecycle commands.

    c8ctl create process-instance --id PROCESS_ID [--version N] [--variables JSON]
    c8ctl cancel process-instance KEY
"""

from typing import Optional

import typer

from c8ctl.cli.commands import profile_option, run_command
from c8ctl.cli.output import print_success
from c8ctl.cli.state import CLIState
from c8ctl.client import create_client
from c8ctl.client.core import parse_variables

create_app = typer.Typer(name="create", help="Create resources", no_args_is_help=True)
cancel_app = typer.Typer(name="cancel", help="Cancel resources", no_args_is_help=True)


@create_app.command("process-instance")
def create_process_instance(
    ctx: typer.Context,
    process_id: str = typer.Option(
        ..., "--id", "--bpmn-process-id", help="Process definition ID to start"
    ),
    version: Optional[int] = typer.Option(
        None, "--version", help="Process definition version (latest when omitted)"
    ),
    variables: Optional[str] = typer.Option(
        None, "--variables", help="Start variables as a JSON object"
    ),
    profile: Optional[str] = profile_option(),
) -> None:
    """Start a process instance.

    Examples:
        c8ctl create process-instance --id order-process

        c8ctl create pi --id order-process --variables '{"orderId": "A-1"}'
    """
    state: CLIState = ctx.obj

    async def _create() -> None:
        payload = parse_variables(variables)
        async with create_client(profile) as client:
            result = await client.create_process_instance(
                process_id, version=version, variables=payload
            )
        key = result.get("processInstanceKey")
        print_success(f"Process instance created [Key: {key}]", state, data=result)

    run_command(state, _create())


@cancel_app.command("process-instance")
def cancel_process_instance(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Process instance key"),
    profile: Optional[str] = profile_option(),
) -> None:
    """Cancel a running process instance.

    Examples:
        c8ctl cancel process-instance 2251799813685249
    """
    state: CLIState = ctx.obj

    async def _cancel() -> None:
        async with create_client(profile) as client:
            await client.cancel_process_instance(key)
        print_success(f"Process instance {key} cancelled", state, data={"key": key})

    run_command(state, _cancel())


create_app.command("pi", hidden=True)(create_process_instance)
cancel_app.command("pi", hidden=True)(cancel_process_instance)
