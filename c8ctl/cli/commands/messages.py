"""Message commands.

    c8ctl publish message NAME [--correlation-key K] [--variables JSON] [--time-to-live MS]
    c8ctl correlate message NAME [--correlation-key K] [--variables JSON]
"""

from typing import Optional

import typer

from c8ctl.cli.commands import profile_option, run_command
from c8ctl.cli.output import print_success
from c8ctl.cli.state import CLIState
from c8ctl.client import create_client
from c8ctl.client.core import parse_variables

publish_app = typer.Typer(name="publish", help="Publish messages", no_args_is_help=True)
correlate_app = typer.Typer(name="correlate", help="Correlate messages", no_args_is_help=True)


@publish_app.command("message")
def publish_message(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Message name"),
    correlation_key: Optional[str] = typer.Option(
        None, "--correlation-key", help="Correlation key"
    ),
    variables: Optional[str] = typer.Option(
        None, "--variables", help="Message variables as a JSON object"
    ),
    time_to_live: Optional[int] = typer.Option(
        None, "--time-to-live", help="Buffer time in milliseconds"
    ),
    profile: Optional[str] = profile_option(),
) -> None:
    """Publish a message, buffering it if no subscription matches yet.

    Examples:
        c8ctl publish message payment-received --correlation-key A-1
    """
    state: CLIState = ctx.obj

    async def _publish() -> None:
        payload = parse_variables(variables)
        async with create_client(profile) as client:
            result = await client.publish_message(
                name,
                correlation_key=correlation_key,
                variables=payload,
                time_to_live_ms=time_to_live,
            )
        key = result.get("messageKey")
        print_success(f"Message '{name}' published [Key: {key}]", state, data=result)

    run_command(state, _publish())


@correlate_app.command("message")
def correlate_message(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Message name"),
    correlation_key: Optional[str] = typer.Option(
        None, "--correlation-key", help="Correlation key"
    ),
    variables: Optional[str] = typer.Option(
        None, "--variables", help="Message variables as a JSON object"
    ),
    profile: Optional[str] = profile_option(),
) -> None:
    """Correlate a message to a waiting subscription.

    Examples:
        c8ctl correlate message payment-received --correlation-key A-1
    """
    state: CLIState = ctx.obj

    async def _correlate() -> None:
        payload = parse_variables(variables)
        async with create_client(profile) as client:
            result = await client.correlate_message(
                name, correlation_key=correlation_key, variables=payload
            )
        key = result.get("messageKey")
        print_success(f"Message '{name}' correlated [Key: {key}]", state, data=result)

    run_command(state, _correlate())


publish_app.command("msg", hidden=True)(publish_message)
correlate_app.command("msg", hidden=True)(correlate_message)
