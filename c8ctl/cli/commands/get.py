"""Get command implementation.

    c8ctl get process-instance KEY   (alias: pi)
    c8ctl get topology
"""

from typing import Optional

import typer

from c8ctl.cli.commands import profile_option, run_command
from c8ctl.cli.output import console, print_json, print_table
from c8ctl.cli.state import CLIState
from c8ctl.client import create_client

get_app = typer.Typer(name="get", help="Get a single resource", no_args_is_help=True)


@get_app.command("process-instance")
def get_process_instance(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Process instance key"),
    profile: Optional[str] = profile_option(),
) -> None:
    """Show one process instance.

    Examples:
        c8ctl get process-instance 2251799813685249
    """
    state: CLIState = ctx.obj

    async def _get() -> None:
        async with create_client(profile) as client:
            result = await client.get_process_instance(key)
        print_json(result, state)

    run_command(state, _get())


@get_app.command("topology")
def get_topology(
    ctx: typer.Context,
    profile: Optional[str] = profile_option(),
) -> None:
    """Show cluster topology: brokers, partitions and versions.

    Examples:
        c8ctl get topology --profile prod
    """
    state: CLIState = ctx.obj

    async def _get() -> None:
        async with create_client(profile) as client:
            topology = await client.get_topology()

        if state.json_mode:
            print_json(topology, state)
            return

        console.print(f"Cluster size:       {topology.get('clusterSize', '')}")
        console.print(f"Partitions:         {topology.get('partitionsCount', '')}")
        console.print(f"Replication factor: {topology.get('replicationFactor', '')}")
        console.print(f"Gateway version:    {topology.get('gatewayVersion', '')}")
        brokers = [
            {
                "Node": broker.get("nodeId"),
                "Host": f"{broker.get('host', '')}:{broker.get('port', '')}",
                "Version": broker.get("version"),
                "Partitions": ", ".join(
                    f"{p.get('partitionId')} ({p.get('role', '').lower()})"
                    for p in broker.get("partitions", [])
                ),
            }
            for broker in topology.get("brokers", [])
        ]
        print_table(brokers, state, title="Brokers", empty_message="No brokers reported")

    run_command(state, _get())


get_app.command("pi", hidden=True)(get_process_instance)
