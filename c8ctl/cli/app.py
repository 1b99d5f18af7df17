"""CLI app entry point.

Provides the main Typer app and the `c8ctl` console script. main() loads
the session and plugins before dispatch. Built-in commands always take
precedence; a plugin command runs only when the first positional argument
is not a built-in command or group.
"""

import asyncio
import sys
from typing import Optional, Sequence

import typer

from c8ctl.cli.commands.deploy import deploy
from c8ctl.cli.commands.get import get_app
from c8ctl.cli.commands.list_cmd import list_app
from c8ctl.cli.commands.messages import correlate_app, publish_app
from c8ctl.cli.commands.plugins import load_app, sync_app, unload_app, unload_plugin
from c8ctl.cli.commands.process_instances import cancel_app, create_app
from c8ctl.cli.commands.profiles import add_app, remove_app
from c8ctl.cli.commands.session import output, use_app
from c8ctl.cli.commands.show import show_app
from c8ctl.cli.commands.tasks import activate_app, complete_app, fail_app, resolve_app
from c8ctl.cli.output import print_error
from c8ctl.cli.state import CLIState
from c8ctl.config.models import OutputMode
from c8ctl.config.settings import get_c8ctl_settings
from c8ctl.logging import configure_logging, get_logger, set_debug_mode
from c8ctl.plugins import execute_plugin_command, is_plugin_command, load_installed_plugins
from c8ctl.runtime import c8ctl
from c8ctl.version import __version__

logger = get_logger(__name__)

app = typer.Typer(
    name="c8ctl",
    help="c8ctl - command-line client for Camunda 8 orchestration clusters.",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        print(f"c8ctl {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for this invocation",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """c8ctl - manage profiles, sessions, plugins and cluster resources."""
    if verbose:
        configure_logging(
            log_dir=get_c8ctl_settings().log_dir, config={"debug_mode": True}
        )

    ctx.obj = CLIState(
        json_mode=json_output or c8ctl.output_mode == OutputMode.JSON,
        verbose=verbose,
    )


# Configuration and session
app.add_typer(list_app)  # c8ctl list profiles/plugins/process-instances/...
app.add_typer(show_app)  # c8ctl show profile/session
app.add_typer(add_app)  # c8ctl add profile
app.add_typer(remove_app)  # c8ctl remove profile/plugin
app.add_typer(remove_app, name="rm", hidden=True)
app.add_typer(use_app)  # c8ctl use profile/tenant
app.command("output")(output)  # c8ctl output json|text

# Plugins
app.add_typer(load_app)  # c8ctl load plugin
app.add_typer(unload_app)  # c8ctl unload plugin
app.add_typer(sync_app)  # c8ctl sync plugins
remove_app.command("plugin")(unload_plugin)

# Cluster resources
app.add_typer(get_app)  # c8ctl get process-instance/topology
app.add_typer(create_app)  # c8ctl create process-instance
app.add_typer(cancel_app)  # c8ctl cancel process-instance
app.add_typer(complete_app)  # c8ctl complete user-task/job
app.add_typer(fail_app)  # c8ctl fail job
app.add_typer(activate_app)  # c8ctl activate jobs
app.add_typer(resolve_app)  # c8ctl resolve incident
app.add_typer(publish_app)  # c8ctl publish message
app.add_typer(correlate_app)  # c8ctl correlate message
app.command("deploy")(deploy)  # c8ctl deploy [paths]


def builtin_command_names() -> set[str]:
    """Names of every top-level built-in command and group."""
    names: set[str] = set()
    for command in app.registered_commands:
        if command.name:
            names.add(command.name)
        elif command.callback is not None:
            names.add(command.callback.__name__.replace("_", "-"))
    for group in app.registered_groups:
        name = group.name or group.typer_instance.info.name
        if isinstance(name, str):
            names.add(name)
    return names


def _first_positional(args: Sequence[str]) -> Optional[int]:
    """Index of the first argument that is not a root option."""
    for index, arg in enumerate(args):
        if arg == "--":
            return index + 1 if index + 1 < len(args) else None
        if not arg.startswith("-"):
            return index
    return None


def _startup(root_args: Sequence[str]) -> None:
    """Load logging, session and plugins, in that order.

    Only root options (those before the first positional) can enable debug
    output; later arguments belong to the command or plugin.
    """
    settings = get_c8ctl_settings()
    set_debug_mode(
        settings.debug_enabled or "--verbose" in root_args or "-v" in root_args
    )
    configure_logging(log_dir=settings.log_dir)
    c8ctl.load_session()
    load_installed_plugins()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    index = _first_positional(args)
    _startup(args if index is None else args[:index])

    if index is not None:
        name = args[index]
        if name not in builtin_command_names() and is_plugin_command(name):
            state = CLIState(
                json_mode="--json" in args[:index]
                or c8ctl.output_mode == OutputMode.JSON,
                verbose="--verbose" in args[:index] or "-v" in args[:index],
            )
            logger.debug(f"Dispatching to plugin command '{name}'")
            try:
                asyncio.run(execute_plugin_command(name, args[index + 1 :]))
            except Exception as e:
                logger.debug("Plugin command failed", exc_info=True)
                print_error(f"Plugin command '{name}' failed: {e}", state, e)
                sys.exit(1)
            return

    app(args=args, prog_name="c8ctl")


if __name__ == "__main__":
    main()
