"""Plugin management commands.

    c8ctl list plugins
    c8ctl load plugin NAME | --from SOURCE
    c8ctl unload plugin NAME      (alias: c8ctl remove plugin NAME)
    c8ctl sync plugins [--force]

Installation goes through pip into ./c8ctl_plugins; the plugin registry
remembers what was installed so `sync plugins` can restore it.
"""

from typing import Optional

import typer

from c8ctl.cli.commands import fail
from c8ctl.cli.output import print_info, print_success, print_table, print_warning
from c8ctl.cli.state import CLIState
from c8ctl.errors import C8ctlError
from c8ctl.plugins import get_loaded_plugins, get_registered_plugins
from c8ctl.plugins.installer import (
    load_plugin_package,
    sync_registered_plugins,
    unload_plugin_package,
)

load_app = typer.Typer(name="load", help="Install plugins", no_args_is_help=True)
unload_app = typer.Typer(name="unload", help="Uninstall plugins", no_args_is_help=True)
sync_app = typer.Typer(name="sync", help="Synchronize plugins", no_args_is_help=True)


def list_plugins(ctx: typer.Context) -> None:
    """List installed plugins and their commands.

    Shows plugins discovered in ./c8ctl_plugins together with plugins
    recorded in the registry that are not currently installed.

    Examples:
        c8ctl list plugins
    """
    state: CLIState = ctx.obj

    loaded = {p.name: p for p in get_loaded_plugins()}
    registered = {e.name: e for e in get_registered_plugins()}

    rows = []
    for name in sorted(set(loaded) | set(registered)):
        plugin = loaded.get(name)
        entry = registered.get(name)
        rows.append(
            {
                "Name": name,
                "Status": "loaded" if plugin else "not installed",
                "Source": entry.source if entry else "",
                "Installed": entry.installed_at if entry else "",
                "Commands": ", ".join(plugin.commands) if plugin else "",
                "Description": plugin.description if plugin else "",
            }
        )

    print_table(
        rows,
        state,
        title="Plugins",
        empty_message="No plugins installed. Add one with 'c8ctl load plugin NAME'",
    )


@load_app.command("plugin")
def load_plugin(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(
        None, help="Plugin package name on the package index"
    ),
    source: Optional[str] = typer.Option(
        None,
        "--from",
        help="Install from a URL, VCS reference or local path instead of the index",
    ),
) -> None:
    """Install a plugin package into ./c8ctl_plugins.

    Give either a package NAME or --from SOURCE, not both.

    Examples:
        c8ctl load plugin c8ctl-hello

        c8ctl load plugin --from git+https://github.com/acme/c8ctl-hello
    """
    state: CLIState = ctx.obj

    if name or source:
        print_info(f"Installing plugin '{name or source}'...", state)
    try:
        entry = load_plugin_package(name, source)
    except C8ctlError as e:
        fail(state, e)
        return

    print_success(
        f"Plugin '{entry.name}' installed",
        state,
        data={"name": entry.name, "source": entry.source},
    )


@unload_app.command("plugin")
def unload_plugin(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Plugin package name"),
) -> None:
    """Remove a plugin package and its registry entry.

    Examples:
        c8ctl unload plugin c8ctl-hello
    """
    state: CLIState = ctx.obj

    if not unload_plugin_package(name):
        print_warning(f"Plugin '{name}' is not installed", state)
        raise typer.Exit(1)

    print_success(f"Plugin '{name}' removed", state, data={"name": name})


@sync_app.command("plugins")
def sync_plugins(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Reinstall every registered plugin"
    ),
) -> None:
    """Install registered plugins that are missing from ./c8ctl_plugins.

    Examples:
        c8ctl sync plugins

        c8ctl sync plugins --force
    """
    state: CLIState = ctx.obj

    results = sync_registered_plugins(force=force)
    if not results:
        print_info("No plugins registered", state)
        return

    failed = [r for r in results if r.error]
    for result in results:
        if result.error:
            print_warning(f"{result.entry.name}: {result.error}", state)
        elif result.installed:
            print_info(f"{result.entry.name}: installed", state)
        else:
            print_info(f"{result.entry.name}: already present", state)

    if failed:
        raise typer.Exit(1)

    print_success(
        f"Synchronized {len(results)} plugin(s)",
        state,
        data={"installed": [r.entry.name for r in results if r.installed]},
    )
