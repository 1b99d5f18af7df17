"""Deploy command implementation.

Deploys BPMN, DMN and form files. Directories are searched recursively;
entries starting with "." or "_" are skipped.
"""

from pathlib import Path
from typing import Optional

import typer

from c8ctl.cli.commands import fail, profile_option, run_command
from c8ctl.cli.output import print_success
from c8ctl.cli.state import CLIState
from c8ctl.client import create_client
from c8ctl.errors import ValidationError

DEPLOYABLE_SUFFIXES = {".bpmn", ".dmn", ".form"}


def collect_resources(paths: list[Path]) -> list[Path]:
    """Expand files and directories into a sorted list of deployable files."""
    found: set[Path] = set()
    for path in paths:
        if path.is_dir():
            for candidate in path.rglob("*"):
                relative = candidate.relative_to(path)
                if any(part.startswith((".", "_")) for part in relative.parts):
                    continue
                if candidate.is_file() and candidate.suffix.lower() in DEPLOYABLE_SUFFIXES:
                    found.add(candidate)
        elif path.is_file() and path.suffix.lower() in DEPLOYABLE_SUFFIXES:
            found.add(path)
    return sorted(found)


def deploy(
    ctx: typer.Context,
    paths: Optional[list[Path]] = typer.Argument(
        None, help="Files or directories to deploy (defaults to the current directory)"
    ),
    profile: Optional[str] = profile_option(),
) -> None:
    """Deploy BPMN, DMN and form resources.

    Examples:
        c8ctl deploy

        c8ctl deploy ./processes order.bpmn
    """
    state: CLIState = ctx.obj

    resources = collect_resources(paths or [Path.cwd()])
    if not resources:
        fail(
            state,
            ValidationError(
                message="No .bpmn, .dmn or .form files found",
                error_code="INPUT-NothingToDeploy",
                suggestion="Pass files or directories containing deployable resources",
            ),
        )
        return

    async def _deploy() -> None:
        async with create_client(profile) as client:
            result = await client.deploy_resources(resources)
        key = result.get("deploymentKey")
        print_success(
            f"Deployed {len(resources)} resource(s) [Key: {key}]",
            state,
            data=result,
        )

    run_command(state, _deploy())
