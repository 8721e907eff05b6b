# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from timespan.model.discovery import (
    DEFAULT_EXCLUDE_PATTERNS,
    DiscoveryOptions,
    DiscoveryResult,
)
from timespan.model.project import Project
from timespan.repository.configuration import CONFIGURATION_REPO
from timespan.repository.store import get_repository
from timespan.service.discovery import ClientDiscoveryService
from timespan.service.project import ProjectService
from timespan.terminal.completion import complete_project
from timespan.terminal.custom_typer import AliasedTyperGroup
from timespan.terminal.error import run_command
from timespan.view.view.views import discovery as discovery_report
from timespan.view.view.views import project as project_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("create, c", no_args_is_help=True)
def create(
    name: str,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
) -> None:
    """Create a project."""

    async def create_project() -> Project:
        return await ProjectService(get_repository()).create_project(name, description)

    project = run_command(create_project())
    Console().print(f"[green]Created project: {escape(project['name'])}[/green]")


@app.command("list, ls")
def list_projects() -> None:
    """List all projects."""

    async def all_projects() -> list[Project]:
        return await ProjectService(get_repository()).list_projects()

    project_report.projects_view(run_command(all_projects()))


@app.command("update, u", no_args_is_help=True)
def update(
    name: Annotated[str, typer.Argument(autocompletion=complete_project)],
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
) -> None:
    """Replace a project's description."""

    async def update_project() -> Project:
        return await ProjectService(get_repository()).update_project(name, description)

    project = run_command(update_project())
    project_report.single_project_view(project)


@app.command("delete, rm", no_args_is_help=True)
def delete(
    name: Annotated[str, typer.Argument(autocompletion=complete_project)],
) -> None:
    """Delete a project that has no time entries."""

    async def delete_project() -> None:
        await ProjectService(get_repository()).delete_project(name)

    run_command(delete_project())
    Console().print(f"[green]Deleted project: {escape(name)}[/green]")


@app.command("discover, d")
def discover(
    path: Annotated[
        Optional[str],
        typer.Option("--path", "-p", help="directory holding one folder per client"),
    ] = None,
    prefix: Annotated[
        Optional[str],
        typer.Option("--prefix", help="prepended to every discovered project name"),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="show what would change without saving")
    ] = False,
) -> None:
    """Create client projects from the folders of a base directory."""
    config = CONFIGURATION_REPO.get_config()

    base_path = path if path is not None else config["discovery_base_path"]
    exclude_patterns = config.get("discovery_exclude_patterns")
    options = DiscoveryOptions(
        base_path=Path(base_path).expanduser(),
        exclude_patterns=list(exclude_patterns or DEFAULT_EXCLUDE_PATTERNS),
        project_prefix=prefix if prefix is not None else config["discovery_prefix"],
        dry_run=dry_run,
    )

    async def discover_clients() -> DiscoveryResult:
        return await ClientDiscoveryService(get_repository()).discover_clients(options)

    discovery_report.discovery_view(run_command(discover_clients()), dry_run)


@app.command("clients, cl")
def clients() -> None:
    """List client projects."""

    async def client_projects() -> list[Project]:
        return await ClientDiscoveryService(get_repository()).list_client_projects()

    project_report.projects_view(
        run_command(client_projects()), sub_header="client projects", show_path=True
    )
