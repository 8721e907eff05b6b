# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timespan.model.discovery import DiscoveryResult
from timespan.time import datetime_to_display_local_date_str
from timespan.view.view.views.header import header


def discovery_view(result: DiscoveryResult, dry_run: bool) -> None:
    header("discovery (dry run)" if dry_run else "discovery")

    console = Console()
    if len(result.discovered_directories) == 0:
        console.print("No client directories found")
        return

    directories_table = Table(box=box.SIMPLE)
    directories_table.add_column("directory")
    directories_table.add_column("git")
    directories_table.add_column("modified")
    for directory in result.discovered_directories:
        directories_table.add_row(
            escape(directory.name),
            "yes" if directory.is_git_repo else "",
            datetime_to_display_local_date_str(directory.last_modified)
            if directory.last_modified is not None
            else "",
        )
    console.print(directories_table)

    prefix = "Would create" if dry_run else "Created"
    for project in result.created_projects:
        console.print(f"[green]{prefix}:[/green] {escape(project['name'])}")

    prefix = "Would update" if dry_run else "Updated"
    for project in result.updated_projects:
        console.print(f"[yellow]{prefix}:[/yellow] {escape(project['name'])}")

    for skipped in result.skipped_directories:
        console.print(f"[dim]Skipped: {escape(skipped)}[/dim]")

    for error in result.errors:
        console.print(f"[red]Error: {escape(error)}[/red]")
