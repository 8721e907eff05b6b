# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timespan.model.project import Project
from timespan.time import datetime_to_display_local_date_str
from timespan.view.view.util import format_optional
from timespan.view.view.views.header import header


def projects_view(
    projects: list[Project], sub_header: str = "projects", show_path: bool = False
) -> None:
    header(sub_header)

    console = Console()
    if len(projects) == 0:
        console.print("No projects found")
        return

    projects_table = Table(box=box.SIMPLE)
    projects_table.add_column("name")
    projects_table.add_column("description")
    if show_path:
        projects_table.add_column("path")
    projects_table.add_column("created")

    for project in projects:
        row = [
            escape(project["name"]),
            escape(format_optional(project["description"])),
        ]
        if show_path:
            row.append(escape(format_optional(project["directory_path"])))
        row.append(datetime_to_display_local_date_str(project["created_at"]))
        projects_table.add_row(*row)

    console.print(projects_table)


def single_project_view(project: Project, sub_header: str = "project") -> None:
    header(sub_header)

    project_table = Table(box=box.SIMPLE)
    project_table.add_column("property")
    project_table.add_column("value")

    project_table.add_row("name", escape(project["name"]))
    project_table.add_row(
        "description", escape(format_optional(project["description"]))
    )
    project_table.add_row("path", escape(format_optional(project["directory_path"])))
    project_table.add_row("client", "yes" if project["is_client_project"] else "no")
    project_table.add_row(
        "created", datetime_to_display_local_date_str(project["created_at"])
    )
    project_table.add_row(
        "updated", datetime_to_display_local_date_str(project["updated_at"])
    )

    console = Console()
    console.print(project_table)
