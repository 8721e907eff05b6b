# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from timespan.model.time_entry import TimeEntry
from timespan.model.timer import ActiveTimer
from timespan.time import (
    datetime_to_display_local_datetime_str,
    datetime_to_display_local_datetime_str_optional,
    duration_to_str_optional,
)
from timespan.view.view.util import format_optional, format_tags
from timespan.view.view.views.header import header


def timer_started_view(timer: ActiveTimer) -> None:
    header("timer")

    message = f"[green]Started timer for {escape(timer['project_name'])}[/green]"
    if timer["task_description"]:
        message += f"\n{escape(timer['task_description'])}"
    message += f"\nstarted {datetime_to_display_local_datetime_str(timer['start_time'])}"

    console = Console()
    console.print(Panel(message, box=box.ROUNDED, expand=False))


def timer_stopped_view(entry: TimeEntry) -> None:
    header("timer")

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("project", escape(entry["project_name"]))
    entry_table.add_row("task", escape(format_optional(entry["task_description"])))
    entry_table.add_row(
        "start", datetime_to_display_local_datetime_str(entry["start_time"])
    )
    entry_table.add_row(
        "end",
        format_optional(
            datetime_to_display_local_datetime_str_optional(entry["end_time"])
        ),
    )
    entry_table.add_row(
        "duration", format_optional(duration_to_str_optional(entry["duration"]))
    )
    entry_table.add_row("tags", escape(format_tags(entry["tags"])))

    console = Console()
    console.print("[green]Stopped timer[/green]")
    console.print(entry_table)


def status_view(status: str, timer: Optional[ActiveTimer]) -> None:
    header("status")

    console = Console()
    console.print(escape(status))
    if timer is not None and len(timer["tags"]) > 0:
        console.print(f"tags: {escape(format_tags(timer['tags']))}")


def timer_tagged_view(timer: ActiveTimer, tag: str) -> None:
    console = Console()
    console.print(
        f"Tagged {escape(timer['project_name'])} with [cyan]{escape(tag)}[/cyan] "
        f"(tags: {escape(format_tags(timer['tags']))})"
    )
