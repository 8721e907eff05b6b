# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timespan.model.report import TimeReport
from timespan.time import (
    datetime_to_display_local_date_str,
    datetime_to_display_local_datetime_str,
    datetime_to_display_local_datetime_str_optional,
    duration_to_str,
    duration_to_str_optional,
)
from timespan.view.view.util import format_optional, format_tags
from timespan.view.view.views.header import header


def report_view(title: str, report: TimeReport, show_entries: bool = True) -> None:
    header(title)

    console = Console()
    start = datetime_to_display_local_date_str(report.date_range.start)
    end = datetime_to_display_local_date_str(report.date_range.end)
    console.print(f"{start} → {end}")
    console.print(f"[bold]Total: {duration_to_str(report.total_duration)}[/bold]")

    if len(report.entries) == 0:
        console.print("No time entries found")
        return

    summary_table = Table(box=box.SIMPLE, title="projects")
    summary_table.add_column("project")
    summary_table.add_column("duration", justify="right")
    summary_table.add_column("entries", justify="right")
    for summary in sorted(
        report.project_summaries,
        key=lambda summary: summary.total_duration,
        reverse=True,
    ):
        summary_table.add_row(
            escape(summary.project_name),
            duration_to_str(summary.total_duration),
            str(summary.entry_count),
        )
    console.print(summary_table)

    if not show_entries:
        return

    entries_table = Table(box=box.SIMPLE, title="entries")
    entries_table.add_column("project")
    entries_table.add_column("task")
    entries_table.add_column("start")
    entries_table.add_column("end")
    entries_table.add_column("duration", justify="right")
    entries_table.add_column("tags")
    for entry in report.entries:
        entries_table.add_row(
            escape(entry["project_name"]),
            escape(format_optional(entry["task_description"])),
            datetime_to_display_local_datetime_str(entry["start_time"]),
            format_optional(
                datetime_to_display_local_datetime_str_optional(entry["end_time"])
            ),
            format_optional(duration_to_str_optional(entry["duration"])),
            escape(format_tags(entry["tags"])),
        )
    console.print(entries_table)
