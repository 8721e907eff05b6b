# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timespan.model.git import CommitAnalysis, GitCommit, GitImportResult
from timespan.time import (
    datetime_to_display_local_datetime_str,
    duration_from_seconds,
    duration_to_str,
    duration_to_str_optional,
)
from timespan.view.view.util import format_optional
from timespan.view.view.views.header import header


def commit_analysis_view(analyses: list[CommitAnalysis]) -> None:
    header("commit analysis")

    console = Console()
    if len(analyses) == 0:
        console.print("No commits found")
        return

    analysis_table = Table(box=box.SIMPLE)
    analysis_table.add_column("commit")
    analysis_table.add_column("date")
    analysis_table.add_column("type")
    analysis_table.add_column("changes", justify="right")
    analysis_table.add_column("estimate", justify="right")
    analysis_table.add_column("confidence", justify="right")
    analysis_table.add_column("message", no_wrap=True, overflow="ellipsis")

    total_seconds = 0
    for analysis in analyses:
        commit = analysis.commit
        total_seconds += int(analysis.estimated_duration.total_seconds())
        analysis_table.add_row(
            commit.short_hash,
            datetime_to_display_local_datetime_str(commit.timestamp),
            analysis.commit_type.value,
            f"+{commit.insertions}/-{commit.deletions}",
            duration_to_str(analysis.estimated_duration),
            f"{analysis.confidence_score:.0%}",
            escape(commit.summary),
        )

    console.print(analysis_table)
    console.print(
        f"[bold]Estimated total: {duration_to_str(duration_from_seconds(total_seconds))}[/bold]"
    )


def git_status_view(
    path: Path,
    is_git_repo: bool,
    project_name: Optional[str],
    recent_commits: list[GitCommit],
    days: int,
) -> None:
    header("git status")

    status_table = Table(box=box.SIMPLE)
    status_table.add_column("property")
    status_table.add_column("value")

    status_table.add_row("path", escape(str(path)))
    status_table.add_row("repository", "yes" if is_git_repo else "no")
    status_table.add_row("project", escape(format_optional(project_name)))
    if is_git_repo:
        status_table.add_row(f"commits ({days}d)", str(len(recent_commits)))
        if len(recent_commits) > 0:
            latest = recent_commits[0]
            status_table.add_row(
                "latest", f"{latest.short_hash} {escape(latest.summary)}"
            )
            status_table.add_row(
                "latest date", datetime_to_display_local_datetime_str(latest.timestamp)
            )

    console = Console()
    console.print(status_table)


def import_result_view(result: GitImportResult, dry_run: bool) -> None:
    header("git import (dry run)" if dry_run else "git import")

    console = Console()
    if len(result.imported) > 0:
        import_table = Table(box=box.SIMPLE)
        import_table.add_column("task")
        import_table.add_column("start")
        import_table.add_column("duration", justify="right")
        import_table.add_column("tags")
        for entry in result.imported:
            import_table.add_row(
                escape(format_optional(entry["task_description"])),
                datetime_to_display_local_datetime_str(entry["start_time"]),
                format_optional(duration_to_str_optional(entry["duration"])),
                escape(", ".join(entry["tags"])),
            )
        console.print(import_table)

    verb = "Would import" if dry_run else "Imported"
    console.print(
        f"[green]{verb} {len(result.imported)} commit(s)[/green], "
        f"skipped {len(result.skipped)}"
    )
