# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from timespan.model.time_entry import TimeEntry
from timespan.model.timer import ActiveTimer, Running
from timespan.repository.store import get_repository
from timespan.service.tracking import TimeTrackingService
from timespan.terminal.completion import complete_project
from timespan.terminal.error import run_command
from timespan.view.view.views import timer as timer_report


def start(
    project: Annotated[
        str, typer.Argument(help="project name", autocompletion=complete_project)
    ],
    task: Annotated[
        Optional[str], typer.Option("--task", "-t", help="what you are working on")
    ] = None,
) -> None:
    """Start a timer for a project."""

    async def start_timer() -> ActiveTimer:
        service = TimeTrackingService(get_repository())
        return await service.start_timer(project, task)

    timer = run_command(start_timer())
    timer_report.timer_started_view(timer)


def stop() -> None:
    """Stop the active timer and record a time entry."""

    async def stop_timer() -> TimeEntry:
        service = TimeTrackingService(get_repository())
        return await service.stop_timer()

    entry = run_command(stop_timer())
    timer_report.timer_stopped_view(entry)


def status() -> None:
    """Show the active timer."""

    async def current_status() -> tuple[str, Optional[ActiveTimer]]:
        service = TimeTrackingService(get_repository())
        state = await service.get_state()
        timer = state.timer if isinstance(state, Running) else None
        return await service.get_current_status(), timer

    current, timer = run_command(current_status())
    timer_report.status_view(current, timer)


def tag(tag: Annotated[str, typer.Argument(help="tag to add")]) -> None:
    """Add a tag to the active timer."""

    async def tag_timer() -> ActiveTimer:
        service = TimeTrackingService(get_repository())
        return await service.add_tag_to_active_timer(tag)

    timer = run_command(tag_timer())
    timer_report.timer_tagged_view(timer, tag)
