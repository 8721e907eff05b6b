# SPDX-License-Identifier: MIT

from typing import Optional

from timespan.errors import (
    NoActiveTimerError,
    ProjectNotFoundError,
    TimerAlreadyRunningError,
)
from timespan.logger import get_logger
from timespan.model.time_entry import TimeEntry
from timespan.model.timer import ActiveTimer, Idle, Running, TimerState
from timespan.repository.gateway import Repository
from timespan.service.entry import (
    add_tag,
    stop_time_entry,
    time_entry_from_timer,
    timer_elapsed,
)
from timespan.template.timer import get_active_timer_template
from timespan.time import duration_to_seconds_optional, now_utc

logger = get_logger(__name__)

NO_ACTIVE_TIMER_STATUS = "No active timer"


class TimeTrackingService:
    """
    Start/stop lifecycle of the single active timer.

    The machine is Idle when the timer slot is empty and Running while it
    holds a timer. start_timer is the only Idle -> Running transition and
    stop_timer the only Running -> Idle one.
    """

    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    async def get_state(self) -> TimerState:
        timer = await self.repository.get_active_timer()
        if timer is None:
            return Idle()
        return Running(timer)

    async def __require_running(self) -> ActiveTimer:
        state = await self.get_state()
        if not isinstance(state, Running):
            raise NoActiveTimerError()
        return state.timer

    async def start_timer(
        self, project_name: str, task_description: Optional[str] = None
    ) -> ActiveTimer:
        """
        Start tracking time against a project.

        Raises:
            TimerAlreadyRunningError: if a timer is already active
            ProjectNotFoundError: if the project does not exist
        """
        state = await self.get_state()
        if isinstance(state, Running):
            raise TimerAlreadyRunningError(state.timer["project_name"])

        project = await self.repository.get_project_by_name(project_name)
        if project is None:
            raise ProjectNotFoundError(project_name)

        timer = get_active_timer_template()
        timer["project_id"] = project["id"]
        timer["project_name"] = project["name"]
        timer["task_description"] = task_description
        timer["start_time"] = now_utc()

        # conditional insert, fails if another start won the slot meanwhile
        await self.repository.start_active_timer(timer)

        logger.info("timer_started", project=project["name"], task=task_description)
        return timer

    async def stop_timer(self) -> TimeEntry:
        """
        Stop the active timer and record it as a finalized time entry.

        Raises:
            NoActiveTimerError: if no timer is active
            InvalidDurationError: if the computed duration is not positive
        """
        timer = await self.__require_running()

        entry = time_entry_from_timer(timer)
        stop_time_entry(entry, now_utc())

        await self.repository.finish_active_timer(entry)

        logger.info(
            "timer_stopped",
            project=entry["project_name"],
            duration_seconds=duration_to_seconds_optional(entry["duration"]),
        )
        return entry

    async def get_current_status(self) -> str:
        match await self.get_state():
            case Running(timer=timer):
                elapsed_minutes = int(timer_elapsed(timer).total_seconds()) // 60
                hours, minutes = divmod(elapsed_minutes, 60)
                task = (
                    f" - {timer['task_description']}"
                    if timer["task_description"]
                    else ""
                )
                return f"⏱️  {timer['project_name']} ({hours}h {minutes}m){task}"
            case _:
                return NO_ACTIVE_TIMER_STATUS

    async def add_tag_to_active_timer(self, tag: str) -> ActiveTimer:
        timer = await self.__require_running()

        if add_tag(timer, tag):
            # fails if the timer was stopped since it was read
            await self.repository.update_active_timer_tags(timer["id"], timer["tags"])
            logger.info("timer_tagged", project=timer["project_name"], tag=tag)
        return timer
