# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from timespan.errors import InvalidDurationError
from timespan.model.time_entry import TimeEntry
from timespan.model.timer import ActiveTimer
from timespan.template.time_entry import get_time_entry_template
from timespan.time import duration_between, now_utc


def new_time_entry(
    project_id: str,
    project_name: str,
    task_description: Optional[str],
    start_time: pendulum.DateTime,
) -> TimeEntry:
    entry = get_time_entry_template()
    entry["project_id"] = project_id
    entry["project_name"] = project_name
    entry["task_description"] = task_description
    entry["start_time"] = start_time
    return entry


def time_entry_from_timer(timer: ActiveTimer) -> TimeEntry:
    """Carry a timer's project, task and tags over to a running entry."""
    entry = new_time_entry(
        timer["project_id"],
        timer["project_name"],
        timer["task_description"],
        timer["start_time"],
    )
    for tag in timer["tags"]:
        add_tag(entry, tag)
    return entry


def stop_time_entry(entry: TimeEntry, end_time: pendulum.DateTime) -> None:
    """
    Finalize a running entry in place.

    Raises InvalidDurationError unless end_time is strictly after the start.
    """
    if end_time <= entry["start_time"]:
        raise InvalidDurationError("End time must be after start time")

    entry["end_time"] = end_time
    entry["duration"] = duration_between(entry["start_time"], end_time)
    entry["updated_at"] = now_utc()


def add_tag(entity: TimeEntry | ActiveTimer, tag: str) -> bool:
    """Append tag unless already present. Returns whether the tags changed."""
    if tag in entity["tags"]:
        return False
    entity["tags"].append(tag)
    return True


def remove_tag(entity: TimeEntry | ActiveTimer, tag: str) -> bool:
    if tag not in entity["tags"]:
        return False
    entity["tags"] = [existing for existing in entity["tags"] if existing != tag]
    return True


def is_running(entry: TimeEntry) -> bool:
    return entry["end_time"] is None


def current_duration(entry: TimeEntry) -> pendulum.Duration:
    if entry["end_time"] is not None:
        return duration_between(entry["start_time"], entry["end_time"])
    return duration_between(entry["start_time"], now_utc())


def timer_elapsed(timer: ActiveTimer) -> pendulum.Duration:
    return duration_between(timer["start_time"], now_utc())
