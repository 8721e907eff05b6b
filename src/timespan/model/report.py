# SPDX-License-Identifier: MIT

from dataclasses import dataclass

import pendulum

from timespan.model.time_entry import TimeEntry


@dataclass(frozen=True)
class DateRange:
    start: pendulum.DateTime
    end: pendulum.DateTime


@dataclass(frozen=True)
class ProjectSummary:
    project_name: str
    total_duration: pendulum.Duration
    entry_count: int


@dataclass(frozen=True)
class TimeReport:
    total_duration: pendulum.Duration
    entries: tuple[TimeEntry, ...]
    project_summaries: tuple[ProjectSummary, ...]
    date_range: DateRange
