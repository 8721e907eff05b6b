# SPDX-License-Identifier: MIT

import json
from typing import Any, Iterable

import pendulum

from timespan.errors import InvalidDurationError, ProjectNotFoundError
from timespan.logger import get_logger
from timespan.model.report import DateRange, ProjectSummary, TimeReport
from timespan.model.time_entry import TimeEntry
from timespan.repository.gateway import Repository
from timespan.time import (
    datetime_to_iso_str,
    datetime_to_iso_str_optional,
    day_boundaries,
    duration_from_seconds,
    duration_to_seconds,
    duration_to_seconds_optional,
    now_utc,
    week_boundaries,
)

logger = get_logger(__name__)


def build_time_report(
    entries: Iterable[TimeEntry],
    start: pendulum.DateTime,
    end: pendulum.DateTime,
) -> TimeReport:
    """
    Fold entries into a report.

    Entries without a duration still count towards their project's entry
    count but add nothing to any total.
    """
    report_entries = tuple(entries)

    total_seconds = 0
    summaries: dict[str, tuple[int, int]] = {}
    for entry in report_entries:
        seconds = duration_to_seconds_optional(entry["duration"]) or 0
        total_seconds += seconds

        project_seconds, count = summaries.get(entry["project_name"], (0, 0))
        summaries[entry["project_name"]] = (project_seconds + seconds, count + 1)

    return TimeReport(
        total_duration=duration_from_seconds(total_seconds),
        entries=report_entries,
        project_summaries=tuple(
            ProjectSummary(
                project_name=project_name,
                total_duration=duration_from_seconds(project_seconds),
                entry_count=count,
            )
            for project_name, (project_seconds, count) in summaries.items()
        ),
        date_range=DateRange(start=start, end=end),
    )


def time_entry_to_json_dict(entry: TimeEntry) -> dict[str, Any]:
    return {
        "id": entry["id"],
        "project_id": entry["project_id"],
        "project_name": entry["project_name"],
        "task_description": entry["task_description"],
        "start_time": datetime_to_iso_str(entry["start_time"]),
        "end_time": datetime_to_iso_str_optional(entry["end_time"]),
        "duration": duration_to_seconds_optional(entry["duration"]),
        "tags": list(entry["tags"]),
        "created_at": datetime_to_iso_str(entry["created_at"]),
        "updated_at": datetime_to_iso_str(entry["updated_at"]),
    }


def report_to_json_dict(report: TimeReport) -> dict[str, Any]:
    return {
        "total_duration": duration_to_seconds(report.total_duration),
        "entries": [time_entry_to_json_dict(entry) for entry in report.entries],
        "project_summaries": [
            {
                "project_name": summary.project_name,
                "total_duration": duration_to_seconds(summary.total_duration),
                "entry_count": summary.entry_count,
            }
            for summary in report.project_summaries
        ],
        "date_range": {
            "start": datetime_to_iso_str(report.date_range.start),
            "end": datetime_to_iso_str(report.date_range.end),
        },
    }


class ReportingService:
    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    async def generate_daily_report(self, date: pendulum.DateTime) -> TimeReport:
        start, end = day_boundaries(date)
        entries = await self.repository.list_time_entries_by_date_range(start, end)
        logger.debug("daily_report_generated", start=str(start), entries=len(entries))
        return build_time_report(entries, start, end)

    async def generate_weekly_report(self, date: pendulum.DateTime) -> TimeReport:
        start, end = week_boundaries(date)
        entries = await self.repository.list_time_entries_by_date_range(start, end)
        logger.debug(
            "weekly_report_generated", start=str(start), entries=len(entries)
        )
        return build_time_report(entries, start, end)

    async def generate_project_report(self, project_name: str) -> TimeReport:
        project = await self.repository.get_project_by_name(project_name)
        if project is None:
            raise ProjectNotFoundError(project_name)

        entries = await self.repository.list_time_entries_by_project(project["id"])

        now = now_utc()
        start = min((entry["start_time"] for entry in entries), default=now)
        end = max(
            (entry["end_time"] for entry in entries if entry["end_time"] is not None),
            default=now,
        )
        return build_time_report(entries, start, end)

    def export_report_json(self, report: TimeReport) -> str:
        try:
            return json.dumps(report_to_json_dict(report), indent=2, ensure_ascii=False)
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidDurationError(f"Failed to serialize report: {e}") from e
