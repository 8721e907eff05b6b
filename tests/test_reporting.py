"""Tests for report generation and JSON export."""

import json

import pendulum
import pytest

from conftest import make_entry, make_project
from timespan.errors import InvalidDurationError, ProjectNotFoundError
from timespan.service.entry import new_time_entry
from timespan.service.reporting import ReportingService, build_time_report
from timespan.time import datetime_to_iso_str

FIRST_DAY = pendulum.datetime(2024, 3, 12, 8, tz="local").in_tz("UTC")
OTHER_DAY = pendulum.datetime(2024, 3, 13, 8, tz="local").in_tz("UTC")


async def seed(repository):
    acme = make_project("Acme")
    beta = make_project("Beta")
    await repository.create_project(acme)
    await repository.create_project(beta)
    await repository.create_time_entry(
        make_entry(acme, FIRST_DAY, pendulum.duration(hours=2), "design")
    )
    await repository.create_time_entry(
        make_entry(acme, FIRST_DAY.add(hours=3), pendulum.duration(hours=2, minutes=30))
    )
    await repository.create_time_entry(
        make_entry(beta, OTHER_DAY, pendulum.duration(hours=1))
    )
    return acme, beta


class TestBuildTimeReport:
    """Tests for folding entries into a report."""

    def test_open_entries_count_but_add_nothing(self):
        acme = make_project("Acme")
        closed = make_entry(acme, FIRST_DAY, pendulum.duration(minutes=30))
        running = new_time_entry(acme["id"], "Acme", None, FIRST_DAY.add(hours=1))

        report = build_time_report([closed, running], FIRST_DAY, OTHER_DAY)

        assert report.total_duration == pendulum.duration(minutes=30)
        assert len(report.project_summaries) == 1
        assert report.project_summaries[0].entry_count == 2

    def test_totals_and_counts_add_up(self):
        acme = make_project("Acme")
        beta = make_project("Beta")
        entries = [
            make_entry(acme, FIRST_DAY, pendulum.duration(minutes=20)),
            make_entry(beta, FIRST_DAY.add(hours=1), pendulum.duration(minutes=40)),
            make_entry(acme, FIRST_DAY.add(hours=2), pendulum.duration(minutes=15)),
        ]

        report = build_time_report(entries, FIRST_DAY, OTHER_DAY)

        assert report.total_duration == sum(
            (summary.total_duration for summary in report.project_summaries),
            pendulum.duration(),
        )
        assert sum(s.entry_count for s in report.project_summaries) == len(entries)
        by_name = {s.project_name: s for s in report.project_summaries}
        assert by_name["Acme"].total_duration == pendulum.duration(minutes=35)
        assert by_name["Beta"].entry_count == 1

    def test_empty_report(self):
        report = build_time_report([], FIRST_DAY, OTHER_DAY)

        assert report.total_duration == pendulum.duration()
        assert report.entries == ()
        assert report.project_summaries == ()

    def test_unserializable_report(self):
        acme = make_project("Acme")
        entry = make_entry(acme, FIRST_DAY, pendulum.duration(minutes=5))
        entry["tags"] = [object()]  # type: ignore[list-item]
        report = build_time_report([entry], FIRST_DAY, OTHER_DAY)

        with pytest.raises(InvalidDurationError, match="Failed to serialize report"):
            ReportingService(None).export_report_json(report)  # type: ignore[arg-type]


@pytest.mark.asyncio
class TestReportingService:
    """Tests for report windows."""

    async def test_daily_report_scenario(self, repository):
        """Test two Acme entries on one day total 4.5h and Beta is excluded."""
        await seed(repository)

        report = await ReportingService(repository).generate_daily_report(FIRST_DAY)

        assert report.total_duration == pendulum.duration(hours=4, minutes=30)
        assert len(report.project_summaries) == 1
        assert report.project_summaries[0].project_name == "Acme"
        assert report.project_summaries[0].entry_count == 2
        assert [entry["start_time"] for entry in report.entries] == [
            FIRST_DAY,
            FIRST_DAY.add(hours=3),
        ]

    async def test_weekly_report_includes_whole_week(self, repository):
        await seed(repository)

        report = await ReportingService(repository).generate_weekly_report(FIRST_DAY)

        assert report.total_duration == pendulum.duration(hours=5, minutes=30)
        assert {s.project_name for s in report.project_summaries} == {"Acme", "Beta"}
        assert report.date_range.start.in_tz("local").day_of_week == pendulum.MONDAY

    async def test_daily_report_for_empty_day(self, repository):
        await seed(repository)

        report = await ReportingService(repository).generate_daily_report(
            FIRST_DAY.subtract(days=5)
        )

        assert report.entries == ()
        assert report.total_duration == pendulum.duration()

    async def test_project_report_spans_entries(self, repository):
        acme, _ = await seed(repository)

        report = await ReportingService(repository).generate_project_report("Acme")

        assert report.total_duration == pendulum.duration(hours=4, minutes=30)
        assert report.date_range.start == FIRST_DAY
        assert report.date_range.end == FIRST_DAY.add(hours=5, minutes=30)
        assert all(entry["project_id"] == acme["id"] for entry in report.entries)

    async def test_project_report_without_entries(self, repository):
        await repository.create_project(make_project("Empty"))

        report = await ReportingService(repository).generate_project_report("Empty")

        assert report.entries == ()
        assert report.date_range.start == report.date_range.end

    async def test_project_report_unknown_project(self, repository):
        with pytest.raises(ProjectNotFoundError):
            await ReportingService(repository).generate_project_report("Nope")


@pytest.mark.asyncio
class TestExportReportJson:
    """Tests for the JSON export format."""

    async def test_export_shape(self, repository):
        await seed(repository)
        service = ReportingService(repository)
        report = await service.generate_daily_report(FIRST_DAY)

        exported = json.loads(service.export_report_json(report))

        assert exported["total_duration"] == 4.5 * 3600
        assert exported["project_summaries"] == [
            {"project_name": "Acme", "total_duration": 16200, "entry_count": 2}
        ]
        assert exported["date_range"]["start"] == datetime_to_iso_str(
            report.date_range.start
        )
        first = exported["entries"][0]
        assert first["task_description"] == "design"
        assert first["duration"] == 7200
        assert first["start_time"] == datetime_to_iso_str(FIRST_DAY)
        assert first["tags"] == []
