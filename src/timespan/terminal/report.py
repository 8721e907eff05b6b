# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from timespan.model.report import TimeReport
from timespan.repository.store import get_repository
from timespan.service.reporting import ReportingService
from timespan.terminal.completion import complete_project
from timespan.terminal.custom_typer import AliasedTyperGroup
from timespan.terminal.error import handle_errors, run_command
from timespan.terminal.parse import parse_datetime
from timespan.time import datetime_to_display_local_date_str, now_utc
from timespan.view.view.views import report as time_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DateOption = Annotated[
    Optional[pendulum.DateTime],
    typer.Option(
        "--date",
        parser=parse_datetime,
        help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
    ),
]
JsonOption = Annotated[bool, typer.Option("--json", help="print the report as JSON")]


def __show(title: str, report: TimeReport, as_json: bool) -> None:
    if as_json:
        with handle_errors():
            output = ReportingService(get_repository()).export_report_json(report)
        typer.echo(output)
        return
    time_report.report_view(title, report)


@app.command("daily, d")
def daily(date: DateOption = None, as_json: JsonOption = False) -> None:
    """Time tracked on one day (default today)."""
    reference = date if date is not None else now_utc()

    async def daily_report() -> TimeReport:
        return await ReportingService(get_repository()).generate_daily_report(
            reference
        )

    report = run_command(daily_report())
    __show(
        f"daily report {datetime_to_display_local_date_str(report.date_range.start)}",
        report,
        as_json,
    )


@app.command("weekly, w")
def weekly(date: DateOption = None, as_json: JsonOption = False) -> None:
    """Time tracked in the Monday-to-Sunday week containing a date (default today)."""
    reference = date if date is not None else now_utc()

    async def weekly_report() -> TimeReport:
        return await ReportingService(get_repository()).generate_weekly_report(
            reference
        )

    report = run_command(weekly_report())
    __show(
        f"weekly report {datetime_to_display_local_date_str(report.date_range.start)}",
        report,
        as_json,
    )


@app.command("project, p", no_args_is_help=True)
def project(
    name: Annotated[str, typer.Argument(autocompletion=complete_project)],
    as_json: JsonOption = False,
) -> None:
    """All time tracked on a project."""

    async def project_report() -> TimeReport:
        return await ReportingService(get_repository()).generate_project_report(name)

    report = run_command(project_report())
    __show(f"project report {name}", report, as_json)
