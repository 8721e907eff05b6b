# SPDX-License-Identifier: MIT

import re
from pathlib import Path
from typing import Optional

import pendulum
import typer

from timespan.time import datetime_from_str_utc


def parse_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    if datetime_param is None:
        return None

    datetime = str(datetime_param)

    # Match YYYY-MM-DD format (with optional time component)
    if re.match(r"\d{4}-\d{2}-\d{2}", datetime):
        try:
            return datetime_from_str_utc(datetime)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", datetime):
        days_offset = int(datetime)
        pendulum_date_time = pendulum.today().add(days=days_offset).start_of("day")
        pendulum_date_time = pendulum_date_time.in_tz("UTC")
        return pendulum_date_time

    if datetime == "now" or datetime == "n":
        return pendulum.now().in_tz("UTC")
    if datetime == "today" or datetime == "t":
        return pendulum.today().start_of("day").in_tz("UTC")
    if datetime == "yesterday" or datetime == "y":
        return pendulum.yesterday().start_of("day").in_tz("UTC")
    if datetime == "tomorrow" or datetime == "o":
        return pendulum.tomorrow().start_of("day").in_tz("UTC")
    raise typer.BadParameter("Incorrect datetime format")


def parse_path(path_param: Optional[str]) -> Path:
    """Expand ~ and resolve, defaulting to the current directory."""
    if path_param is None:
        return Path.cwd()
    return Path(path_param).expanduser().resolve()
