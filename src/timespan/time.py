# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

import pendulum

# Fixed width so stored timestamps sort lexically in chronological order
STORAGE_FORMAT = "YYYY-MM-DD[T]HH:mm:ss.SSSSSSZ"


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("UTC").format(STORAGE_FORMAT)


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime)).in_tz("UTC")


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_from_str_utc(datetime: str) -> pendulum.DateTime:
    pendulum_date_time = cast(pendulum.DateTime, pendulum.parse(datetime))
    pendulum_date_time = pendulum_date_time.set(tz="local")
    pendulum_date_time = pendulum_date_time.in_tz("UTC")
    return pendulum_date_time


def datetime_from_timestamp(timestamp: int) -> pendulum.DateTime:
    return pendulum.from_timestamp(timestamp, tz="UTC")


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")


def duration_between(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> pendulum.Duration:
    """Whole-second duration from start to end, negative if end precedes start."""
    return duration_from_seconds(int((end - start).total_seconds()))


def duration_from_seconds(seconds: int) -> pendulum.Duration:
    return pendulum.duration(seconds=seconds)


def duration_from_seconds_optional(
    seconds: Optional[int],
) -> Optional[pendulum.Duration]:
    if seconds is None:
        return None
    return duration_from_seconds(seconds)


def duration_to_seconds(duration: datetime.timedelta) -> int:
    return int(duration.total_seconds())


def duration_to_seconds_optional(
    duration: Optional[datetime.timedelta],
) -> Optional[int]:
    if duration is None:
        return None
    return duration_to_seconds(duration)


def duration_to_str(duration: datetime.timedelta) -> str:
    hours, minutes = divmod(duration_to_seconds(duration) // 60, 60)
    return f"{hours}h {minutes}m"


def duration_to_str_optional(duration: Optional[datetime.timedelta]) -> Optional[str]:
    if duration is None:
        return None
    return duration_to_str(duration)


def day_boundaries(
    reference: pendulum.DateTime,
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Local start and end of the reference's day, converted to UTC."""
    local_time = reference.in_tz("local")
    start = local_time.start_of("day")
    end = local_time.end_of("day")
    return start.in_tz("UTC"), end.in_tz("UTC")


def week_boundaries(
    reference: pendulum.DateTime,
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Local Monday 00:00 through Sunday end of day, converted to UTC."""
    local_time = reference.in_tz("local")
    start = local_time.start_of("week")
    end = local_time.end_of("week")
    return start.in_tz("UTC"), end.in_tz("UTC")
