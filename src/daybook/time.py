# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast

import pendulum

DAY_LABEL_FORMAT = "D MMMM YYYY"
ISO_DATE_FORMAT = "YYYY-MM-DD"

_CLOCK_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def date_to_iso_str(date: pendulum.Date) -> str:
    return date.format(ISO_DATE_FORMAT)


def date_from_iso_str(date_str: str) -> Optional[pendulum.Date]:
    """Parse a 'YYYY-MM-DD' string, returning None when it is not a valid date."""
    try:
        return pendulum.from_format(date_str, ISO_DATE_FORMAT).date()
    except ValueError:
        return None


def date_to_day_label(date: pendulum.Date) -> str:
    """Format a date as the '<day> <Month> <Year>' label, e.g. '5 March 2024'."""
    return date.format(DAY_LABEL_FORMAT, locale="en")


def date_from_day_label(label: str) -> Optional[pendulum.Date]:
    """Parse a '<day> <Month> <Year>' label back into a date.

    Returns None for anything that does not parse; callers treat such labels
    as matching no day at all.
    """
    try:
        return pendulum.from_format(label.strip(), DAY_LABEL_FORMAT, locale="en").date()
    except ValueError:
        return None


def month_label(year: int, month: int) -> str:
    return pendulum.date(year, month, 1).format("MMMM YYYY", locale="en")


def parse_clock_time(time_str: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse a time string in (H)H:mm format and return a tuple of (hour, minute).

    Returns None if the string is missing, malformed or out of range.
    """
    if time_str is None:
        return None

    time_match = _CLOCK_TIME_PATTERN.match(time_str.strip())
    if not time_match:
        return None

    hour = int(time_match.group(1))
    minute = int(time_match.group(2))
    if hour > 23 or minute > 59:
        return None

    return (hour, minute)


def clock_time_to_str(clock_time: tuple[int, int]) -> str:
    hour, minute = clock_time
    return f"{hour:02d}:{minute:02d}"
