# SPDX-License-Identifier: MIT

from typing import Optional, TypeAlias

import pendulum

from daybook.time import today_local

WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

GridCell: TypeAlias = Optional[int]


def days_in_month(year: int, month: int) -> int:
    return pendulum.date(year, month, 1).days_in_month


def start_weekday(year: int, month: int) -> int:
    """Weekday index of the 1st of the month, with Sunday as 0."""
    # isoweekday: Monday = 1, ..., Sunday = 7
    return pendulum.date(year, month, 1).isoweekday() % 7


def generate_calendar_days(year: int, month: int) -> list[GridCell]:
    """
    Lay out a month as grid cells.

    Leading ``None`` cells pad the days before the 1st so that cell index
    modulo 7 is the weekday (Sunday first). There is no trailing padding.
    """
    calendar_days: list[GridCell] = [None] * start_weekday(year, month)
    calendar_days.extend(range(1, days_in_month(year, month) + 1))
    return calendar_days


def calendar_weeks(year: int, month: int) -> list[list[GridCell]]:
    """Split the month's cells into rows of seven for rendering."""
    calendar_days = generate_calendar_days(year, month)
    return [calendar_days[i : i + 7] for i in range(0, len(calendar_days), 7)]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    # Anchor on the 1st so month lengths never push us into the following month
    shifted = pendulum.date(year, month, 1).add(months=delta)
    return (shifted.year, shifted.month)


def is_today(
    day: Optional[int],
    year: int,
    month: int,
    today: Optional[pendulum.Date] = None,
) -> bool:
    if day is None:
        return False
    if today is None:
        today = today_local()
    return today.day == day and today.month == month and today.year == year
