# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from daybook.model.calendar_state import CalendarState
from daybook.model.entity_id import EntityId
from daybook.service.grid import days_in_month, shift_month
from daybook.time import today_local


def _close_panels(state: CalendarState) -> None:
    state["selected_day"] = None
    state["viewing_day"] = None
    state["editing_id"] = None


def navigate(state: CalendarState, delta: int) -> None:
    state["year"], state["month"] = shift_month(state["year"], state["month"], delta)
    _close_panels(state)


def go_to_month(state: CalendarState, year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    state["year"] = year
    state["month"] = month
    _close_panels(state)


def go_to_today(state: CalendarState, today: Optional[pendulum.Date] = None) -> None:
    if today is None:
        today = today_local()
    go_to_month(state, today.year, today.month)


def check_day(state: CalendarState, day: int) -> int:
    last_day = days_in_month(state["year"], state["month"])
    if not 1 <= day <= last_day:
        raise ValueError(f"day must be between 1 and {last_day}, got {day}")
    return day


def select_day(state: CalendarState, day: int) -> None:
    state["selected_day"] = check_day(state, day)


def view_day(state: CalendarState, day: int) -> None:
    state["viewing_day"] = check_day(state, day)


def close_day(state: CalendarState) -> None:
    _close_panels(state)


def begin_edit(state: CalendarState, event_id: EntityId) -> None:
    state["editing_id"] = event_id


def end_edit(state: CalendarState) -> None:
    state["editing_id"] = None
