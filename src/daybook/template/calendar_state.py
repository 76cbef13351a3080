# SPDX-License-Identifier: MIT

from daybook.model.calendar_state import CalendarState
from daybook.time import today_local


def get_calendar_state_template() -> CalendarState:
    today = today_local()
    return {
        "year": today.year,
        "month": today.month,
        "selected_day": None,
        "viewing_day": None,
        "editing_id": None,
    }
