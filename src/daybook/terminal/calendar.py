# SPDX-License-Identifier: MIT

from typing import Annotated

import pendulum
import typer

from daybook.repository.calendar_state import CALENDAR_STATE_REPO
from daybook.repository.event import EVENT_REPO
from daybook.repository.id_map import ID_MAP_REPO
from daybook.service import calendar as calendar_service
from daybook.service.event import list_events_for_day
from daybook.terminal.parse import parse_month
from daybook.time import date_to_day_label
from daybook.view.view.views.calendar import calendar_month_view
from daybook.view.view.views.event import day_events_view


def _day_argument_error(error: ValueError) -> typer.BadParameter:
    return typer.BadParameter(str(error), param_hint="DAY")


def show(
    names: Annotated[
        bool,
        typer.Option("--names", "-n", help="List event names inside the day cells"),
    ] = False,
    cell_width: Annotated[
        int, typer.Option("--cell-width", "-w", min=6, help="Width of each day cell")
    ] = 12,
) -> None:
    """Show the displayed month with the number of events on each day."""
    state = CALENDAR_STATE_REPO.get_state()
    events = EVENT_REPO.get_all_events()

    calendar_month_view(state, events, cell_width=cell_width, show_names=names)

    if state["viewing_day"] is not None:
        show_day_panel(state["year"], state["month"], state["viewing_day"])


def show_day_panel(year: int, month: int, day: int) -> None:
    """List a day's events, handing out the short ids that edit/delete accept."""
    day_events = list_events_for_day(EVENT_REPO.get_all_events(), day, month, year)
    ID_MAP_REPO.clear_ids()
    day_events_view(date_to_day_label(pendulum.date(year, month, day)), day_events)


def next_month(
    months: Annotated[int, typer.Option("--months", "-m", min=1)] = 1,
) -> None:
    """Move forward one (or more) months."""
    state = CALENDAR_STATE_REPO.get_state()
    calendar_service.navigate(state, months)
    CALENDAR_STATE_REPO.save_state(state)
    show()


def prev_month(
    months: Annotated[int, typer.Option("--months", "-m", min=1)] = 1,
) -> None:
    """Move back one (or more) months."""
    state = CALENDAR_STATE_REPO.get_state()
    calendar_service.navigate(state, -months)
    CALENDAR_STATE_REPO.save_state(state)
    show()


def today() -> None:
    """Jump to the current month."""
    state = CALENDAR_STATE_REPO.get_state()
    calendar_service.go_to_today(state)
    CALENDAR_STATE_REPO.save_state(state)
    show()


def goto(
    month: Annotated[str, typer.Argument(metavar="YYYY-MM", help="month to show")],
) -> None:
    """Jump to a given month."""
    year, month_number = parse_month(month)
    state = CALENDAR_STATE_REPO.get_state()
    calendar_service.go_to_month(state, year, month_number)
    CALENDAR_STATE_REPO.save_state(state)
    show()


def select(day: Annotated[int, typer.Argument(help="day of the displayed month")]) -> None:
    """Select a day of the displayed month; `event add` adds to it."""
    state = CALENDAR_STATE_REPO.get_state()
    try:
        calendar_service.select_day(state, day)
    except ValueError as e:
        raise _day_argument_error(e)
    CALENDAR_STATE_REPO.save_state(state)

    label = date_to_day_label(pendulum.date(state["year"], state["month"], day))
    typer.echo(f"Selected {label}. Add an event with `daybook event add`.")


def day(day: Annotated[int, typer.Argument(help="day of the displayed month")]) -> None:
    """Open a day's panel and list its events."""
    state = CALENDAR_STATE_REPO.get_state()
    try:
        calendar_service.view_day(state, day)
    except ValueError as e:
        raise _day_argument_error(e)
    CALENDAR_STATE_REPO.save_state(state)

    show_day_panel(state["year"], state["month"], day)


def close() -> None:
    """Close the day panel and clear the selected day."""
    state = CALENDAR_STATE_REPO.get_state()
    calendar_service.close_day(state)
    CALENDAR_STATE_REPO.save_state(state)
