# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from daybook.color import (
    PADDING_STYLE,
    SELECTED_STYLE,
    TODAY_STYLE,
    VIEWING_STYLE,
    get_event_type_color,
)
from daybook.model.calendar_state import CalendarState
from daybook.model.event import Event
from daybook.service.event import count_events_by_day, list_events_for_day
from daybook.service.grid import WEEKDAY_NAMES, calendar_weeks, is_today
from daybook.time import month_label, today_local
from daybook.view.view.util import events_count_label, truncate
from daybook.view.view.views.header import header


def calendar_month_view(
    state: CalendarState,
    events: list[Event],
    cell_width: int = 12,
    show_names: bool = False,
    today: Optional[pendulum.Date] = None,
) -> None:
    """
    Display the displayed month as a Sunday-first grid with per-day event counts.

    Args:
        state: Calendar state holding the displayed month and selection flags
        events: All events; only the displayed month's are counted
        cell_width: Width of each day cell in characters
        show_names: List event names under the count (max 2 per day)
        today: Overrides the local date used for highlighting
    """
    header(month_label(state["year"], state["month"]))

    console = Console()
    console.print(f"\n[bold]{month_label(state['year'], state['month'])}[/bold]\n")
    console.print(
        render_month_grid(state, events, cell_width, show_names, today=today)
    )

    legend = Text()
    legend.append("  today ", style=TODAY_STYLE)
    legend.append("  ")
    legend.append("  selected ", style=SELECTED_STYLE)
    legend.append("  ")
    legend.append("  open ", style=VIEWING_STYLE)
    console.print(legend)
    console.print()


def render_month_grid(
    state: CalendarState,
    events: list[Event],
    cell_width: int = 12,
    show_names: bool = False,
    today: Optional[pendulum.Date] = None,
) -> Table:
    """
    Render a single month as a calendar grid.

    Returns:
        A Table containing the month's calendar grid
    """
    year = state["year"]
    month = state["month"]

    if today is None:
        today = today_local()

    table = Table(box=box.SQUARE, show_header=True, padding=(0, 1), show_lines=True)
    for day_name in WEEKDAY_NAMES:
        table.add_column(day_name[:3], style="bold", width=cell_width)

    counts = count_events_by_day(events, year, month)

    for week in calendar_weeks(year, month):
        row: list[Text] = []
        for day in week:
            row.append(
                _render_cell(
                    day,
                    state,
                    events,
                    counts.get(day, 0) if day is not None else 0,
                    cell_width,
                    show_names,
                    today,
                )
            )
        # Pad the final short week so every row has seven cells
        row.extend(Text("") for _ in range(7 - len(row)))
        table.add_row(*row)

    return table


def _render_cell(
    day: Optional[int],
    state: CalendarState,
    events: list[Event],
    count: int,
    cell_width: int,
    show_names: bool,
    today: pendulum.Date,
) -> Text:
    cell_content = Text()
    if day is None:
        cell_content.append("·", style=PADDING_STYLE)
        return cell_content

    if day == state["selected_day"]:
        day_style = SELECTED_STYLE
    elif day == state["viewing_day"]:
        day_style = VIEWING_STYLE
    elif is_today(day, state["year"], state["month"], today):
        day_style = TODAY_STYLE
    else:
        day_style = "bold"
    cell_content.append(f"{day:2d}", style=day_style)
    cell_content.append("\n")

    cell_content.append(events_count_label(count), style="dim" if count == 0 else "")

    if show_names and count > 0:
        day_events = list_events_for_day(events, day, state["month"], state["year"])
        for event in day_events[:2]:
            cell_content.append("\n")
            cell_content.append(
                truncate(event["name"], cell_width),
                style=get_event_type_color(event["type"]),
            )
        if len(day_events) > 2:
            cell_content.append(f"\n+{len(day_events) - 2} more", style="dim")

    return cell_content
