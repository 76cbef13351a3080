# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daybook.color import get_event_type_color
from daybook.model.entity_id import EntityId
from daybook.model.event import Event
from daybook.repository.id_map import ID_MAP_REPO
from daybook.time import datetime_to_display_local_datetime_str_optional
from daybook.view.view.util import event_type_text, time_range
from daybook.view.view.views.header import header


def events_view(
    report_name: str,
    events: list[Event],
    columns: list[str] = ["id", "name", "time", "type", "description"],
    use_color: bool = True,
    no_wrap: bool = False,
) -> None:
    header(report_name)

    console = Console()
    if len(events) == 0:
        console.print("\n  [dim]No events for this day.[/dim]\n")
        return

    events_table = Table(box=box.SIMPLE)
    for column in columns:
        if no_wrap and column != "id":
            events_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            events_table.add_column(column)

    for event in events:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(
                    ID_MAP_REPO.associate_id("events", cast(EntityId, event["id"]))
                )
            elif column == "time":
                column_value = time_range(event)
            elif column == "type":
                column_value = event["type"]
            elif event.get(column) is not None:
                column_value = str(event[column])  # type: ignore[literal-required]

            column_value = escape(column_value)
            if use_color and column in ("name", "type"):
                color = get_event_type_color(event["type"])
                column_value = f"[{color}]{column_value}[/{color}]"

            row.append(column_value)
        events_table.add_row(*row)

    console.print(events_table)


def day_events_view(day_label: str, events: list[Event], no_wrap: bool = False) -> None:
    """Show the events of one day, the panel that edit and delete ids refer to."""
    events_view(f"events for {day_label}", events, no_wrap=no_wrap)


def search_results_view(
    day_label: str, term: str, events: list[Event], no_wrap: bool = False
) -> None:
    events_view(f"search '{term}' on {day_label}", events, no_wrap=no_wrap)


def single_event_view(event: Event) -> None:
    header("event")

    event_table = Table(box=box.SIMPLE)
    event_table.add_column("property")
    event_table.add_column("value")

    event_table.add_row(
        "id",
        str(ID_MAP_REPO.associate_id("events", cast(EntityId, event["id"]))),
    )
    event_table.add_row("name", escape(event["name"]))
    event_table.add_row("day", escape(event["day"]))
    event_table.add_row("time", time_range(event))
    event_table.add_row("type", event_type_text(event))
    event_table.add_row("description", escape(event["description"]))
    event_table.add_row(
        "created", datetime_to_display_local_datetime_str_optional(event["created"])
    )
    event_table.add_row(
        "updated", datetime_to_display_local_datetime_str_optional(event["updated"])
    )

    console = Console()
    console.print(event_table)
