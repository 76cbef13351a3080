# SPDX-License-Identifier: MIT

from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, Iterator, Optional

import pendulum
import typer
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daybook.model.entity_id import EntityId
from daybook.model.event import EventForm
from daybook.repository.calendar_state import CALENDAR_STATE_REPO
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.repository.event import EVENT_REPO
from daybook.repository.id_map import ID_MAP_REPO
from daybook.repository.storage import StaleDataError
from daybook.service import calendar as calendar_service
from daybook.service.event import (
    EventValidationError,
    add_event,
    default_event_type,
    delete_event,
    event_date,
    event_to_form,
    list_events_for_day,
    search_events,
    update_event,
)
from daybook.service.export import write_export
from daybook.template.event import get_event_form_template
from daybook.terminal.completion import complete_event_type
from daybook.terminal.custom_typer import AliasedTyperGroup
from daybook.terminal.parse import open_editor_for_text, parse_date
from daybook.time import date_to_day_label, date_to_iso_str, month_label
from daybook.view.notify import notify_error, notify_success
from daybook.view.view.views.event import search_results_view, single_event_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@contextmanager
def _report_errors() -> Iterator[None]:
    """Turn rejected operations into an error toast and exit status 1."""
    try:
        yield
    except EventValidationError as e:
        notify_error(e.title, e.description)
        raise typer.Exit(1)
    except StaleDataError as e:
        notify_error("Events changed", f"{e}. Nothing was saved, please try again.")
        raise typer.Exit(1)


def _resolve_id(id: int) -> EntityId:
    real_id = ID_MAP_REPO.get_real_id("events", id)
    if real_id is None:
        raise typer.BadParameter(
            f"No event with id {id}; open a day first with `daybook day DAY`",
            param_hint="ID",
        )
    return real_id


@app.command("add, a", no_args_is_help=True)
def add(
    name: Annotated[str, typer.Argument(help="event title")],
    start: Annotated[str, typer.Option("--start", "-s", help="start time, HH:mm")],
    end: Annotated[str, typer.Option("--end", "-e", help="end time, HH:mm")],
    description: Annotated[str, typer.Option("--description", "-D")] = "",
    event_type: Annotated[
        Optional[str],
        typer.Option(
            "--type",
            "-t",
            help="work, personal or others (default from config)",
            autocompletion=complete_event_type,
        ),
    ] = None,
    day: Annotated[
        Optional[int],
        typer.Option("--day", "-d", help="select this day of the displayed month first"),
    ] = None,
) -> None:
    """Add an event to the selected day."""
    config = CONFIGURATION_REPO.get_config()
    state = CALENDAR_STATE_REPO.get_state()

    if day is not None:
        try:
            calendar_service.select_day(state, day)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--day")

    form = get_event_form_template()
    form["name"] = name
    form["start_time"] = start
    form["end_time"] = end
    form["description"] = description
    form["type"] = (
        event_type.lower()
        if event_type is not None
        else default_event_type(config["default_event_type"])
    )

    with _report_errors():
        new_event = add_event(form, state)

    CALENDAR_STATE_REPO.save_state(state)

    notify_success("Event added successfully!", f"'{new_event['name']}' on {new_event['day']}")
    single_event_view(new_event)


def _edit_in_editor(form: EventForm, date: pendulum.Date) -> tuple[EventForm, pendulum.Date]:
    editable: dict[str, Any] = dict(form)
    editable["date"] = date_to_iso_str(date)

    text = open_editor_for_text(dump(editable, Dumper=Dumper, sort_keys=False))
    if text is None:
        typer.echo("Edit cancelled (no text provided)")
        raise typer.Exit(0)

    try:
        edited = load(text, Loader=Loader)
    except YAMLError as e:
        notify_error("Invalid edit", f"Could not read the edited event: {e}")
        raise typer.Exit(1)
    if not isinstance(edited, dict):
        notify_error("Invalid edit", "The edited event must be a mapping of fields.")
        raise typer.Exit(1)

    edited_form = get_event_form_template()
    for key in edited_form:
        value = edited.get(key, form[key])  # type: ignore[literal-required]
        edited_form[key] = "" if value is None else str(value)  # type: ignore[literal-required]

    edited_date = parse_date(str(edited.get("date", editable["date"])))
    return edited_form, edited_date or date


@app.command("edit, ed", no_args_is_help=True)
def edit(
    id: Annotated[int, typer.Argument(help="event id from the open day panel")],
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    start: Annotated[Optional[str], typer.Option("--start", "-s")] = None,
    end: Annotated[Optional[str], typer.Option("--end", "-e")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-D")] = None,
    event_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", autocompletion=complete_event_type),
    ] = None,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--date", parser=parse_date, help="move to another day, YYYY-MM-DD"
        ),
    ] = None,
) -> None:
    """
    Edit an event. Without options the event opens in $EDITOR.
    """
    real_id = _resolve_id(id)
    event = EVENT_REPO.find_event(real_id)
    if event is None:
        notify_error("Event not found", "It may have been deleted in the meantime.")
        raise typer.Exit(1)

    state = CALENDAR_STATE_REPO.get_state()
    calendar_service.begin_edit(state, real_id)
    CALENDAR_STATE_REPO.save_state(state)

    try:
        form = event_to_form(event)
        options_given = any(
            option is not None
            for option in (name, start, end, description, event_type, date)
        )
        if options_given:
            if name is not None:
                form["name"] = name
            if start is not None:
                form["start_time"] = start
            if end is not None:
                form["end_time"] = end
            if description is not None:
                form["description"] = description
            if event_type is not None:
                form["type"] = event_type.lower()
        else:
            current_date = event_date(event) or pendulum.date(
                state["year"], state["month"], 1
            )
            form, date = _edit_in_editor(form, current_date)

        with _report_errors():
            updated_event = update_event(real_id, form, date)
    finally:
        calendar_service.end_edit(state)
        CALENDAR_STATE_REPO.save_state(state)

    if updated_event is None:
        notify_error("Event not found", "It may have been deleted in the meantime.")
        raise typer.Exit(1)

    notify_success("Event updated", f"'{updated_event['name']}' on {updated_event['day']}")
    single_event_view(updated_event)


@app.command("delete, del", no_args_is_help=True)
def delete(
    id: Annotated[int, typer.Argument(help="event id from the open day panel")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete an event."""
    real_id = _resolve_id(id)
    event = EVENT_REPO.find_event(real_id)
    if event is None:
        notify_error("Event not found", "It may have been deleted in the meantime.")
        raise typer.Exit(1)

    if not yes and not typer.confirm(f"Delete '{event['name']}' on {event['day']}?"):
        typer.echo("Operation cancelled.")
        return

    with _report_errors():
        deleted = delete_event(real_id)

    if not deleted:
        notify_error("Event not found", "It may have been deleted in the meantime.")
        raise typer.Exit(1)

    notify_success("Event deleted", f"'{event['name']}' on {event['day']}")


@app.command("show, sh", no_args_is_help=True)
def show(id: Annotated[int, typer.Argument(help="event id from the open day panel")]) -> None:
    """Show a single event."""
    event = EVENT_REPO.find_event(_resolve_id(id))
    if event is None:
        notify_error("Event not found", "It may have been deleted in the meantime.")
        raise typer.Exit(1)
    single_event_view(event)


@app.command("search, s", no_args_is_help=True)
def search(
    term: Annotated[str, typer.Argument(help="text to look for in event names")],
    day: Annotated[
        Optional[int],
        typer.Option("--day", "-d", help="day of the displayed month (default: open day)"),
    ] = None,
    no_wrap: Annotated[
        bool,
        typer.Option("--no-wrap", help="Disable text wrapping in table columns"),
    ] = False,
) -> None:
    """Search event names within one day."""
    state = CALENDAR_STATE_REPO.get_state()

    search_day = day
    if search_day is None:
        search_day = state["viewing_day"] or state["selected_day"]
    if search_day is None:
        raise typer.BadParameter(
            "No day is open; pass --day or open one with `daybook day DAY`",
            param_hint="--day",
        )
    try:
        calendar_service.check_day(state, search_day)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--day")

    day_events = list_events_for_day(
        EVENT_REPO.get_all_events(), search_day, state["month"], state["year"]
    )
    results = search_events(day_events, term)

    ID_MAP_REPO.clear_ids()
    search_results_view(
        date_to_day_label(pendulum.date(state["year"], state["month"], search_day)),
        term,
        results,
        no_wrap=no_wrap,
    )


@app.command("export, x")
def export(
    year: Annotated[
        Optional[int], typer.Option("--year", "-y", help="default: displayed year")
    ] = None,
    month: Annotated[
        Optional[int],
        typer.Option("--month", "-m", min=1, max=12, help="1-12, default: displayed month"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            file_okay=False,
            help="directory to write to (default: config export_path, else cwd)",
        ),
    ] = None,
) -> None:
    """Export a month's events to events_<year>-<month>.json."""
    config = CONFIGURATION_REPO.get_config()
    state = CALENDAR_STATE_REPO.get_state()

    export_year = year if year is not None else state["year"]
    export_month = month if month is not None else state["month"]

    directory = output
    if directory is None and config["export_path"] is not None:
        directory = Path(config["export_path"]).expanduser()
    if directory is None:
        directory = Path.cwd()

    export_path = write_export(
        EVENT_REPO.get_all_events(), export_year, export_month, directory
    )
    notify_success(
        "Export complete",
        f"{month_label(export_year, export_month)} written to {export_path}",
    )
