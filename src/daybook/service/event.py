# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from daybook.model.calendar_state import CalendarState
from daybook.model.entity_id import EntityId
from daybook.model.event import EVENT_TYPES, Event, EventForm, EventType
from daybook.repository.event import EVENT_REPO, EventRepository
from daybook.service.grid import days_in_month
from daybook.template.event import get_event_template
from daybook.time import (
    clock_time_to_str,
    date_from_day_label,
    date_from_iso_str,
    date_to_day_label,
    date_to_iso_str,
    now_utc,
    parse_clock_time,
)

logger = logging.getLogger(__name__)


class EventValidationError(ValueError):
    """An add or edit was rejected before anything was written."""

    def __init__(self, title: str, description: str) -> None:
        super().__init__(f"{title}: {description}")
        self.title = title
        self.description = description


def event_date(event: Event) -> Optional[pendulum.Date]:
    """
    Resolve the calendar date of an event.

    The ISO ``date`` field wins; records that only carry a day label fall back
    to parsing it. None means the record belongs to no day.
    """
    if event["date"]:
        parsed_date = date_from_iso_str(event["date"])
        if parsed_date is not None:
            return parsed_date
    return date_from_day_label(event["day"])


def list_events_for_day(
    events: list[Event], day: int, month: int, year: int
) -> list[Event]:
    day_events = []
    for event in events:
        date = event_date(event)
        if date is None:
            continue
        if date.day == day and date.month == month and date.year == year:
            day_events.append(event)
    return day_events


def list_events_for_month(events: list[Event], year: int, month: int) -> list[Event]:
    month_events = []
    for event in events:
        date = event_date(event)
        if date is not None and date.year == year and date.month == month:
            month_events.append(event)
    return month_events


def count_events_by_day(events: list[Event], year: int, month: int) -> dict[int, int]:
    counts: dict[int, int] = {}
    for event in list_events_for_month(events, year, month):
        day = event_date(event).day  # type: ignore[union-attr]
        counts[day] = counts.get(day, 0) + 1
    return counts


def search_events(events: list[Event], term: str) -> list[Event]:
    """Case-insensitive substring match on event names, order preserved."""
    term_lower = term.strip().lower()
    if not term_lower:
        return list(events)
    return [event for event in events if term_lower in event["name"].lower()]


def _duplicate_key(
    name: str, date: Optional[pendulum.Date]
) -> tuple[str, Optional[pendulum.Date]]:
    return (name.strip().lower(), date)


def _find_duplicate(
    events: list[Event],
    name: str,
    date: pendulum.Date,
    exclude_id: Optional[EntityId] = None,
) -> Optional[Event]:
    key = _duplicate_key(name, date)
    for event in events:
        if event["id"] == exclude_id:
            continue
        if _duplicate_key(event["name"], event_date(event)) == key:
            return event
    return None


def validate_event_form(form: EventForm) -> EventForm:
    """
    Check the user-entered fields and return them normalised.

    Raises:
        EventValidationError: if the title is blank, the times are not a
            valid same-day range, or the type is unknown
    """
    name = form["name"].strip()
    if not name:
        raise EventValidationError("Missing title", "Please enter a title for the event.")

    start = parse_clock_time(form["start_time"])
    end = parse_clock_time(form["end_time"])
    if start is None or end is None:
        raise EventValidationError(
            "Invalid time", "Start and end times must be given as HH:MM."
        )
    if start >= end:
        raise EventValidationError(
            "Invalid time range", "The end time must be after the start time."
        )

    if form["type"] not in EVENT_TYPES:
        raise EventValidationError(
            "Invalid type", f"Type must be one of {', '.join(EVENT_TYPES)}."
        )

    return {
        "name": name,
        "start_time": clock_time_to_str(start),
        "end_time": clock_time_to_str(end),
        "description": form["description"] or "",
        "type": form["type"],
    }


def _apply_form(event: Event, form: EventForm, date: pendulum.Date) -> None:
    event["name"] = form["name"]
    event["start_time"] = form["start_time"]
    event["end_time"] = form["end_time"]
    event["description"] = form["description"]
    event["type"] = form["type"]  # type: ignore[typeddict-item]
    event["date"] = date_to_iso_str(date)
    event["day"] = date_to_day_label(date)


def add_event(
    form: EventForm,
    state: CalendarState,
    repository: EventRepository = EVENT_REPO,
) -> Event:
    """
    Add an event on the selected day of the displayed month.

    On success the event is persisted and the selection is cleared in
    ``state``. On failure nothing is written and ``state`` is untouched.

    Raises:
        EventValidationError: see validate_event_form, plus a missing day
            selection or a (name, day) pair that already exists
        StaleDataError: storage changed underneath the write
    """
    selected_day = state["selected_day"]
    if selected_day is None:
        raise EventValidationError(
            "No day selected", "Select a day before adding an event."
        )
    if not 1 <= selected_day <= days_in_month(state["year"], state["month"]):
        raise EventValidationError(
            "Invalid day",
            f"Day {selected_day} does not exist in {state['year']}-{state['month']:02d}.",
        )

    cleaned_form = validate_event_form(form)
    date = pendulum.date(state["year"], state["month"], selected_day)

    repository.reload_if_changed()
    if _find_duplicate(repository.events, cleaned_form["name"], date):
        raise EventValidationError(
            "Duplicate event",
            f"'{cleaned_form['name']}' already exists on {date_to_day_label(date)}.",
        )

    event = get_event_template()
    _apply_form(event, cleaned_form, date)

    id = repository.save_new_event(event)
    repository.flush()
    logger.debug("added event %s on %s", id, event["date"])

    state["selected_day"] = None

    return repository.get_event(id)


def update_event(
    event_id: EntityId,
    form: EventForm,
    date: Optional[pendulum.Date] = None,
    repository: EventRepository = EVENT_REPO,
) -> Optional[Event]:
    """
    Replace the editable fields of an existing event.

    ``date`` moves the event to another day; by default it stays where it is.
    The duplicate check runs again, ignoring the event being edited.

    Returns:
        The updated event, or None if no event has that id
    """
    repository.reload_if_changed()
    existing_event = repository.find_event(event_id)
    if existing_event is None:
        logger.warning("event %s no longer exists, nothing updated", event_id)
        return None

    cleaned_form = validate_event_form(form)

    if date is None:
        date = event_date(existing_event)
    if date is None:
        raise EventValidationError(
            "Invalid day",
            f"'{existing_event['day']}' is not a date, pick a new day for this event.",
        )

    duplicate = _find_duplicate(
        repository.events,
        cleaned_form["name"],
        date,
        exclude_id=event_id,
    )
    if duplicate is not None:
        raise EventValidationError(
            "Duplicate event",
            f"'{cleaned_form['name']}' already exists on {date_to_day_label(date)}.",
        )

    edited_event = existing_event
    _apply_form(edited_event, cleaned_form, date)
    edited_event["updated"] = now_utc()

    repository.replace_event(event_id, edited_event)
    repository.flush()
    logger.debug("updated event %s", event_id)

    return repository.get_event(event_id)


def delete_event(event_id: EntityId, repository: EventRepository = EVENT_REPO) -> bool:
    repository.reload_if_changed()
    deleted = repository.delete_event(event_id)
    if deleted:
        repository.flush()
        logger.debug("deleted event %s", event_id)
    return deleted


def event_to_form(event: Event) -> EventForm:
    return {
        "name": event["name"],
        "start_time": event["start_time"],
        "end_time": event["end_time"],
        "description": event["description"],
        "type": event["type"],
    }


def default_event_type(value: Optional[str]) -> EventType:
    if value in EVENT_TYPES:
        return value  # type: ignore[return-value]
    return "others"
