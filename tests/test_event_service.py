# SPDX-License-Identifier: MIT

import json

import pendulum
import pytest

from daybook.repository.event import EventRepository
from daybook.repository.storage import MemoryKeyValueStore
from daybook.service.event import (
    EventValidationError,
    add_event,
    count_events_by_day,
    delete_event,
    list_events_for_day,
    search_events,
    update_event,
)


def test_add_builds_day_from_selection(repository, make_state, make_form):
    state = make_state(2024, 3, selected_day=5)

    event = add_event(make_form(name="  Standup  "), state, repository)

    assert event["name"] == "Standup"
    assert event["day"] == "5 March 2024"
    assert event["date"] == "2024-03-05"
    assert event["id"]
    assert state["selected_day"] is None
    assert repository.is_dirty is False


def test_add_persists_immediately(store, make_state, make_form):
    add_event(make_form(), make_state(), EventRepository(store))

    assert [event["name"] for event in EventRepository(store).get_all_events()] == [
        "Standup"
    ]


@pytest.mark.parametrize(
    "form_overrides,title",
    [
        ({"name": "   "}, "Missing title"),
        ({"start_time": "10:00", "end_time": "09:00"}, "Invalid time range"),
        ({"start_time": "10:00", "end_time": "10:00"}, "Invalid time range"),
        ({"start_time": "", "end_time": "10:00"}, "Invalid time"),
        ({"type": "holiday"}, "Invalid type"),
    ],
)
def test_add_rejections_write_nothing(
    store, make_state, make_form, form_overrides, title
):
    repository = EventRepository(store)
    state = make_state()

    with pytest.raises(EventValidationError) as error:
        add_event(make_form(**form_overrides), state, repository)

    assert error.value.title == title
    assert repository.get_all_events() == []
    assert store.get("events") is None
    assert state["selected_day"] == 5


def test_add_without_selected_day(repository, make_state, make_form):
    with pytest.raises(EventValidationError) as error:
        add_event(make_form(), make_state(selected_day=None), repository)

    assert error.value.title == "No day selected"
    assert repository.get_all_events() == []


def test_duplicate_name_on_same_day_is_rejected(repository, make_state, make_form):
    add_event(make_form(name="Standup"), make_state(), repository)

    with pytest.raises(EventValidationError) as error:
        add_event(make_form(name=" standup "), make_state(), repository)

    assert error.value.title == "Duplicate event"
    assert len(repository.get_all_events()) == 1


def test_same_name_on_another_day_is_allowed(repository, make_state, make_form):
    add_event(make_form(), make_state(selected_day=5), repository)
    add_event(make_form(), make_state(selected_day=6), repository)

    assert len(repository.get_all_events()) == 2


def test_list_for_day_matches_all_date_components(repository, make_state, make_form):
    add_event(make_form(name="a"), make_state(2024, 3, 5), repository)
    add_event(make_form(name="b"), make_state(2024, 4, 5), repository)
    add_event(make_form(name="c"), make_state(2025, 3, 5), repository)
    add_event(make_form(name="d"), make_state(2024, 3, 5), repository)

    day_events = list_events_for_day(repository.get_all_events(), 5, 3, 2024)

    assert [event["name"] for event in day_events] == ["a", "d"]


def test_add_then_delete_restores_day(repository, make_state, make_form):
    add_event(make_form(name="keep"), make_state(), repository)
    before = list_events_for_day(repository.get_all_events(), 5, 3, 2024)

    added = add_event(make_form(name="temporary"), make_state(), repository)
    assert delete_event(added["id"], repository)

    after = list_events_for_day(repository.get_all_events(), 5, 3, 2024)
    assert len(after) == len(before)
    assert all(event["id"] != added["id"] for event in after)


def test_delete_unknown_id(repository):
    assert delete_event("missing", repository) is False


def test_update_changes_only_the_target(repository, make_state, make_form):
    first = add_event(make_form(name="first"), make_state(), repository)
    second = add_event(make_form(name="second"), make_state(), repository)
    untouched = repository.get_event(second["id"])

    updated = update_event(
        first["id"],
        make_form(name="first, renamed", start_time="13:00", end_time="14:00"),
        repository=repository,
    )

    assert updated is not None
    assert updated["name"] == "first, renamed"
    assert updated["start_time"] == "13:00"
    assert updated["day"] == "5 March 2024"
    assert updated["created"] == first["created"]
    assert repository.get_event(second["id"]) == untouched


def test_update_can_move_to_another_day(repository, make_state, make_form):
    event = add_event(make_form(), make_state(), repository)

    updated = update_event(
        event["id"], make_form(), pendulum.date(2024, 4, 1), repository
    )

    assert updated is not None
    assert updated["day"] == "1 April 2024"
    assert list_events_for_day(repository.get_all_events(), 5, 3, 2024) == []


def test_update_of_missing_event_is_a_no_op(repository, make_state, make_form):
    add_event(make_form(), make_state(), repository)
    before = repository.get_all_events()

    assert update_event("missing", make_form(name="ghost"), repository=repository) is None
    assert repository.get_all_events() == before


def test_update_rechecks_duplicates(repository, make_state, make_form):
    add_event(make_form(name="first"), make_state(), repository)
    second = add_event(make_form(name="second"), make_state(), repository)

    with pytest.raises(EventValidationError):
        update_event(second["id"], make_form(name="FIRST"), repository=repository)

    # Keeping its own name is not a duplicate
    assert update_event(second["id"], make_form(name="second"), repository=repository)


def test_update_validates_times(repository, make_state, make_form):
    event = add_event(make_form(), make_state(), repository)

    with pytest.raises(EventValidationError):
        update_event(
            event["id"],
            make_form(start_time="18:00", end_time="08:00"),
            repository=repository,
        )
    assert repository.get_event(event["id"])["start_time"] == "09:00"


def test_search_is_case_insensitive_substring(repository, make_state, make_form):
    for name in ("Team Standup", "Lunch", "standup notes"):
        add_event(make_form(name=name), make_state(), repository)
    day_events = list_events_for_day(repository.get_all_events(), 5, 3, 2024)

    assert [event["name"] for event in search_events(day_events, "STANDUP")] == [
        "Team Standup",
        "standup notes",
    ]
    assert search_events(day_events, "") == day_events
    assert search_events(day_events, "dinner") == []


def test_count_events_by_day(repository, make_state, make_form):
    add_event(make_form(name="a"), make_state(selected_day=1), repository)
    add_event(make_form(name="b"), make_state(selected_day=1), repository)
    add_event(make_form(name="c"), make_state(selected_day=20), repository)
    add_event(make_form(name="d"), make_state(month=4, selected_day=1), repository)

    assert count_events_by_day(repository.get_all_events(), 2024, 3) == {1: 2, 20: 1}


def test_duplicate_check_compares_dates_not_labels(make_state, make_form):
    stored = [
        {
            "id": "legacy-standup",
            "name": "Standup",
            "start_time": "09:00",
            "end_time": "09:15",
            "description": "",
            "day": " 5 March 2024",
            "date": "2024-03-05",
            "type": "work",
        }
    ]
    repository = EventRepository(MemoryKeyValueStore({"events": json.dumps(stored)}))

    with pytest.raises(EventValidationError) as error:
        add_event(make_form(name="standup"), make_state(2024, 3, 5), repository)

    assert error.value.title == "Duplicate event"
    assert len(repository.get_all_events()) == 1
