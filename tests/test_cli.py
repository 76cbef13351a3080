# SPDX-License-Identifier: MIT

import json

import pytest
from typer.testing import CliRunner

from daybook.repository.calendar_state import CALENDAR_STATE_REPO
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.repository.event import EVENT_REPO
from daybook.terminal.app import app
from daybook.view import state as view_state

runner = CliRunner()


def invoke(*args: str):
    return runner.invoke(app, list(args))


def _add_standup():
    assert invoke("goto", "2024-03").exit_code == 0
    assert invoke("select", "5").exit_code == 0
    return invoke("event", "add", "Standup", "--start", "9:00", "--end", "9:30")


def test_goto_and_navigate():
    result = invoke("goto", "2024-02")
    assert result.exit_code == 0
    assert "February 2024" in result.output

    result = invoke("next")
    assert result.exit_code == 0
    assert "March 2024" in result.output

    result = invoke("prev", "--months", "2")
    assert result.exit_code == 0
    assert "January 2024" in result.output
    state = CALENDAR_STATE_REPO.get_state()
    assert (state["year"], state["month"]) == (2024, 1)


def test_goto_rejects_bad_month():
    result = invoke("goto", "2024-13")

    assert result.exit_code == 2


def test_add_to_selected_day():
    result = _add_standup()

    assert result.exit_code == 0, result.output
    assert "Event added successfully!" in result.output
    events = EVENT_REPO.get_all_events()
    assert [event["day"] for event in events] == ["5 March 2024"]
    assert events[0]["start_time"] == "09:00"
    assert CALENDAR_STATE_REPO.get_state()["selected_day"] is None


def test_add_without_selection_is_rejected():
    invoke("goto", "2024-03")

    result = invoke("event", "add", "Standup", "--start", "9:00", "--end", "9:30")

    assert result.exit_code == 1
    assert "No day selected" in result.output
    assert EVENT_REPO.get_all_events() == []


def test_add_with_bad_time_range_is_rejected():
    invoke("goto", "2024-03")

    result = invoke(
        "event", "add", "Standup", "--start", "10:00", "--end", "09:00", "--day", "5"
    )

    assert result.exit_code == 1
    assert "Invalid time range" in result.output
    assert EVENT_REPO.get_all_events() == []


def test_add_uses_configured_default_type():
    CONFIGURATION_REPO.update_config(default_event_type="personal")

    assert _add_standup().exit_code == 0

    assert EVENT_REPO.get_all_events()[0]["type"] == "personal"


def test_show_counts_events():
    _add_standup()

    result = invoke("show", "--cell-width", "8")

    assert result.exit_code == 0
    assert "March 2024" in result.output
    assert "1 event" in result.output


def test_day_edit_and_delete():
    _add_standup()

    result = invoke("day", "5")
    assert result.exit_code == 0
    assert "Standup" in result.output

    result = invoke("event", "edit", "1", "--name", "Retro", "--end", "10:00")
    assert result.exit_code == 0, result.output
    assert "Event updated" in result.output
    event = EVENT_REPO.get_all_events()[0]
    assert (event["name"], event["end_time"]) == ("Retro", "10:00")
    assert CALENDAR_STATE_REPO.get_state()["editing_id"] is None

    result = invoke("event", "delete", "1", "--yes")
    assert result.exit_code == 0
    assert "Event deleted" in result.output
    assert EVENT_REPO.get_all_events() == []


def test_unknown_short_id():
    result = invoke("event", "delete", "7", "--yes")

    assert result.exit_code == 2


def test_search_within_open_day():
    _add_standup()
    invoke("event", "add", "Lunch", "--start", "12:00", "--end", "13:00", "--day", "5")
    invoke("event", "add", "Standup", "--start", "9:00", "--end", "9:30", "--day", "6")
    invoke("day", "5")

    result = invoke("event", "search", "STAND")

    assert result.exit_code == 0
    assert "Standup" in result.output
    assert "Lunch" not in result.output


def test_search_without_open_day():
    invoke("goto", "2024-03")

    result = invoke("event", "search", "anything")

    assert result.exit_code == 2


def test_export_displayed_month(tmp_path):
    _add_standup()

    result = invoke("event", "export", "--output", str(tmp_path / "out"))

    assert result.exit_code == 0, result.output
    exported = json.loads((tmp_path / "out" / "events_2024-3.json").read_text())
    assert [event["name"] for event in exported] == ["Standup"]


def test_config_set_rejects_unknown_type():
    result = invoke("config", "set", "--default-event-type", "holiday")

    assert result.exit_code == 2


def test_bracketed_names_are_shown_literally():
    view_state.set_show_header(True)
    invoke("goto", "2024-03")

    result = invoke(
        "event", "add", "Fix [/b] [red]", "--start", "9:00", "--end", "9:30", "--day", "5"
    )
    assert result.exit_code == 0, result.output
    assert "Fix [/b] [red]" in result.output

    result = invoke("event", "show", "1")
    assert result.exit_code == 0, result.output
    assert "Fix [/b] [red]" in result.output

    result = invoke("day", "5")
    assert result.exit_code == 0, result.output
    assert "Fix [/b] [red]" in result.output

    result = invoke("event", "search", "[/b]")
    assert result.exit_code == 0, result.output
    assert "search '[/b]' on 5 March 2024" in result.output
    assert "Fix [/b] [red]" in result.output


@pytest.mark.parametrize("text", ["- name: [unclosed\n", "name: not a list\n"])
def test_unreadable_events_file_is_reported(isolated_paths, text):
    (isolated_paths / "events.yaml").write_text(text)

    result = invoke("show", "--cell-width", "8")
    assert result.exit_code == 1
    assert "Events file unreadable" in result.output

    result = invoke("event", "export", "--output", str(isolated_paths / "out"))
    assert result.exit_code == 1
    assert "Events file unreadable" in result.output
