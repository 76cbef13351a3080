# SPDX-License-Identifier: MIT

"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path
from typing import Optional

import pytest

from daybook import configuration
from daybook.model.calendar_state import CalendarState
from daybook.model.event import EventForm
from daybook.repository.calendar_state import CALENDAR_STATE_REPO
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.repository.event import EVENT_REPO, EventRepository
from daybook.repository.id_map import ID_MAP_REPO
from daybook.repository.storage import MemoryKeyValueStore
from daybook.view import state as view_state


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data files at a temporary directory and reset the repositories."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_dir)
    monkeypatch.setattr(
        configuration, "DATA_CALENDAR_STATE_PATH", data_dir / "calendar_state.yaml"
    )
    monkeypatch.setattr(configuration, "DATA_ID_MAP_PATH", data_dir / "id_map.yaml")

    for repository, attributes in (
        (EVENT_REPO, {"_store": None, "_events": None, "_loaded_text": None}),
        (CALENDAR_STATE_REPO, {"_state": None}),
        (ID_MAP_REPO, {"_id_map": None}),
        (CONFIGURATION_REPO, {"_config": None}),
    ):
        for name, value in attributes.items():
            monkeypatch.setattr(repository, name, value)
        monkeypatch.setattr(repository, "is_dirty", False)

    view_state.set_show_header(False)
    return data_dir


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def repository(store: MemoryKeyValueStore) -> EventRepository:
    return EventRepository(store)


@pytest.fixture
def make_state():
    def _make_state(
        year: int = 2024,
        month: int = 3,
        selected_day: Optional[int] = 5,
    ) -> CalendarState:
        return {
            "year": year,
            "month": month,
            "selected_day": selected_day,
            "viewing_day": None,
            "editing_id": None,
        }

    return _make_state


@pytest.fixture
def make_form():
    def _make_form(
        name: str = "Standup",
        start_time: str = "09:00",
        end_time: str = "09:15",
        description: str = "",
        type: str = "work",
    ) -> EventForm:
        return {
            "name": name,
            "start_time": start_time,
            "end_time": end_time,
            "description": description,
            "type": type,
        }

    return _make_form
