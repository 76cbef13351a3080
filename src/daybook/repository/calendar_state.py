# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daybook import configuration
from daybook.model.calendar_state import CalendarState
from daybook.template.calendar_state import get_calendar_state_template


class CalendarStateRepository:
    """Displayed month and widget flags, kept between invocations."""

    def __init__(self) -> None:
        self._state: Optional[CalendarState] = None
        self.is_dirty = False

    @property
    def state(self) -> CalendarState:
        if self._state is None:
            self.__load_data()
        if self._state is None:
            raise ValueError()
        return self._state

    def __load_data(self) -> None:
        self._state = get_calendar_state_template()
        if configuration.DATA_CALENDAR_STATE_PATH.is_file():
            stored_state = load(
                configuration.DATA_CALENDAR_STATE_PATH.read_text(), Loader=Loader
            )
            if stored_state is not None:
                self._state.update(stored_state)

    def __save_data(self, state: CalendarState) -> None:
        configuration.DATA_CALENDAR_STATE_PATH.write_text(
            dump(state, Dumper=Dumper, sort_keys=False)
        )

    def flush(self) -> bool:
        if self._state is not None and self.is_dirty:
            self.__save_data(self._state)
            self.is_dirty = False
            return True
        return False

    def get_state(self) -> CalendarState:
        return deepcopy(self.state)

    def save_state(self, state: CalendarState) -> None:
        self.is_dirty = True
        self._state = deepcopy(state)


CALENDAR_STATE_REPO = CalendarStateRepository()
