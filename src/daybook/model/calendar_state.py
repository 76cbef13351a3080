# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from daybook.model.entity_id import EntityId


class CalendarState(TypedDict):
    year: int
    month: int
    selected_day: Optional[int]
    viewing_day: Optional[int]
    editing_id: Optional[EntityId]
