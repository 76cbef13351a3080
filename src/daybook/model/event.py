# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, get_args

import pendulum

from daybook.model.entity_id import EntityId

EventType = Literal["work", "personal", "others"]

EVENT_TYPES: tuple[str, ...] = get_args(EventType)


class Event(TypedDict):
    id: Optional[EntityId]
    name: str
    start_time: str
    end_time: str
    description: str
    day: str
    date: Optional[str]
    type: EventType
    created: pendulum.DateTime
    updated: pendulum.DateTime


class EventForm(TypedDict):
    """Editable fields of an event, as entered by the user."""

    name: str
    start_time: str
    end_time: str
    description: str
    type: str
