# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from daybook.model.entity_id import EntityId

EntityType = Literal["events"]


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]


class IdMap(TypedDict):
    """
    Short integer ids handed out when a day is listed.

    Synthetic id : real entity id.

    Example:

    Event with an id of "9f1c...".
    Synthetic id for that event is 2.

    real_event_id = id_map["events"]["synthetic_to_real"][2]  # returns "9f1c..."
    """

    events: IdMapMapping
