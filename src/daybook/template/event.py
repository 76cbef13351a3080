# SPDX-License-Identifier: MIT

from daybook.model.event import Event, EventForm
from daybook.time import now_utc


def get_event_template() -> Event:
    now = now_utc()
    return {
        "id": None,
        "name": "",
        "start_time": "",
        "end_time": "",
        "description": "",
        "day": "",
        "date": None,
        "type": "others",
        "created": now,
        "updated": now,
    }


def get_event_form_template() -> EventForm:
    return {
        "name": "",
        "start_time": "",
        "end_time": "",
        "description": "",
        "type": "others",
    }
