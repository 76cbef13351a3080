# SPDX-License-Identifier: MIT

from daybook.model.event import EventType

# Display colors for the event categories
EVENT_TYPE_COLORS: dict[EventType, str] = {
    "work": "dodger_blue1",
    "personal": "green3",
    "others": "orchid",
}

DEFAULT_EVENT_COLOR = "white"

# Month grid cell styles
TODAY_STYLE = "bold white on blue"
SELECTED_STYLE = "bold white on green4"
VIEWING_STYLE = "bold black on bright_cyan"
PADDING_STYLE = "grey50"

SUCCESS_COLOR = "green"
ERROR_COLOR = "red"


def get_event_type_color(event_type: str) -> str:
    return EVENT_TYPE_COLORS.get(event_type, DEFAULT_EVENT_COLOR)  # type: ignore[call-overload]
