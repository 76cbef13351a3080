# SPDX-License-Identifier: MIT

from rich.text import Text

from daybook.color import get_event_type_color
from daybook.model.event import Event


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."


def time_range(event: Event) -> str:
    return f"{event['start_time']}-{event['end_time']}"


def event_type_text(event: Event) -> Text:
    color = get_event_type_color(event["type"])
    return Text(f"■ {event['type']}", style=color)


def events_count_label(count: int) -> str:
    return f"{count} event" if count == 1 else f"{count} events"
