# SPDX-License-Identifier: MIT

from daybook.model.event import EVENT_TYPES


def complete_event_type(incomplete: str) -> list[str]:
    """Return list of event types for shell completion."""
    return [event_type for event_type in EVENT_TYPES if event_type.startswith(incomplete)]
