# SPDX-License-Identifier: MIT

import json
import logging
from pathlib import Path

from daybook.model.event import Event
from daybook.repository.event import EventRepository
from daybook.service.event import list_events_for_month

logger = logging.getLogger(__name__)


def export_filename(year: int, month: int) -> str:
    """File name for a month's export, with a 1-based, unpadded month."""
    return f"events_{year}-{month}.json"


def export_month(events: list[Event], year: int, month: int) -> str:
    """Serialize the events falling in the given month as indented JSON."""
    month_events = [
        EventRepository.convert_event_for_serialization(event)
        for event in list_events_for_month(events, year, month)
    ]
    return json.dumps(month_events, indent=2, ensure_ascii=False)


def write_export(events: list[Event], year: int, month: int, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    export_path = directory / export_filename(year, month)
    export_path.write_text(export_month(events, year, month) + "\n", encoding="utf-8")
    logger.debug("exported %s", export_path)
    return export_path
