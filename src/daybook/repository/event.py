# SPDX-License-Identifier: MIT

import datetime
import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from daybook import configuration, time
from daybook.model.entity_id import EntityId, ensure_entity_id, generate_entity_id
from daybook.model.event import EVENT_TYPES, Event
from daybook.repository.storage import FileKeyValueStore, KeyValueStore, StaleDataError

logger = logging.getLogger(__name__)

# Field names used by the browser widget's records
_LEGACY_KEYS = {"startTime": "start_time", "endTime": "end_time"}


class EventDataError(ValueError):
    """The stored event collection could not be read."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"{location}: {reason}")
        self.location = location
        self.reason = reason


class EventRepository:
    def __init__(self, store: Optional[KeyValueStore] = None) -> None:
        self._store = store
        self._events: Optional[list[Event]] = None
        self._loaded_text: Optional[str] = None
        self.is_dirty = False

    @property
    def store(self) -> KeyValueStore:
        # Resolved lazily so a configured data_path is honoured
        if self._store is None:
            self._store = FileKeyValueStore(configuration.DATA_PATH)
        return self._store

    @property
    def events(self) -> list[Event]:
        if self._events is None:
            self.__load_data()
        if self._events is None:
            raise ValueError()
        return self._events

    def __load_data(self) -> None:
        text = self.store.get(configuration.EVENTS_KEY)

        raw_events = None
        if text is not None:
            location = self.store.location(configuration.EVENTS_KEY)
            try:
                raw_events = load(text, Loader=Loader)
            except YAMLError as e:
                raise EventDataError(location, f"not valid YAML ({e})") from e
            if raw_events is not None and not isinstance(raw_events, list):
                raise EventDataError(location, "expected a list of events")

        self._loaded_text = text
        self._events = []
        self.is_dirty = False

        for raw_event in raw_events or []:
            if not isinstance(raw_event, dict):
                logger.debug("skipping non-mapping event record: %r", raw_event)
                continue
            event, migrated = self.__convert_event_for_deserialization(raw_event)
            if migrated:
                self.is_dirty = True
            self._events.append(event)

        logger.debug("loaded %d event(s)", len(self._events))

    def __serialize(self) -> str:
        serializable_events = [
            self.convert_event_for_serialization(event) for event in self.events
        ]
        return cast(
            str,
            dump(
                serializable_events,
                Dumper=Dumper,
                sort_keys=False,
                allow_unicode=True,
            ),
        )

    def flush(self) -> bool:
        """
        Persist the collection if it changed.

        The write is a compare-and-set against the text last read or written,
        so a concurrent writer is detected instead of silently overwritten.
        """
        if self._events is None or not self.is_dirty:
            return False

        text = self.__serialize()
        if not self.store.compare_and_set(
            configuration.EVENTS_KEY, self._loaded_text, text
        ):
            self.__discard()
            raise StaleDataError(configuration.EVENTS_KEY)

        self._loaded_text = text
        self.is_dirty = False
        return True

    def __discard(self) -> None:
        # Unsaved changes are dropped; the next access reads storage again
        self._events = None
        self._loaded_text = None
        self.is_dirty = False

    def reload(self) -> None:
        self._events = None
        self.__load_data()

    def has_external_changes(self) -> bool:
        if self._events is None:
            return False
        return self.store.get(configuration.EVENTS_KEY) != self._loaded_text

    def reload_if_changed(self) -> bool:
        """Re-read storage only when something else wrote to it."""
        if self.has_external_changes():
            if self.is_dirty:
                self.__discard()
                raise StaleDataError(configuration.EVENTS_KEY)
            logger.info("events changed on disk, reloading")
            self.reload()
            return True
        return False

    @staticmethod
    def convert_event_for_serialization(event: Event) -> dict[str, Any]:
        serializable_event = cast(dict[str, Any], deepcopy(event))
        serializable_event["created"] = time.datetime_to_iso_str(event["created"])
        serializable_event["updated"] = time.datetime_to_iso_str(event["updated"])
        return serializable_event

    def __convert_event_for_deserialization(
        self, raw_event: dict[str, Any]
    ) -> tuple[Event, bool]:
        """Returns the event and whether the stored record had to be upgraded."""
        migrated = False

        for legacy_key, key in _LEGACY_KEYS.items():
            if legacy_key in raw_event:
                raw_event[key] = raw_event.pop(legacy_key)
                migrated = True

        if not raw_event.get("id"):
            migrated = True
        raw_event["id"] = ensure_entity_id(raw_event.get("id"))

        for key in ("name", "start_time", "end_time", "description", "day"):
            if raw_event.get(key) is None:
                raw_event[key] = ""
            else:
                raw_event[key] = str(raw_event[key])

        if raw_event.get("type") not in EVENT_TYPES:
            raw_event["type"] = "others"
            migrated = True

        if "date" not in raw_event:
            migrated = True
            label_date = time.date_from_day_label(raw_event["day"])
            raw_event["date"] = (
                time.date_to_iso_str(label_date) if label_date is not None else None
            )
            if label_date is None:
                logger.debug(
                    "event '%s' has an unparseable day label '%s'",
                    raw_event["name"],
                    raw_event["day"],
                )
        elif isinstance(raw_event["date"], datetime.date):
            # Unquoted YAML dates load as datetime.date
            raw_event["date"] = raw_event["date"].strftime("%Y-%m-%d")
        elif raw_event["date"] is not None and not isinstance(raw_event["date"], str):
            logger.debug(
                "event '%s' has an unusable date %r", raw_event["name"], raw_event["date"]
            )
            raw_event["date"] = None
            migrated = True

        now = time.now_utc()
        for key in ("created", "updated"):
            value = raw_event.get(key)
            if value is None:
                raw_event[key] = now
                migrated = True
            elif isinstance(value, str):
                raw_event[key] = time.datetime_from_str(value)
            elif isinstance(value, datetime.date):
                # YAML may already hand back a datetime for unquoted timestamps
                raw_event[key] = time.datetime_from_str(value.isoformat())
            else:
                raw_event[key] = now
                migrated = True

        return cast(Event, raw_event), migrated

    def save_new_event(self, event: Event) -> EntityId:
        self.is_dirty = True

        event["id"] = generate_entity_id()
        self.events.append(event)

        return event["id"]

    def replace_event(self, id: EntityId, event: Event) -> bool:
        """Swap the stored record with ``id`` for ``event`` in place."""
        for index, stored_event in enumerate(self.events):
            if stored_event["id"] == id:
                self.is_dirty = True
                event["id"] = id
                self.events[index] = event
                return True
        return False

    def delete_event(self, id: EntityId) -> bool:
        remaining = [event for event in self.events if event["id"] != id]
        if len(remaining) == len(self.events):
            return False

        self.is_dirty = True
        self._events = remaining
        return True

    def get_all_events(self) -> list[Event]:
        return deepcopy(self.events)

    def get_event(self, id: EntityId) -> Event:
        return deepcopy([event for event in self.events if event["id"] == id][0])

    def find_event(self, id: EntityId) -> Optional[Event]:
        matching_events = [event for event in self.events if event["id"] == id]
        if len(matching_events) == 0:
            return None
        return deepcopy(matching_events[0])


EVENT_REPO = EventRepository()
