# SPDX-License-Identifier: MIT

import atexit
import logging

from daybook.repository.calendar_state import CALENDAR_STATE_REPO
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.repository.event import EVENT_REPO
from daybook.repository.id_map import ID_MAP_REPO
from daybook.repository.storage import StaleDataError
from daybook.view.notify import notify_error

logger = logging.getLogger(__name__)


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()
    CALENDAR_STATE_REPO.flush()
    ID_MAP_REPO.flush()

    # Mutations flush as they happen; this only writes upgraded legacy records
    try:
        EVENT_REPO.flush()
    except StaleDataError as e:
        logger.warning("skipped upgrading stored events: %s", e)
        notify_error("Events not saved", f"{e}. Run the command again.")


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
