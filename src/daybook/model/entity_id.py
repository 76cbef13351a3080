# SPDX-License-Identifier: MIT

import uuid
from typing import Any, TypeAlias

EntityId: TypeAlias = str


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())


def ensure_entity_id(value: Any) -> EntityId:
    """Keep a stored id as-is, or mint one for records written without ids."""
    if isinstance(value, str) and value.strip():
        return value
    return generate_entity_id()
