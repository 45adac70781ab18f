"""
pmcontract Item Lifecycle

Helpers for producing new item values: creation assigns identity and
timestamps, updates return a fresh validated copy. Items themselves are
never mutated.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Union

import ulid

from .models import ITEM_MODELS, Bug, Feature, Task, dump_item
from .transitions import TransitionNotAllowedError, can_transition_status
from .validation import ValidationError, parse_project_item

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("id", "type", "createdAt")


def generate_item_id() -> str:
    """Generate a new ULID for an item id"""
    return str(ulid.new())


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_item(item_type: str, data: Mapping[str, Any]) -> Union[Feature, Bug, Task]:
    """
    Build a new item of ``item_type`` from camelCase wire data.

    ``id`` is generated unless supplied; ``createdAt``/``updatedAt`` are
    always stamped here and must not be supplied.
    Raises ValidationError if the result violates the contract.
    """
    item_type = getattr(item_type, "value", item_type)
    if item_type not in ITEM_MODELS:
        raise ValidationError(
            "Invalid project item type",
            [f"Expected 'feature', 'bug', or 'task', got '{item_type}'"],
        )

    for name in ("createdAt", "updatedAt"):
        if name in data:
            raise ValueError(f"{name} is assigned on creation and cannot be supplied")
    if "type" in data and data["type"] != item_type:
        raise ValueError(f"type '{data['type']}' does not match requested item type '{item_type}'")

    now = _now_iso()
    payload = {key: value for key, value in data.items() if value is not None}
    if not payload.get("id"):
        payload["id"] = generate_item_id()
    payload["type"] = item_type
    payload["createdAt"] = now
    payload["updatedAt"] = now

    item = parse_project_item(payload)
    logger.debug(f"Created {item_type} {item.id}")
    return item


def update_item(item: Union[Feature, Bug, Task], changes: Mapping[str, Any]) -> Union[Feature, Bug, Task]:
    """
    Return a copy of ``item`` with ``changes`` (camelCase wire names) applied.

    ``id``, ``type`` and ``createdAt`` cannot change. A status change must
    follow the item's transition table. A None value clears an optional
    field. ``updatedAt`` is refreshed.
    """
    for name in IMMUTABLE_FIELDS:
        if name in changes:
            raise ValueError(f"Field '{name}' cannot be updated")

    if "status" in changes:
        new_status = getattr(changes["status"], "value", changes["status"])
        if new_status != item.status and not can_transition_status(item, new_status):
            raise TransitionNotAllowedError(item.status, new_status, item.type)

    payload = dump_item(item)
    payload.update(changes)
    payload = {key: value for key, value in payload.items() if value is not None}
    payload["updatedAt"] = _now_iso()

    updated = parse_project_item(payload)
    logger.debug(f"Updated {item.type} {item.id}: {', '.join(changes)}")
    return updated
