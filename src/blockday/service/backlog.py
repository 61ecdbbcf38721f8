# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from blockday.error import NotFoundError, ValidationError
from blockday.model.backlog_item import BacklogItem, BacklogItemPatch, BacklogSubItem
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.occurrence import Priority, SubItem
from blockday.repository.backlog import BacklogRepository
from blockday.template.backlog_item import (
    DEFAULT_BACKLOG_COLOR,
    DEFAULT_BACKLOG_DURATION,
    get_backlog_item_template,
)
from blockday.template.occurrence import get_sub_item_template
from blockday.time import today_local

logger = logging.getLogger(__name__)

MINIMUM_TITLE_LENGTH = 2
MINIMUM_BACKLOG_DURATION = 5
PRIORITIES: tuple[Priority, ...] = ("low", "medium", "high")


def validate_title(title: str) -> str:
    title = title.strip()
    if len(title) < MINIMUM_TITLE_LENGTH:
        raise ValidationError(
            f"Title must be at least {MINIMUM_TITLE_LENGTH} characters long"
        )
    return title


def validate_priority(priority: str) -> Priority:
    if priority not in PRIORITIES:
        raise ValidationError(
            f"Priority must be one of {', '.join(PRIORITIES)}, got '{priority}'"
        )
    return priority  # type: ignore[return-value]


def validate_sub_items(sub_items: list[BacklogSubItem]) -> None:
    for sub_item in sub_items:
        if sub_item["title"].strip() == "":
            raise ValidationError("Sub-item title cannot be empty")
        if sub_item["duration"] < 1:
            raise ValidationError("Sub-item duration must be at least 1 minute")


def require_backlog_item(
    repository: BacklogRepository, owner_id: OwnerId, item_id: EntityId
) -> BacklogItem:
    item = repository.get(owner_id, item_id)
    if item is None:
        raise NotFoundError(f"No backlog item with id '{item_id}'")
    return item


def create_backlog_item(
    repository: BacklogRepository,
    owner_id: OwnerId,
    title: str,
    priority: Priority = "medium",
    estimated_duration: int = DEFAULT_BACKLOG_DURATION,
    linked_block_type: Optional[str] = None,
    deadline: Optional[pendulum.Date] = None,
    description: Optional[str] = None,
    color: Optional[str] = DEFAULT_BACKLOG_COLOR,
    suggestible: bool = True,
    sub_items: Optional[list[BacklogSubItem]] = None,
) -> EntityId:
    if estimated_duration < MINIMUM_BACKLOG_DURATION:
        raise ValidationError(
            f"Estimated duration must be at least {MINIMUM_BACKLOG_DURATION} minutes"
        )
    validate_sub_items(sub_items or [])

    item = get_backlog_item_template(owner_id)
    item["title"] = validate_title(title)
    item["priority"] = validate_priority(priority)
    item["estimated_duration"] = estimated_duration
    item["linked_block_type"] = linked_block_type
    item["deadline"] = deadline
    item["description"] = description
    item["color"] = color
    item["suggestible"] = suggestible
    item["sub_items"] = sub_items or []

    item_id = repository.insert(item)
    logger.info("Created backlog item %s", item_id)
    return item_id


def update_backlog_item(
    repository: BacklogRepository,
    owner_id: OwnerId,
    item_id: EntityId,
    patch: BacklogItemPatch,
) -> None:
    if "title" in patch:
        patch["title"] = validate_title(patch["title"])
    if "priority" in patch:
        patch["priority"] = validate_priority(patch["priority"])
    if "estimated_duration" in patch and patch["estimated_duration"] < MINIMUM_BACKLOG_DURATION:
        raise ValidationError(
            f"Estimated duration must be at least {MINIMUM_BACKLOG_DURATION} minutes"
        )
    if "sub_items" in patch:
        validate_sub_items(patch["sub_items"])
    require_backlog_item(repository, owner_id, item_id)
    repository.update(owner_id, item_id, patch)


def delete_backlog_item(
    repository: BacklogRepository, owner_id: OwnerId, item_id: EntityId
) -> None:
    repository.delete(owner_id, item_id)


def toggle_backlog_sub_item(
    repository: BacklogRepository, owner_id: OwnerId, item_id: EntityId, index: int
) -> bool:
    """Flip one sub-item's done flag and return the new value."""
    item = require_backlog_item(repository, owner_id, item_id)
    sub_items = item["sub_items"]
    if index < 0 or index >= len(sub_items):
        raise NotFoundError(f"No sub-item at position {index}")
    sub_items[index]["done"] = not sub_items[index]["done"]
    repository.update(owner_id, item_id, {"sub_items": sub_items})
    return sub_items[index]["done"]


def pending_items(repository: BacklogRepository, owner_id: OwnerId) -> list[BacklogItem]:
    return repository.query(owner_id, status="pending")


def sub_item_from_backlog(
    item: BacklogItem, nested_index: Optional[int] = None
) -> SubItem:
    """Block sub-item carrying a backlog item, or one of its sub-items."""
    if item["id"] is None:
        raise ValueError("backlog item id cannot be None")

    if nested_index is None:
        sub_item = get_sub_item_template(item["title"], item["estimated_duration"])
        sub_item["nested"] = [
            {"title": nested["title"], "duration": nested["duration"], "done": nested["done"]}
            for nested in item["sub_items"]
        ]
    else:
        if nested_index < 0 or nested_index >= len(item["sub_items"]):
            raise NotFoundError(f"No sub-item at position {nested_index}")
        nested = item["sub_items"][nested_index]
        sub_item = get_sub_item_template(
            f"{nested['title']} - {item['title']}", nested["duration"]
        )

    sub_item["origin_source"] = "from_backlog"
    sub_item["backlog_ref"] = {"item_id": item["id"], "nested_index": nested_index}
    sub_item["priority"] = item["priority"]
    sub_item["linked_block_type"] = item["linked_block_type"]
    sub_item["deadline"] = item["deadline"]
    sub_item["description"] = item["description"]
    sub_item["color"] = item["color"]
    sub_item["suggestible"] = item["suggestible"]
    return sub_item


def consume_backlog_item(
    repository: BacklogRepository,
    owner_id: OwnerId,
    item: BacklogItem,
    nested_index: Optional[int] = None,
) -> None:
    """
    Remove scheduled work from the backlog.

    A whole item is deleted. A single sub-item is marked done, and the parent
    is deleted once none of its sub-items remain pending.
    """
    if item["id"] is None:
        raise ValueError("backlog item id cannot be None")

    if nested_index is None:
        repository.delete(owner_id, item["id"])
        return

    sub_items = item["sub_items"]
    sub_items[nested_index]["done"] = True
    if all(sub_item["done"] for sub_item in sub_items):
        repository.delete(owner_id, item["id"])
    else:
        repository.update(owner_id, item["id"], {"sub_items": sub_items})


def backlog_item_from_sub_item(
    repository: BacklogRepository, owner_id: OwnerId, sub_item: SubItem
) -> EntityId:
    """Archive a block sub-item back into the backlog."""
    item = get_backlog_item_template(owner_id)
    item["title"] = sub_item["title"]
    item["estimated_duration"] = sub_item["duration"]
    item["priority"] = sub_item["priority"] or "medium"
    item["linked_block_type"] = sub_item["linked_block_type"]
    item["deadline"] = sub_item["deadline"]
    item["description"] = sub_item["description"]
    if sub_item["color"] is not None:
        item["color"] = sub_item["color"]
    item["suggestible"] = sub_item["suggestible"]
    item["sub_items"] = [
        {"title": nested["title"], "duration": nested["duration"], "done": nested["done"]}
        for nested in sub_item["nested"]
    ]

    item_id = repository.insert(item)
    logger.info("Archived sub-item '%s' to backlog item %s", sub_item["title"], item_id)
    return item_id


def deadline_label(
    deadline: Optional[pendulum.Date], today: Optional[pendulum.Date] = None
) -> str:
    if deadline is None:
        return "no deadline"
    if today is None:
        today = today_local()

    days_left = today.diff(deadline, False).in_days()
    if deadline < today:
        return f"overdue ({abs(days_left)}d)"
    if days_left == 0:
        return "today"
    if days_left == 1:
        return "tomorrow"
    return f"{days_left} days"
