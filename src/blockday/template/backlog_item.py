# SPDX-License-Identifier: MIT

from blockday.model.backlog_item import BacklogItem
from blockday.model.entity_id import OwnerId
from blockday.model.entity_type import EntityType
from blockday.time import now_utc

DEFAULT_BACKLOG_COLOR = "#27272a"
DEFAULT_BACKLOG_DURATION = 30


def get_backlog_item_template(owner_id: OwnerId) -> BacklogItem:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.BACKLOG_ITEM,
        "owner_id": owner_id,
        "title": "",
        "description": None,
        "priority": "medium",
        "estimated_duration": DEFAULT_BACKLOG_DURATION,
        "linked_block_type": None,
        "deadline": None,
        "status": "pending",
        "color": DEFAULT_BACKLOG_COLOR,
        "suggestible": True,
        "sub_items": [],
        "created": now,
        "updated": now,
    }
