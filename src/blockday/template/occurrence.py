# SPDX-License-Identifier: MIT

import pendulum

from blockday.model.entity_id import OwnerId
from blockday.model.entity_type import EntityType
from blockday.model.occurrence import NestedSubItem, Occurrence, SubItem
from blockday.time import now_utc

DEFAULT_BLOCK_COLOR = "#3b82f6"
DEFAULT_BLOCK_ICON = "zap"


def get_occurrence_template(owner_id: OwnerId, date: pendulum.Date) -> Occurrence:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.OCCURRENCE,
        "owner_id": owner_id,
        "title": "",
        "date": date,
        "start_time": 0,
        "total_duration": 60,
        "color": DEFAULT_BLOCK_COLOR,
        "icon": DEFAULT_BLOCK_ICON,
        "status": "pending",
        "kind": "one_off",
        "recurrence": None,
        "exception_dates": [],
        "sub_items": [],
        "overrides_template_id": None,
        "created": now,
        "updated": now,
    }


def get_sub_item_template(title: str, duration: int) -> SubItem:
    return {
        "title": title,
        "duration": duration,
        "done": False,
        "pinned_time": None,
        "origin_source": "fixed",
        "backlog_ref": None,
        "nested": [],
        "priority": None,
        "linked_block_type": None,
        "deadline": None,
        "description": None,
        "color": None,
        "suggestible": True,
    }


def get_nested_sub_item_template(title: str, duration: int) -> NestedSubItem:
    return {"title": title, "duration": duration, "done": False}
