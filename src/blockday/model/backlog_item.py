# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.occurrence import Priority, Status


class BacklogSubItem(TypedDict):
    title: str
    duration: int
    done: bool


class BacklogItem(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    owner_id: OwnerId
    title: str
    description: Optional[str]
    priority: Priority
    estimated_duration: int
    linked_block_type: Optional[str]
    deadline: Optional[pendulum.Date]
    status: Status
    color: Optional[str]
    suggestible: bool
    sub_items: list[BacklogSubItem]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class BacklogItemPatch(TypedDict, total=False):
    title: str
    description: Optional[str]
    priority: Priority
    estimated_duration: int
    linked_block_type: Optional[str]
    deadline: Optional[pendulum.Date]
    status: Status
    color: Optional[str]
    suggestible: bool
    sub_items: list[BacklogSubItem]
