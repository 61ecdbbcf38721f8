# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from blockday.model.entity_id import EntityId, OwnerId

OccurrenceKind = Literal["one_off", "template"]
Cadence = Literal["weekly", "weekday_series"]
Status = Literal["pending", "completed"]
OriginSource = Literal["fixed", "from_backlog"]
Priority = Literal["low", "medium", "high"]


class RecurrenceRule(TypedDict):
    cadence: Cadence
    anchor_date: pendulum.Date


class NestedSubItem(TypedDict):
    title: str
    duration: int
    done: bool


class BacklogRef(TypedDict):
    item_id: EntityId
    nested_index: Optional[int]


class SubItem(TypedDict):
    title: str
    duration: int
    done: bool
    pinned_time: Optional[int]
    origin_source: OriginSource
    backlog_ref: Optional[BacklogRef]
    nested: list[NestedSubItem]
    priority: Optional[Priority]
    linked_block_type: Optional[str]
    deadline: Optional[pendulum.Date]
    description: Optional[str]
    color: Optional[str]
    suggestible: bool


class Occurrence(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    owner_id: OwnerId
    title: str
    date: pendulum.Date
    start_time: int
    total_duration: int
    color: Optional[str]
    icon: Optional[str]
    status: Status
    kind: OccurrenceKind
    recurrence: Optional[RecurrenceRule]
    exception_dates: list[pendulum.Date]
    sub_items: list[SubItem]
    overrides_template_id: Optional[EntityId]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class OccurrencePatch(TypedDict, total=False):
    title: str
    date: pendulum.Date
    start_time: int
    total_duration: int
    color: Optional[str]
    icon: Optional[str]
    status: Status
    recurrence: Optional[RecurrenceRule]
    exception_dates: list[pendulum.Date]
    sub_items: list[SubItem]
    overrides_template_id: Optional[EntityId]


class PlacedSubItem(TypedDict):
    index: int
    sub_item: SubItem
    is_pinned: bool
    computed_start: int
    computed_end: int
    is_past_block_end: bool
    gap_before_minutes: int


class LayoutSummary(TypedDict):
    placed: list[PlacedSubItem]
    flow_end: int
    needed_duration: int
    total_gap_minutes: int
    is_over_capacity: bool
