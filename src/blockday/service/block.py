# SPDX-License-Identifier: MIT

"""
User intents on scheduled blocks.

Every intent that changes an existing block is routed through the fork
engine, so virtual occurrences are materialized before anything is written.
Each intent returns the reference to use for follow-up calls.
"""

import logging
from typing import Literal, Optional

import pendulum

from blockday.error import ConflictError, NotFoundError, ValidationError
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.occurrence import Cadence, Occurrence, OccurrencePatch, SubItem
from blockday.model.ref import Ref
from blockday.repository.backlog import BacklogRepository
from blockday.repository.occurrence import OccurrenceRepository
from blockday.service import backlog as backlog_service
from blockday.service.conflict import find_conflict
from blockday.service.fork import (
    Scope,
    apply_mutation,
    mutate_sub_items,
    mutation_source,
)
from blockday.service.layout import layout_summary
from blockday.service.quantize import clamp_minute_of_day, quantize
from blockday.service.recurrence import cadence_matches
from blockday.template.backlog_item import DEFAULT_BACKLOG_COLOR
from blockday.template.occurrence import (
    DEFAULT_BLOCK_COLOR,
    DEFAULT_BLOCK_ICON,
    get_occurrence_template,
    get_sub_item_template,
)
from blockday.time import (
    date_to_str,
    day_of_week,
    is_valid_minute_of_day,
    minutes_to_hhmm,
)

logger = logging.getLogger(__name__)

MINIMUM_BLOCK_DURATION = 5

Direction = Literal["up", "down"]


def validate_start_time(start_time: int) -> None:
    if not is_valid_minute_of_day(start_time):
        raise ValidationError(
            f"Start time must be between 00:00 and 23:59, got minute {start_time}"
        )


def validate_duration(total_duration: int, minimum_duration: int) -> None:
    if total_duration < minimum_duration:
        raise ValidationError(f"Duration must be at least {minimum_duration} minutes")


def validate_pin(
    start_time: int,
    total_duration: int,
    sub_items: list[SubItem],
    index: int,
    pinned_time: int,
) -> None:
    """A pin must sit inside the block and clear of every other pin."""
    block_end = start_time + total_duration
    if pinned_time < start_time or pinned_time > block_end:
        raise ValidationError(
            f"Pinned time {minutes_to_hhmm(pinned_time)} is outside the block "
            f"({minutes_to_hhmm(start_time)}-{minutes_to_hhmm(block_end)})"
        )

    pinned_end = pinned_time + sub_items[index]["duration"]
    for other_index, other in enumerate(sub_items):
        other_pin = other["pinned_time"]
        if other_index == index or other_pin is None:
            continue
        if pinned_time < other_pin + other["duration"] and pinned_end > other_pin:
            raise ValidationError(
                f"Pinned time {minutes_to_hhmm(pinned_time)} overlaps '{other['title']}'"
            )


def _require_index(sub_items: list[SubItem], index: int) -> None:
    if index < 0 or index >= len(sub_items):
        raise NotFoundError(f"No sub-item at position {index}")


def create_block(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    title: str,
    date: pendulum.Date,
    start_time: int,
    total_duration: int,
    color: Optional[str] = DEFAULT_BLOCK_COLOR,
    icon: Optional[str] = DEFAULT_BLOCK_ICON,
    sub_items: Optional[list[SubItem]] = None,
    minimum_duration: int = MINIMUM_BLOCK_DURATION,
) -> EntityId:
    """Create a one-off block, rejecting it when it overlaps another one-off."""
    title = backlog_service.validate_title(title)
    validate_start_time(start_time)
    validate_duration(total_duration, minimum_duration)

    conflicting = find_conflict(repository, owner_id, date, start_time, total_duration)
    if conflicting is not None:
        logger.warning(
            "Rejected block '%s' on %s: conflicts with '%s'",
            title,
            date_to_str(date),
            conflicting["title"],
        )
        raise ConflictError(
            f"Time conflict with \"{conflicting['title']}\" "
            f"({minutes_to_hhmm(conflicting['start_time'])})"
        )

    occurrence = get_occurrence_template(owner_id, date)
    occurrence["title"] = title
    occurrence["start_time"] = start_time
    occurrence["total_duration"] = total_duration
    occurrence["color"] = color
    occurrence["icon"] = icon
    occurrence["sub_items"] = sub_items or []

    occurrence_id = repository.insert(occurrence)
    logger.info("Created block %s on %s", occurrence_id, date_to_str(date))
    return occurrence_id


def _cadence_weekdays(cadence: Cadence, anchor_date: pendulum.Date) -> set[int]:
    if cadence == "weekday_series":
        return {1, 2, 3, 4, 5}
    return {day_of_week(anchor_date)}


def create_recurring_block(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    title: str,
    anchor_date: pendulum.Date,
    start_time: int,
    total_duration: int,
    cadence: Cadence = "weekly",
    color: Optional[str] = DEFAULT_BLOCK_COLOR,
    icon: Optional[str] = DEFAULT_BLOCK_ICON,
    sub_items: Optional[list[SubItem]] = None,
    minimum_duration: int = MINIMUM_BLOCK_DURATION,
) -> EntityId:
    """
    Create a recurring template.

    Rejects a template whose title repeats an existing series on any shared
    weekday, so a logical series never yields two occurrences on one date.
    """
    title = backlog_service.validate_title(title)
    validate_start_time(start_time)
    validate_duration(total_duration, minimum_duration)
    if cadence == "weekday_series" and not cadence_matches(cadence, anchor_date, anchor_date):
        raise ValidationError("A weekday series must start on a weekday")

    weekdays = _cadence_weekdays(cadence, anchor_date)
    for existing in repository.query(owner_id, kind="template"):
        if existing["recurrence"] is None:
            continue
        if existing["title"].casefold() != title.casefold():
            continue
        existing_weekdays = _cadence_weekdays(
            existing["recurrence"]["cadence"], existing["date"]
        )
        if weekdays & existing_weekdays:
            raise ValidationError(
                f"A recurring block named '{existing['title']}' already covers these days"
            )

    template = get_occurrence_template(owner_id, anchor_date)
    template["title"] = title
    template["start_time"] = start_time
    template["total_duration"] = total_duration
    template["color"] = color
    template["icon"] = icon
    template["kind"] = "template"
    template["recurrence"] = {"cadence": cadence, "anchor_date": anchor_date}
    template["sub_items"] = sub_items or []

    template_id = repository.insert(template)
    logger.info("Created %s series %s from %s", cadence, template_id, date_to_str(anchor_date))
    return template_id


def update_block(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    title: Optional[str] = None,
    color: Optional[str] = None,
    icon: Optional[str] = None,
    scope: Scope = "instance",
) -> Ref:
    patch: OccurrencePatch = {}
    if title is not None:
        patch["title"] = backlog_service.validate_title(title)
    if color is not None:
        patch["color"] = color
    if icon is not None:
        patch["icon"] = icon
    if len(patch) == 0:
        return ref
    mutation_source(repository, owner_id, ref, scope)
    return apply_mutation(repository, owner_id, ref, patch, scope)


def move_block(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    new_start: int,
    scope: Scope = "instance",
) -> Ref:
    """Move a block to a new start time, carrying its pinned sub-items along."""
    validate_start_time(new_start)
    occurrence = mutation_source(repository, owner_id, ref, scope)
    delta = new_start - occurrence["start_time"]
    if delta == 0:
        return ref

    sub_items = occurrence["sub_items"]
    for sub_item in sub_items:
        if sub_item["pinned_time"] is not None:
            sub_item["pinned_time"] += delta

    return apply_mutation(
        repository,
        owner_id,
        ref,
        {"start_time": new_start, "sub_items": sub_items},
        scope,
    )


def drag_block(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    delta_pixels: float,
    scope: Scope = "instance",
) -> Ref:
    occurrence = mutation_source(repository, owner_id, ref, scope)
    original_start = occurrence["start_time"]
    minute_delta = quantize(delta_pixels, original_start)
    new_start = clamp_minute_of_day(original_start, minute_delta)
    return move_block(repository, owner_id, ref, new_start, scope)


def toggle_status(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    scope: Scope = "instance",
) -> Ref:
    occurrence = mutation_source(repository, owner_id, ref, scope)
    status = "pending" if occurrence["status"] == "completed" else "completed"
    return apply_mutation(repository, owner_id, ref, {"status": status}, scope)


def resize_block(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    total_duration: int,
    scope: Scope = "instance",
    minimum_duration: int = MINIMUM_BLOCK_DURATION,
) -> Ref:
    validate_duration(total_duration, minimum_duration)
    occurrence = mutation_source(repository, owner_id, ref, scope)
    block_end = occurrence["start_time"] + total_duration
    for sub_item in occurrence["sub_items"]:
        if sub_item["pinned_time"] is not None and sub_item["pinned_time"] > block_end:
            raise ValidationError(
                f"'{sub_item['title']}' is pinned at "
                f"{minutes_to_hhmm(sub_item['pinned_time'])}, after the new block end"
            )
    return apply_mutation(
        repository, owner_id, ref, {"total_duration": total_duration}, scope
    )


def resize_to_fit(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    scope: Scope = "instance",
    minimum_duration: int = MINIMUM_BLOCK_DURATION,
) -> Ref:
    """Set the block duration to what its sub-items need."""
    occurrence = mutation_source(repository, owner_id, ref, scope)
    needed_duration = layout_summary(occurrence)["needed_duration"]
    total_duration = max(needed_duration, minimum_duration)
    if total_duration == occurrence["total_duration"]:
        return ref
    return apply_mutation(
        repository, owner_id, ref, {"total_duration": total_duration}, scope
    )


def add_sub_item(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    title: str,
    duration: int,
    pinned_time: Optional[int] = None,
    scope: Scope = "instance",
) -> Ref:
    if title.strip() == "":
        raise ValidationError("Sub-item title cannot be empty")
    if duration < 1:
        raise ValidationError("Sub-item duration must be at least 1 minute")
    occurrence = mutation_source(repository, owner_id, ref, scope)

    def append(sub_items: list[SubItem]) -> list[SubItem]:
        sub_items.append(get_sub_item_template(title.strip(), duration))
        if pinned_time is not None:
            _pin(occurrence, sub_items, len(sub_items) - 1, pinned_time)
        return sub_items

    return mutate_sub_items(repository, owner_id, ref, append, scope)


def toggle_sub_item(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
    scope: Scope = "instance",
) -> Ref:
    def toggle(sub_items: list[SubItem]) -> list[SubItem]:
        _require_index(sub_items, index)
        sub_items[index]["done"] = not sub_items[index]["done"]
        return sub_items

    return mutate_sub_items(repository, owner_id, ref, toggle, scope)


def toggle_nested_sub_item(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
    nested_index: int,
    scope: Scope = "instance",
) -> Ref:
    def toggle(sub_items: list[SubItem]) -> list[SubItem]:
        _require_index(sub_items, index)
        nested = sub_items[index]["nested"]
        if nested_index < 0 or nested_index >= len(nested):
            raise NotFoundError(f"No nested sub-item at position {nested_index}")
        nested[nested_index]["done"] = not nested[nested_index]["done"]
        return sub_items

    return mutate_sub_items(repository, owner_id, ref, toggle, scope)


def move_sub_item(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
    direction: Direction,
    scope: Scope = "instance",
) -> Ref:
    """Swap a sub-item with its neighbour; moving past either end is a no-op."""

    def swap(sub_items: list[SubItem]) -> list[SubItem]:
        _require_index(sub_items, index)
        other = index - 1 if direction == "up" else index + 1
        if 0 <= other < len(sub_items):
            sub_items[index], sub_items[other] = sub_items[other], sub_items[index]
        return sub_items

    return mutate_sub_items(repository, owner_id, ref, swap, scope)


def remove_sub_item(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
    scope: Scope = "instance",
) -> Ref:
    def remove(sub_items: list[SubItem]) -> list[SubItem]:
        _require_index(sub_items, index)
        del sub_items[index]
        return sub_items

    return mutate_sub_items(repository, owner_id, ref, remove, scope)


def _pin(
    occurrence: Occurrence,
    sub_items: list[SubItem],
    index: int,
    pinned_time: Optional[int],
) -> None:
    _require_index(sub_items, index)
    if pinned_time is not None:
        validate_pin(
            occurrence["start_time"],
            occurrence["total_duration"],
            sub_items,
            index,
            pinned_time,
        )
    sub_items[index]["pinned_time"] = pinned_time


def set_pin(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
    pinned_time: Optional[int],
    scope: Scope = "instance",
) -> Ref:
    """Pin a sub-item to a clock time, or unpin it with None."""
    occurrence = mutation_source(repository, owner_id, ref, scope)

    def pin(sub_items: list[SubItem]) -> list[SubItem]:
        _pin(occurrence, sub_items, index, pinned_time)
        return sub_items

    return mutate_sub_items(repository, owner_id, ref, pin, scope)


def assign_backlog_item(
    occurrence_repository: OccurrenceRepository,
    backlog_repository: BacklogRepository,
    owner_id: OwnerId,
    ref: Ref,
    backlog_item_id: EntityId,
    nested_index: Optional[int] = None,
    scope: Scope = "instance",
) -> Ref:
    """
    Append backlog work to a block's sub-items and consume it from the backlog.

    Not idempotent: issuing it twice appends twice.
    """
    item = backlog_service.require_backlog_item(backlog_repository, owner_id, backlog_item_id)
    sub_item = backlog_service.sub_item_from_backlog(item, nested_index)

    def append(sub_items: list[SubItem]) -> list[SubItem]:
        sub_items.append(sub_item)
        return sub_items

    new_ref = mutate_sub_items(occurrence_repository, owner_id, ref, append, scope)
    backlog_service.consume_backlog_item(backlog_repository, owner_id, item, nested_index)
    logger.info("Assigned backlog item %s to a block", backlog_item_id)
    return new_ref


def detach_sub_item(
    occurrence_repository: OccurrenceRepository,
    backlog_repository: BacklogRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
    scope: Scope = "instance",
) -> tuple[Ref, EntityId]:
    """Move a sub-item out of its block and back into the backlog."""
    detached: list[SubItem] = []

    def remove(sub_items: list[SubItem]) -> list[SubItem]:
        _require_index(sub_items, index)
        detached.append(sub_items.pop(index))
        return sub_items

    new_ref = mutate_sub_items(occurrence_repository, owner_id, ref, remove, scope)
    item_id = backlog_service.backlog_item_from_sub_item(
        backlog_repository, owner_id, detached[0]
    )
    return new_ref, item_id


def schedule_backlog_item(
    occurrence_repository: OccurrenceRepository,
    backlog_repository: BacklogRepository,
    owner_id: OwnerId,
    backlog_item_id: EntityId,
    date: pendulum.Date,
    start_time: int,
    nested_index: Optional[int] = None,
    minimum_duration: int = MINIMUM_BLOCK_DURATION,
) -> EntityId:
    """Turn backlog work into its own one-off block, e.g. to fill a gap."""
    item = backlog_service.require_backlog_item(backlog_repository, owner_id, backlog_item_id)
    if item["id"] is None:
        raise ValueError("backlog item id cannot be None")

    if nested_index is None:
        title = item["title"]
        duration = item["estimated_duration"]
        sub_items = [
            backlog_service.sub_item_from_backlog(item, index)
            for index in range(len(item["sub_items"]))
        ]
        for sub_item, nested in zip(sub_items, item["sub_items"]):
            sub_item["title"] = nested["title"]
            sub_item["done"] = nested["done"]
    else:
        split = backlog_service.sub_item_from_backlog(item, nested_index)
        title = split["title"]
        duration = split["duration"]
        sub_items = []

    color = item["color"]
    if color is None or color == DEFAULT_BACKLOG_COLOR:
        color = DEFAULT_BLOCK_COLOR

    occurrence_id = create_block(
        occurrence_repository,
        owner_id,
        title,
        date,
        start_time,
        max(duration, minimum_duration),
        color=color,
        sub_items=sub_items,
        minimum_duration=minimum_duration,
    )
    backlog_service.consume_backlog_item(backlog_repository, owner_id, item, nested_index)
    return occurrence_id
