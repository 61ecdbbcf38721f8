# SPDX-License-Identifier: MIT

"""
Result-returning entry points for a presentation layer.

Each intent reports failure as a value instead of raising, so a caller
rendering a dashboard can show the message and carry on. On success `data`
holds the reference to use for the next call on the same block.
"""

import logging
from typing import Any, Callable, Optional, TypedDict

from blockday.error import BlockdayError
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.ref import Ref, format_ref
from blockday.repository.backlog import BacklogRepository
from blockday.repository.occurrence import OccurrenceRepository
from blockday.service import block
from blockday.service.fork import Scope

logger = logging.getLogger(__name__)


class ActionResult(TypedDict):
    success: bool
    error: Optional[str]
    data: Optional[Any]


def run_action(action: Callable[[], Any]) -> ActionResult:
    try:
        data = action()
    except BlockdayError as e:
        logger.info("Action failed: %s", e.message)
        return {"success": False, "error": e.message, "data": None}
    return {"success": True, "error": None, "data": data}


def move(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    new_start: int,
    scope: Scope = "instance",
) -> ActionResult:
    return run_action(
        lambda: format_ref(block.move_block(repository, owner_id, ref, new_start, scope))
    )


def toggle_status(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    scope: Scope = "instance",
) -> ActionResult:
    return run_action(
        lambda: format_ref(block.toggle_status(repository, owner_id, ref, scope))
    )


def assign_backlog_item(
    occurrence_repository: OccurrenceRepository,
    backlog_repository: BacklogRepository,
    owner_id: OwnerId,
    ref: Ref,
    backlog_item_id: EntityId,
    nested_index: Optional[int] = None,
) -> ActionResult:
    return run_action(
        lambda: format_ref(
            block.assign_backlog_item(
                occurrence_repository,
                backlog_repository,
                owner_id,
                ref,
                backlog_item_id,
                nested_index,
            )
        )
    )


def detach_sub_item(
    occurrence_repository: OccurrenceRepository,
    backlog_repository: BacklogRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
) -> ActionResult:
    def detach() -> str:
        new_ref, _ = block.detach_sub_item(
            occurrence_repository, backlog_repository, owner_id, ref, index
        )
        return format_ref(new_ref)

    return run_action(detach)


def set_pin(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    index: int,
    pinned_time: Optional[int],
) -> ActionResult:
    return run_action(
        lambda: format_ref(block.set_pin(repository, owner_id, ref, index, pinned_time))
    )
