# SPDX-License-Identifier: MIT

"""
Best-fit selection of pending backlog work for a time budget.

Candidates are whole backlog items that fit the budget, or, when an item is
too long, a virtual split standing for its next pending sub-item. Candidates
are ranked by deadline urgency, then priority, then duration (longest in a
block, shortest in a gap), and in gaps untyped work wins remaining ties.
"""

from typing import Literal, Optional, TypedDict

import pendulum

from blockday.model.backlog_item import BacklogItem
from blockday.model.entity_id import EntityId
from blockday.time import today_local

SuggestionMode = Literal["block", "gap"]

GENERAL_BLOCK_TYPE = "general"

PRIORITY_RANK = {"high": 3, "medium": 2, "low": 1}


class Suggestion(TypedDict):
    item: BacklogItem
    is_split: bool
    parent_id: Optional[EntityId]
    nested_index: Optional[int]


def is_general(item: BacklogItem) -> bool:
    linked_block_type = item["linked_block_type"]
    return linked_block_type is None or linked_block_type == GENERAL_BLOCK_TYPE


def passes_block_type_filter(
    item: BacklogItem, mode: SuggestionMode, block_type_filter: Optional[str]
) -> bool:
    if mode != "block":
        return True
    return is_general(item) or item["linked_block_type"] == block_type_filter


def is_urgent(item: BacklogItem, today: pendulum.Date) -> bool:
    """Due today, overdue, or due tomorrow."""
    deadline = item["deadline"]
    if deadline is None:
        return False
    return deadline <= today.add(days=1)


def next_pending_sub_item_index(item: BacklogItem) -> Optional[int]:
    for index, sub_item in enumerate(item["sub_items"]):
        if not sub_item["done"]:
            return index
    return None


def make_split(item: BacklogItem, nested_index: int) -> Suggestion:
    sub_item = item["sub_items"][nested_index]
    split_item: BacklogItem = {
        **item,
        "title": f"{sub_item['title']} - {item['title']}",
        "estimated_duration": sub_item["duration"],
        "sub_items": [],
    }
    return {
        "item": split_item,
        "is_split": True,
        "parent_id": item["id"],
        "nested_index": nested_index,
    }


def generate_candidates(
    pool: list[BacklogItem],
    budget_minutes: int,
    mode: SuggestionMode,
    block_type_filter: Optional[str] = None,
) -> list[Suggestion]:
    candidates: list[Suggestion] = []
    for item in pool:
        if item["status"] != "pending" or not item["suggestible"]:
            continue
        if not passes_block_type_filter(item, mode, block_type_filter):
            continue

        if item["estimated_duration"] <= budget_minutes:
            candidates.append(
                {"item": item, "is_split": False, "parent_id": None, "nested_index": None}
            )
            continue

        nested_index = next_pending_sub_item_index(item)
        if nested_index is None:
            continue
        if item["sub_items"][nested_index]["duration"] <= budget_minutes:
            candidates.append(make_split(item, nested_index))
    return candidates


def rank_candidates(
    candidates: list[Suggestion], mode: SuggestionMode, today: pendulum.Date
) -> list[Suggestion]:
    def sort_key(candidate: Suggestion) -> tuple[int, int, int, int]:
        item = candidate["item"]
        duration = item["estimated_duration"]
        return (
            0 if is_urgent(item, today) else 1,
            -PRIORITY_RANK.get(item["priority"], PRIORITY_RANK["medium"]),
            -duration if mode == "block" else duration,
            0 if mode != "gap" or is_general(item) else 1,
        )

    return sorted(candidates, key=sort_key)


def best_fit(
    pool: list[BacklogItem],
    budget_minutes: int,
    mode: SuggestionMode,
    block_type_filter: Optional[str] = None,
    today: Optional[pendulum.Date] = None,
) -> Optional[Suggestion]:
    """Top-ranked candidate for the budget, or None when nothing fits."""
    if budget_minutes <= 0:
        return None
    if today is None:
        today = today_local()

    candidates = generate_candidates(pool, budget_minutes, mode, block_type_filter)
    ranked = rank_candidates(candidates, mode, today)
    if len(ranked) == 0:
        return None
    return ranked[0]
