# SPDX-License-Identifier: MIT

import math
from typing import TypedDict

from blockday.model.occurrence import Occurrence

FOCUS_GOAL_MINUTES = 360
DAILY_BLOCK_GOAL = 4


class StatScore(TypedDict):
    subject: str
    score: int
    full_mark: int


def _percentage(value: float) -> int:
    return math.floor(min(100.0, value) + 0.5)


def efficiency_stats(
    occurrences: list[Occurrence],
    focus_goal_minutes: int = FOCUS_GOAL_MINUTES,
    daily_block_goal: int = DAILY_BLOCK_GOAL,
) -> list[StatScore]:
    """
    Scores for one day's blocks, each out of 100.

    focus: scheduled minutes against the daily focus goal
    consistency: number of blocks against the daily block goal
    output: share of sub-items done; neutral (50) on an empty day
    """
    total_minutes = sum(occurrence["total_duration"] for occurrence in occurrences)
    focus = _percentage(total_minutes / focus_goal_minutes * 100) if focus_goal_minutes > 0 else 0
    consistency = (
        _percentage(len(occurrences) / daily_block_goal * 100) if daily_block_goal > 0 else 0
    )

    sub_items = [sub_item for occurrence in occurrences for sub_item in occurrence["sub_items"]]
    if len(sub_items) > 0:
        done = len([sub_item for sub_item in sub_items if sub_item["done"]])
        output = _percentage(done / len(sub_items) * 100)
    elif len(occurrences) > 0:
        output = 0
    else:
        output = 50

    return [
        {"subject": "focus", "score": focus, "full_mark": 100},
        {"subject": "consistency", "score": consistency, "full_mark": 100},
        {"subject": "output", "score": output, "full_mark": 100},
    ]
