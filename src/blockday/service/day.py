# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from blockday.model.entity_id import OwnerId
from blockday.model.occurrence import LayoutSummary, Occurrence
from blockday.model.ref import Ref
from blockday.repository.backlog import BacklogRepository
from blockday.repository.occurrence import OccurrenceRepository
from blockday.service.backlog import pending_items
from blockday.service.layout import layout_summary
from blockday.service.recurrence import ResolvedOccurrence, resolve
from blockday.service.suggestion import Suggestion, best_fit

MINIMUM_GAP_MINUTES = 5


class DayEntry(TypedDict):
    ref: Ref
    occurrence: Occurrence
    layout: LayoutSummary
    suggestion: Optional[Suggestion]


class Gap(TypedDict):
    start: int
    duration: int
    suggestion: Optional[Suggestion]


class DayPlan(TypedDict):
    date: pendulum.Date
    entries: list[DayEntry]
    gaps: list[Gap]


def find_gaps(
    resolved: list[ResolvedOccurrence], minimum_gap_minutes: int = MINIMUM_GAP_MINUTES
) -> list[tuple[int, int]]:
    """(start, duration) of free time between consecutive blocks."""
    gaps: list[tuple[int, int]] = []
    last_end: Optional[int] = None
    for entry in resolved:
        start = entry["occurrence"]["start_time"]
        end = start + entry["occurrence"]["total_duration"]
        if last_end is not None and start - last_end >= minimum_gap_minutes:
            gaps.append((last_end, start - last_end))
        last_end = end if last_end is None else max(last_end, end)
    return gaps


def build_day_plan(
    occurrence_repository: OccurrenceRepository,
    backlog_repository: BacklogRepository,
    owner_id: OwnerId,
    date: pendulum.Date,
    minimum_gap_minutes: int = MINIMUM_GAP_MINUTES,
    today: Optional[pendulum.Date] = None,
) -> DayPlan:
    """
    Everything needed to render one day.

    Each block carries its sub-item layout and, when it still has free
    minutes, the best backlog item to fill them. Each gap between blocks
    carries the best backlog item for its length.
    """
    resolved = resolve(occurrence_repository, date, owner_id)
    pool = pending_items(backlog_repository, owner_id)

    entries: list[DayEntry] = []
    for entry in resolved:
        occurrence = entry["occurrence"]
        summary = layout_summary(occurrence)
        suggestion: Optional[Suggestion] = None
        if occurrence["status"] == "pending":
            free = occurrence["total_duration"] - summary["needed_duration"]
            suggestion = best_fit(pool, free, "block", occurrence["title"], today)
        entries.append(
            {
                "ref": entry["ref"],
                "occurrence": occurrence,
                "layout": summary,
                "suggestion": suggestion,
            }
        )

    gaps: list[Gap] = [
        {
            "start": start,
            "duration": duration,
            "suggestion": best_fit(pool, duration, "gap", None, today),
        }
        for start, duration in find_gaps(resolved, minimum_gap_minutes)
    ]

    return {"date": date, "entries": entries, "gaps": gaps}
