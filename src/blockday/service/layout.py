# SPDX-License-Identifier: MIT

"""
Chronological placement of a block's sub-items.

Pinned sub-items sit at their pinned time. Every other sub-item is placed,
in list order, at the earliest point from the block start where it does not
overlap anything already placed (greedy leftmost fit). The result is sorted
by computed start, so display order follows the clock rather than the list.
"""

from typing import NamedTuple

from blockday.model.occurrence import (
    LayoutSummary,
    Occurrence,
    PlacedSubItem,
    SubItem,
)


class Segment(NamedTuple):
    start: int
    end: int


def _overlaps(start: int, end: int, segment: Segment) -> bool:
    return start < segment.end and end > segment.start


def find_leftmost_fit(earliest: int, duration: int, occupied: list[Segment]) -> int:
    """Earliest point >= `earliest` where [point, point + duration) is free."""
    point = earliest
    moved = True
    while moved:
        moved = False
        for segment in occupied:
            if _overlaps(point, point + duration, segment):
                point = segment.end
                moved = True
    return point


def layout_summary(occurrence: Occurrence) -> LayoutSummary:
    block_start = occurrence["start_time"]
    block_end = block_start + occurrence["total_duration"]
    sub_items = occurrence["sub_items"]

    pinned = [
        (index, sub_item)
        for index, sub_item in enumerate(sub_items)
        if sub_item["pinned_time"] is not None
    ]
    unpinned = [
        (index, sub_item)
        for index, sub_item in enumerate(sub_items)
        if sub_item["pinned_time"] is None
    ]

    placements: list[tuple[int, SubItem, int, bool]] = []
    occupied: list[Segment] = []
    for index, sub_item in pinned:
        pinned_time = sub_item["pinned_time"]
        assert pinned_time is not None
        occupied.append(Segment(pinned_time, pinned_time + sub_item["duration"]))
        placements.append((index, sub_item, pinned_time, True))
    occupied.sort()

    for index, sub_item in unpinned:
        start = find_leftmost_fit(block_start, sub_item["duration"], occupied)
        occupied.append(Segment(start, start + sub_item["duration"]))
        occupied.sort()
        placements.append((index, sub_item, start, False))

    # Stable on ties, so list order breaks them
    placements.sort(key=lambda placement: placement[2])

    placed: list[PlacedSubItem] = []
    last_end = block_start
    total_gap = 0
    for index, sub_item, start, is_pinned in placements:
        end = start + sub_item["duration"]
        gap_before = max(0, start - last_end)
        total_gap += gap_before
        last_end = max(last_end, end)
        placed.append(
            {
                "index": index,
                "sub_item": sub_item,
                "is_pinned": is_pinned,
                "computed_start": start,
                "computed_end": end,
                "is_past_block_end": end > block_end,
                "gap_before_minutes": gap_before,
            }
        )

    needed_duration = last_end - block_start
    return {
        "placed": placed,
        "flow_end": last_end,
        "needed_duration": needed_duration,
        "total_gap_minutes": total_gap,
        "is_over_capacity": needed_duration > occurrence["total_duration"],
    }


def layout(occurrence: Occurrence) -> list[PlacedSubItem]:
    return layout_summary(occurrence)["placed"]


def free_minutes(occurrence: Occurrence) -> int:
    """Minutes of declared block time not yet claimed by the sub-item flow."""
    return max(0, occurrence["total_duration"] - layout_summary(occurrence)["needed_duration"])
