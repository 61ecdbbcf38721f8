# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.occurrence import Occurrence
from blockday.repository.occurrence import OccurrenceRepository


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    return start_a < end_b and end_a > start_b


def find_conflict(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    date: pendulum.Date,
    candidate_start: int,
    candidate_duration: int,
    exclude_id: Optional[EntityId] = None,
) -> Optional[Occurrence]:
    """
    First one-off occurrence on the same date overlapping the candidate.

    Recurring (virtual) occurrences are not considered.
    """
    candidate_end = candidate_start + candidate_duration
    for occurrence in repository.query(owner_id, date=date, kind="one_off"):
        if exclude_id is not None and occurrence["id"] == exclude_id:
            continue
        other_start = occurrence["start_time"]
        other_end = other_start + occurrence["total_duration"]
        if intervals_overlap(candidate_start, candidate_end, other_start, other_end):
            return occurrence
    return None


def has_conflict(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    date: pendulum.Date,
    candidate_start: int,
    candidate_duration: int,
    exclude_id: Optional[EntityId] = None,
) -> bool:
    return (
        find_conflict(
            repository, owner_id, date, candidate_start, candidate_duration, exclude_id
        )
        is not None
    )
