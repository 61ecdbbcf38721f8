# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import TypedDict

import pendulum

from blockday.model.entity_id import OwnerId
from blockday.model.occurrence import Cadence, Occurrence
from blockday.model.ref import Ref, concrete_ref, virtual_ref
from blockday.repository.occurrence import OccurrenceRepository
from blockday.time import day_of_week, is_weekday


class ResolvedOccurrence(TypedDict):
    ref: Ref
    occurrence: Occurrence


def cadence_matches(cadence: Cadence, anchor_date: pendulum.Date, date: pendulum.Date) -> bool:
    if cadence == "weekly":
        return day_of_week(date) == day_of_week(anchor_date)
    if cadence == "weekday_series":
        return is_weekday(date)
    return False


def template_matches(template: Occurrence, date: pendulum.Date) -> bool:
    """Whether a template produces a virtual occurrence on `date`."""
    if template["kind"] != "template" or template["recurrence"] is None:
        return False
    if date < template["date"]:
        # Series has not started yet
        return False
    if date in template["exception_dates"]:
        return False
    return cadence_matches(template["recurrence"]["cadence"], template["date"], date)


def project_template(template: Occurrence, date: pendulum.Date) -> ResolvedOccurrence:
    """Project a template onto one date without persisting anything."""
    if template["id"] is None:
        raise ValueError("template id cannot be None")

    occurrence = deepcopy(template)
    occurrence["date"] = date
    return {"ref": virtual_ref(template["id"], date), "occurrence": occurrence}


def expand_templates(
    templates: list[Occurrence], date: pendulum.Date
) -> list[ResolvedOccurrence]:
    return [
        project_template(template, date)
        for template in templates
        if template_matches(template, date)
    ]


def resolve(
    repository: OccurrenceRepository, date: pendulum.Date, owner_id: OwnerId
) -> list[ResolvedOccurrence]:
    """
    Every occurrence scheduled on `date` for `owner_id`, sorted by start time.

    One-off occurrences come straight from storage; templates contribute a
    virtual occurrence when their cadence matches and the date is not one of
    their exceptions.
    """
    one_offs: list[ResolvedOccurrence] = []
    for occurrence in repository.query(owner_id, date=date, kind="one_off"):
        if occurrence["id"] is None:
            raise ValueError("occurrence id cannot be None")
        one_offs.append({"ref": concrete_ref(occurrence["id"]), "occurrence": occurrence})

    templates = repository.query(owner_id, kind="template")
    virtuals = expand_templates(templates, date)

    resolved = one_offs + virtuals
    resolved.sort(key=lambda entry: entry["occurrence"]["start_time"])
    return resolved
