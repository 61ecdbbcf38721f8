# SPDX-License-Identifier: MIT

"""
Copy-on-write mutation of scheduled occurrences.

Every write aimed at an occurrence goes through apply_mutation(). Writes to a
persisted occurrence are applied in place. Writes to a virtual occurrence
(a template projected onto one date) either change the whole series or fork
the date: the date is added to the template's exceptions and a concrete
one-off occurrence carrying the mutated state is stored in its place.

The fork performs two dependent writes with no transaction around them. If
the second write fails, the date stays suppressed without a replacement.
"""

import logging
from copy import deepcopy
from typing import Callable, Literal, Optional

import pendulum

from blockday.error import NotFoundError, ValidationError
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.occurrence import Occurrence, OccurrencePatch, SubItem
from blockday.model.ref import ConcreteRef, Ref, concrete_ref, format_ref, is_virtual
from blockday.repository.occurrence import OccurrenceRepository
from blockday.service.recurrence import cadence_matches
from blockday.time import date_to_str, day_of_week, next_date_on_weekday, now_utc

logger = logging.getLogger(__name__)

Scope = Literal["instance", "series"]

WEEKDAYS = (1, 2, 3, 4, 5)


def require_template(
    repository: OccurrenceRepository, owner_id: OwnerId, template_id: EntityId
) -> Occurrence:
    template = repository.get(owner_id, template_id)
    if template is None or template["kind"] != "template":
        raise NotFoundError(f"No recurring block with id '{template_id}'")
    return template


def _require_on_cadence(template: Occurrence, date: pendulum.Date) -> None:
    recurrence = template["recurrence"]
    if (
        recurrence is None
        or date < template["date"]
        or not cadence_matches(recurrence["cadence"], template["date"], date)
    ):
        raise NotFoundError(
            f"Recurring block '{template['title']}' does not occur on {date_to_str(date)}"
        )


def find_fork(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    template_id: EntityId,
    date: pendulum.Date,
) -> Optional[Occurrence]:
    forks = repository.query(owner_id, date=date, kind="one_off", template_id=template_id)
    if len(forks) == 0:
        return None
    return forks[0]


def get_occurrence(
    repository: OccurrenceRepository, owner_id: OwnerId, ref: Ref
) -> Occurrence:
    """Current state of the occurrence a reference points at."""
    if not is_virtual(ref):
        occurrence = repository.get(owner_id, ref["id"])
        if occurrence is None:
            raise NotFoundError(f"No block with id '{ref['id']}'")
        return occurrence

    template = require_template(repository, owner_id, ref["template_id"])
    _require_on_cadence(template, ref["date"])
    if ref["date"] in template["exception_dates"]:
        fork = find_fork(repository, owner_id, ref["template_id"], ref["date"])
        if fork is None:
            raise NotFoundError(
                f"Recurring block '{template['title']}' was removed on {date_to_str(ref['date'])}"
            )
        return fork

    occurrence = deepcopy(template)
    occurrence["date"] = ref["date"]
    return occurrence


def mutation_source(
    repository: OccurrenceRepository, owner_id: OwnerId, ref: Ref, scope: Scope = "instance"
) -> Occurrence:
    """
    State a write to `ref` with `scope` is computed from.

    A series-scoped write through a virtual reference reads the template,
    even when that date has its own fork.
    """
    if is_virtual(ref) and scope == "series":
        template = require_template(repository, owner_id, ref["template_id"])
        _require_on_cadence(template, ref["date"])
        return template
    return get_occurrence(repository, owner_id, ref)


def add_exception(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    template: Occurrence,
    date: pendulum.Date,
) -> None:
    """Suppress one date of a template; a no-op if already suppressed."""
    if template["id"] is None:
        raise ValueError("template id cannot be None")
    if date in template["exception_dates"]:
        return
    exception_dates = sorted(template["exception_dates"] + [date])
    repository.update(owner_id, template["id"], {"exception_dates": exception_dates})
    template["exception_dates"] = exception_dates


def fork(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    template_id: EntityId,
    date: pendulum.Date,
    patch: OccurrencePatch,
) -> ConcreteRef:
    """
    Materialize one date of a template as a concrete one-off occurrence.

    Forking an already forked date patches the existing fork instead of
    creating a second one.
    """
    template = require_template(repository, owner_id, template_id)
    _require_on_cadence(template, date)

    existing_fork = find_fork(repository, owner_id, template_id, date)
    if existing_fork is None and date in template["exception_dates"]:
        raise NotFoundError(
            f"Recurring block '{template['title']}' was removed on {date_to_str(date)}"
        )

    add_exception(repository, owner_id, template, date)

    if existing_fork is not None and existing_fork["id"] is not None:
        repository.update(owner_id, existing_fork["id"], patch)
        return concrete_ref(existing_fork["id"])

    now = now_utc()
    instance = deepcopy(template)
    instance["id"] = None
    instance["date"] = date
    instance["kind"] = "one_off"
    instance["recurrence"] = None
    instance["exception_dates"] = []
    instance["overrides_template_id"] = template_id
    instance["created"] = now
    instance["updated"] = now
    instance.update(deepcopy(patch))

    instance_id = repository.insert(instance)
    logger.info(
        "Forked recurring block %s on %s into %s", template_id, date_to_str(date), instance_id
    )
    return concrete_ref(instance_id)


def apply_mutation(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    patch: OccurrencePatch,
    scope: Scope = "instance",
) -> Ref:
    """
    Apply `patch` to the occurrence behind `ref`.

    Returns the reference the caller should use for further writes to the
    same occurrence; an instance-scoped write to a virtual occurrence returns
    the reference of the new fork.
    """
    if not is_virtual(ref):
        repository.update(owner_id, ref["id"], patch)
        return ref

    if scope == "series":
        if "date" in patch:
            raise ValidationError("A recurring series cannot be moved to another date")
        template = require_template(repository, owner_id, ref["template_id"])
        _require_on_cadence(template, ref["date"])
        repository.update(owner_id, ref["template_id"], patch)
        logger.info("Updated recurring series %s", ref["template_id"])
        return ref

    return fork(repository, owner_id, ref["template_id"], ref["date"], patch)


def mutate_sub_items(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    mutator: Callable[[list[SubItem]], list[SubItem]],
    scope: Scope = "instance",
) -> Ref:
    """Fork-then-mutate entry point for every sub-item change."""
    occurrence = mutation_source(repository, owner_id, ref, scope)
    sub_items = mutator(deepcopy(occurrence["sub_items"]))
    return apply_mutation(repository, owner_id, ref, {"sub_items": sub_items}, scope)


def split_weekday_series(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    template: Occurrence,
    removed_weekday: int,
) -> list[EntityId]:
    """
    Replace a weekday series by one weekly template per remaining weekday.

    Each new template is anchored on the first date on or after the original
    anchor that falls on its weekday, and keeps the exceptions and forks that
    belong to that weekday.
    """
    if template["id"] is None:
        raise ValueError("template id cannot be None")

    forks = repository.query(owner_id, kind="one_off", template_id=template["id"])
    now = now_utc()
    new_ids: list[EntityId] = []
    for weekday in WEEKDAYS:
        if weekday == removed_weekday:
            continue

        anchor_date = next_date_on_weekday(template["date"], weekday)
        weekly = deepcopy(template)
        weekly["id"] = None
        weekly["date"] = anchor_date
        weekly["recurrence"] = {"cadence": "weekly", "anchor_date": anchor_date}
        weekly["exception_dates"] = [
            date for date in template["exception_dates"] if day_of_week(date) == weekday
        ]
        weekly["created"] = now
        weekly["updated"] = now
        weekly_id = repository.insert(weekly)
        new_ids.append(weekly_id)

        for existing_fork in forks:
            if existing_fork["id"] is not None and day_of_week(existing_fork["date"]) == weekday:
                repository.update(
                    owner_id, existing_fork["id"], {"overrides_template_id": weekly_id}
                )

    repository.delete(owner_id, template["id"])
    logger.info(
        "Split weekday series %s into %d weekly series", template["id"], len(new_ids)
    )
    return new_ids


def delete_occurrence(
    repository: OccurrenceRepository,
    owner_id: OwnerId,
    ref: Ref,
    scope: Scope = "instance",
) -> list[EntityId]:
    """
    Delete the occurrence behind `ref`.

    Returns the ids of any weekly templates created when a weekday series
    loses one of its weekdays.
    """
    if not is_virtual(ref):
        repository.delete(owner_id, ref["id"])
        return []

    template = require_template(repository, owner_id, ref["template_id"])
    _require_on_cadence(template, ref["date"])

    if scope == "instance":
        existing_fork = find_fork(repository, owner_id, ref["template_id"], ref["date"])
        add_exception(repository, owner_id, template, ref["date"])
        if existing_fork is not None and existing_fork["id"] is not None:
            repository.delete(owner_id, existing_fork["id"])
        logger.info("Removed %s", format_ref(ref))
        return []

    recurrence = template["recurrence"]
    if recurrence is not None and recurrence["cadence"] == "weekday_series":
        return split_weekday_series(
            repository, owner_id, template, day_of_week(ref["date"])
        )

    repository.delete(owner_id, ref["template_id"])
    logger.info("Deleted recurring series %s", ref["template_id"])
    return []
