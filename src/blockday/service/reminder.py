# SPDX-License-Identifier: MIT

from typing import Optional, get_args

import pendulum

from blockday.error import ValidationError
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.reminder import Reminder, RepeatPattern
from blockday.repository.reminder import ReminderRepository
from blockday.service.backlog import validate_title
from blockday.template.reminder import get_reminder_template
from blockday.time import day_of_week

REPEAT_PATTERNS: tuple[str, ...] = get_args(RepeatPattern)


def reminder_matches(reminder: Reminder, date: pendulum.Date) -> bool:
    target_date = reminder["target_date"]
    repeat = reminder["repeat"]
    if repeat == "none":
        return date == target_date
    if date < target_date:
        return False
    if repeat == "daily":
        return True
    if repeat == "weekly":
        return day_of_week(date) == day_of_week(target_date)
    if repeat == "monthly":
        return date.day == target_date.day
    return False


def reminders_for_date(reminders: list[Reminder], date: pendulum.Date) -> list[Reminder]:
    return [reminder for reminder in reminders if reminder_matches(reminder, date)]


def create_reminder(
    repository: ReminderRepository,
    owner_id: OwnerId,
    title: str,
    target_date: pendulum.Date,
    repeat: str = "none",
    description: Optional[str] = None,
    color: Optional[str] = None,
) -> EntityId:
    if repeat not in REPEAT_PATTERNS:
        raise ValidationError(
            f"Repeat must be one of {', '.join(REPEAT_PATTERNS)}, got '{repeat}'"
        )

    reminder = get_reminder_template(owner_id, target_date)
    reminder["title"] = validate_title(title)
    reminder["repeat"] = repeat  # type: ignore[typeddict-item]
    reminder["description"] = description
    if color is not None:
        reminder["color"] = color
    return repository.insert(reminder)


def delete_reminder(repository: ReminderRepository, owner_id: OwnerId, reminder_id: EntityId) -> None:
    repository.delete(owner_id, reminder_id)
