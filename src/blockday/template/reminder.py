# SPDX-License-Identifier: MIT

import pendulum

from blockday.model.entity_id import OwnerId
from blockday.model.entity_type import EntityType
from blockday.model.reminder import Reminder
from blockday.time import now_utc


def get_reminder_template(owner_id: OwnerId, target_date: pendulum.Date) -> Reminder:
    return {
        "id": None,
        "entity_type": EntityType.REMINDER,
        "owner_id": owner_id,
        "title": "",
        "description": None,
        "color": "#3b82f6",
        "target_date": target_date,
        "repeat": "none",
        "created": now_utc(),
    }
