# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from blockday.model.entity_id import EntityId, OwnerId

RepeatPattern = Literal["none", "daily", "weekly", "monthly"]


class Reminder(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    owner_id: OwnerId
    title: str
    description: Optional[str]
    color: Optional[str]
    target_date: pendulum.Date
    repeat: RepeatPattern
    created: pendulum.DateTime
