# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any, Optional, cast

from blockday import configuration, time
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.reminder import Reminder
from blockday.repository.entity import EntityRepository


class ReminderRepository(EntityRepository):
    entity_name = "reminder"

    def _default_data_dir(self) -> Path:
        return configuration.DATA_REMINDERS_DIR

    def _serialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        entity["target_date"] = time.date_to_str(entity["target_date"])
        entity["created"] = time.datetime_to_iso_str(entity["created"])
        entity.pop("updated", None)
        return entity

    def _deserialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        entity["target_date"] = time.date_from_str(entity["target_date"])
        entity["created"] = time.datetime_from_str(entity["created"])
        return entity

    def get(self, owner_id: OwnerId, id: EntityId) -> Optional[Reminder]:
        return cast(Optional[Reminder], self._get(owner_id, id))

    def query(self, owner_id: OwnerId) -> list[Reminder]:
        return cast(list[Reminder], self._query(owner_id))

    def insert(self, reminder: Reminder) -> EntityId:
        return self._insert(cast(dict[str, Any], reminder))


REMINDER_REPO = ReminderRepository()
