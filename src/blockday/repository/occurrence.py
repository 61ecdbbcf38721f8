# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any, Optional, cast

import pendulum

from blockday import configuration, time
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.occurrence import (
    Occurrence,
    OccurrenceKind,
    OccurrencePatch,
)
from blockday.repository.entity import EntityRepository


class OccurrenceRepository(EntityRepository):
    entity_name = "occurrence"

    def _default_data_dir(self) -> Path:
        return configuration.DATA_OCCURRENCES_DIR

    def _serialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        entity["date"] = time.date_to_str(entity["date"])
        entity["created"] = time.datetime_to_iso_str(entity["created"])
        entity["updated"] = time.datetime_to_iso_str(entity["updated"])
        entity["exception_dates"] = sorted(
            time.date_to_str(date) for date in entity["exception_dates"]
        )
        if entity["recurrence"] is not None:
            entity["recurrence"]["anchor_date"] = time.date_to_str(
                entity["recurrence"]["anchor_date"]
            )
        for sub_item in entity["sub_items"]:
            sub_item["deadline"] = time.date_to_str_optional(sub_item.get("deadline"))
        return entity

    def _deserialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        entity["date"] = time.date_from_str(entity["date"])
        entity["created"] = time.datetime_from_str(entity["created"])
        entity["updated"] = time.datetime_from_str(entity["updated"])
        entity["exception_dates"] = [
            time.date_from_str(date) for date in entity.get("exception_dates") or []
        ]
        if entity.get("recurrence") is not None:
            entity["recurrence"]["anchor_date"] = time.date_from_str(
                entity["recurrence"]["anchor_date"]
            )
        else:
            entity["recurrence"] = None
        entity["sub_items"] = entity.get("sub_items") or []
        for sub_item in entity["sub_items"]:
            sub_item["deadline"] = time.date_from_str_optional(sub_item.get("deadline"))
            sub_item.setdefault("description", None)
            sub_item.setdefault("color", None)
            sub_item.setdefault("suggestible", True)
        entity.setdefault("overrides_template_id", None)
        return entity

    def get(self, owner_id: OwnerId, id: EntityId) -> Optional[Occurrence]:
        return cast(Optional[Occurrence], self._get(owner_id, id))

    def query(
        self,
        owner_id: OwnerId,
        date: Optional[pendulum.Date] = None,
        kind: Optional[OccurrenceKind] = None,
        template_id: Optional[EntityId] = None,
    ) -> list[Occurrence]:
        """Owner-scoped range scan; template_id matches forks of that template."""
        filters: dict[str, Any] = {}
        if date is not None:
            filters["date"] = date
        if kind is not None:
            filters["kind"] = kind
        if template_id is not None:
            filters["overrides_template_id"] = template_id
        return cast(list[Occurrence], self._query(owner_id, **filters))

    def insert(self, occurrence: Occurrence) -> EntityId:
        return self._insert(cast(dict[str, Any], occurrence))

    def update(self, owner_id: OwnerId, id: EntityId, patch: OccurrencePatch) -> None:
        self._update(owner_id, id, patch)


OCCURRENCE_REPO = OccurrenceRepository()
