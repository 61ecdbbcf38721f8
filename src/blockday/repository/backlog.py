# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any, Optional, cast

from blockday import configuration, time
from blockday.model.backlog_item import BacklogItem, BacklogItemPatch
from blockday.model.entity_id import EntityId, OwnerId
from blockday.model.occurrence import Status
from blockday.repository.entity import EntityRepository


class BacklogRepository(EntityRepository):
    entity_name = "backlog item"

    def _default_data_dir(self) -> Path:
        return configuration.DATA_BACKLOG_DIR

    def _serialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        entity["deadline"] = time.date_to_str_optional(entity["deadline"])
        entity["created"] = time.datetime_to_iso_str(entity["created"])
        entity["updated"] = time.datetime_to_iso_str(entity["updated"])
        return entity

    def _deserialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        entity["deadline"] = time.date_from_str_optional(entity.get("deadline"))
        entity["created"] = time.datetime_from_str(entity["created"])
        entity["updated"] = time.datetime_from_str(entity["updated"])
        entity["sub_items"] = entity.get("sub_items") or []
        # Migration: items written before suggestible existed are suggestible
        entity.setdefault("suggestible", True)
        return entity

    def get(self, owner_id: OwnerId, id: EntityId) -> Optional[BacklogItem]:
        return cast(Optional[BacklogItem], self._get(owner_id, id))

    def query(
        self, owner_id: OwnerId, status: Optional[Status] = None
    ) -> list[BacklogItem]:
        filters: dict[str, Any] = {}
        if status is not None:
            filters["status"] = status
        items = cast(list[BacklogItem], self._query(owner_id, **filters))
        # Newest first
        return sorted(items, key=lambda item: item["created"], reverse=True)

    def insert(self, item: BacklogItem) -> EntityId:
        return self._insert(cast(dict[str, Any], item))

    def update(self, owner_id: OwnerId, id: EntityId, patch: BacklogItemPatch) -> None:
        self._update(owner_id, id, patch)


BACKLOG_REPO = BacklogRepository()
