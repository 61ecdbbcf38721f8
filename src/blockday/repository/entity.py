# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping, Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from blockday import time
from blockday.error import NotFoundError, StorageError
from blockday.model.entity_id import EntityId, OwnerId, generate_entity_id

logger = logging.getLogger(__name__)


class EntityRepository:
    """
    Owner-scoped key-value store keeping one YAML file per entity.

    Entities are loaded lazily on first access and written back on flush();
    only entities touched since the last flush are rewritten.
    """

    entity_name = "entity"

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = data_dir
        self._entities: Optional[list[dict[str, Any]]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        return self._default_data_dir()

    def _default_data_dir(self) -> Path:
        raise NotImplementedError()

    def _serialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        return entity

    def _deserialize(self, entity: dict[str, Any]) -> dict[str, Any]:
        return entity

    @property
    def entities(self) -> list[dict[str, Any]]:
        if self._entities is None:
            self.__load_data()
        if self._entities is None:
            raise ValueError()
        return self._entities

    def __load_data(self) -> None:
        entities: list[dict[str, Any]] = []
        if self.data_dir.is_dir():
            for file_path in sorted(self.data_dir.iterdir()):
                if file_path.suffix != ".yaml":
                    continue
                try:
                    raw_entity = load(file_path.read_text(), Loader=Loader)
                    if raw_entity is not None:
                        entities.append(self._deserialize(raw_entity))
                except (OSError, YAMLError, KeyError, ValueError) as e:
                    logger.error("Failed to load %s from %s: %s", self.entity_name, file_path, e)
                    raise StorageError(
                        f"Failed to load {self.entity_name} from {file_path}: {e}"
                    ) from e
        self._entities = entities

    def __save_data(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)

            # Write dirty entities
            for entity in self.entities:
                if entity["id"] in self._dirty_ids:
                    serializable_entity = self._serialize(deepcopy(entity))
                    file_path = self.data_dir / f"{entity['id']}.yaml"
                    file_path.write_text(dump(serializable_entity, Dumper=Dumper))

            # Remove hard-deleted entity files
            for entity_id in self._deleted_ids:
                file_path = self.data_dir / f"{entity_id}.yaml"
                if file_path.exists():
                    file_path.unlink()
        except (OSError, YAMLError) as e:
            logger.error("Failed to save %s data to %s: %s", self.entity_name, self.data_dir, e)
            raise StorageError(f"Failed to save {self.entity_name} data: {e}") from e

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._entities is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def _find(self, owner_id: OwnerId, id: EntityId) -> Optional[dict[str, Any]]:
        for entity in self.entities:
            if entity["id"] == id and entity["owner_id"] == owner_id:
                return entity
        return None

    def _require(self, owner_id: OwnerId, id: EntityId) -> dict[str, Any]:
        entity = self._find(owner_id, id)
        if entity is None:
            raise NotFoundError(f"No {self.entity_name} with id '{id}'")
        return entity

    def _get(self, owner_id: OwnerId, id: EntityId) -> Optional[dict[str, Any]]:
        entity = self._find(owner_id, id)
        if entity is None:
            return None
        return deepcopy(entity)

    def _query(self, owner_id: OwnerId, **filters: Any) -> list[dict[str, Any]]:
        return [
            deepcopy(entity)
            for entity in self.entities
            if entity["owner_id"] == owner_id
            and all(entity[key] == value for key, value in filters.items())
        ]

    def _insert(self, entity: dict[str, Any]) -> EntityId:
        self.is_dirty = True

        entity["id"] = generate_entity_id()
        self.entities.append(deepcopy(entity))
        self._dirty_ids.add(entity["id"])

        return entity["id"]

    def _update(
        self, owner_id: OwnerId, id: EntityId, patch: Mapping[str, Any]
    ) -> None:
        entity = self._require(owner_id, id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        for key, value in patch.items():
            entity[key] = deepcopy(value)
        entity["updated"] = time.now_utc()

    def delete(self, owner_id: OwnerId, id: EntityId) -> None:
        entity = self._require(owner_id, id)

        self.is_dirty = True
        self._deleted_ids.add(id)
        self._dirty_ids.discard(id)
        self._entities = [e for e in self.entities if e is not entity]
