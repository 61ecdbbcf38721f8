# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypeIs, cast, get_args

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from blockday import configuration
from blockday.error import NotFoundError
from blockday.model.id_map import IdMap, IdMapDict, IdMapKind
from blockday.template.id_map import get_id_map_template

ID_MAP_KINDS = get_args(IdMapKind)


class IdMapRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._id_map: Optional[IdMap] = None
        self.is_dirty = False

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return configuration.DATA_ID_MAP_PATH

    @property
    def id_map(self) -> IdMap:
        if self._id_map is None:
            self.__load_data()
        if self._id_map is None:
            raise ValueError()
        return self._id_map

    def __load_data(self) -> None:
        if not self.path.is_file():
            self._id_map = get_id_map_template()
            return
        self._id_map = load(self.path.read_text(), Loader=Loader) or get_id_map_template()

    def __save_data(self, id_map: IdMap) -> None:
        self.path.write_text(dump(id_map, Dumper=Dumper))

    def flush(self) -> None:
        if self._id_map is not None and self.is_dirty:
            self.__save_data(self._id_map)
            self.is_dirty = False

    def clear_ids(self, kind: Optional[str] = None) -> None:
        self.is_dirty = True
        if kind is None:
            self._id_map = get_id_map_template()
            return
        if self.__narrow_to_kind(kind):
            id_map_dict = cast(IdMapDict, self.id_map)
            id_map_dict[kind] = {"synthetic_to_real": {}, "real_to_synthetic": {}}
            return
        raise TypeError(
            f"{IdMapRepository.clear_ids.__name__}: expected {', '.join(ID_MAP_KINDS)}"
        )

    def associate_id(self, kind: str, real_id: str) -> int:
        """
        Create a new synthetic id to associate with a real id
        """
        self.is_dirty = True

        if self.__narrow_to_kind(kind):
            id_map_dict = cast(IdMapDict, self.id_map)
            if real_id in id_map_dict[kind]["real_to_synthetic"].keys():
                return id_map_dict[kind]["real_to_synthetic"][real_id]

            next_id = len(id_map_dict[kind]["real_to_synthetic"].keys()) + 1
            id_map_dict[kind]["real_to_synthetic"][real_id] = next_id
            id_map_dict[kind]["synthetic_to_real"][next_id] = real_id

            return next_id
        raise TypeError(
            f"{IdMapRepository.associate_id.__name__}: expected {', '.join(ID_MAP_KINDS)}"
        )

    def get_real_id(self, kind: str, synthetic_id: int) -> str:
        """
        Get the real id associated with a synthetic id
        """
        if self.__narrow_to_kind(kind):
            id_map_dict = cast(IdMapDict, self.id_map)
            real_id = id_map_dict[kind]["synthetic_to_real"].get(synthetic_id)
            if real_id is None:
                raise NotFoundError(f"No {kind} entry numbered {synthetic_id}")
            return real_id
        raise TypeError(
            f"{IdMapRepository.get_real_id.__name__}: expected {', '.join(ID_MAP_KINDS)}"
        )

    def __narrow_to_kind(self, kind: str) -> TypeIs[IdMapKind]:
        return kind in ID_MAP_KINDS


ID_MAP_REPO = IdMapRepository()
