# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from blockday import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Migration: back-fill any keys added after the file was written
        defaults = configuration.get_default_configuration()
        for key, value in defaults.items():
            if key not in self._config:
                cast(dict[str, object], self._config)[key] = value

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        owner_id: Optional[str] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
        default_block_color: Optional[str] = None,
        default_block_icon: Optional[str] = None,
        default_backlog_color: Optional[str] = None,
        minimum_block_duration: Optional[int] = None,
        default_backlog_duration: Optional[int] = None,
        minimum_gap_minutes: Optional[int] = None,
        focus_goal_minutes: Optional[int] = None,
        daily_block_goal: Optional[int] = None,
    ) -> None:
        self.is_dirty = True

        if owner_id is not None:
            self.config["owner_id"] = owner_id
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if default_block_color is not None:
            self.config["default_block_color"] = default_block_color
        if default_block_icon is not None:
            self.config["default_block_icon"] = default_block_icon
        if default_backlog_color is not None:
            self.config["default_backlog_color"] = default_backlog_color
        if minimum_block_duration is not None:
            self.config["minimum_block_duration"] = minimum_block_duration
        if default_backlog_duration is not None:
            self.config["default_backlog_duration"] = default_backlog_duration
        if minimum_gap_minutes is not None:
            self.config["minimum_gap_minutes"] = minimum_gap_minutes
        if focus_goal_minutes is not None:
            self.config["focus_goal_minutes"] = focus_goal_minutes
        if daily_block_goal is not None:
            self.config["daily_block_goal"] = daily_block_goal


CONFIGURATION_REPO = ConfigurationRepository()
