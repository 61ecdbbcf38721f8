# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "blockday"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_OCCURRENCES_DIR: Path = DATA_PATH / "occurrences"
DATA_BACKLOG_DIR: Path = DATA_PATH / "backlog"
DATA_REMINDERS_DIR: Path = DATA_PATH / "reminders"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"


class Configuration(TypedDict):
    owner_id: str
    data_path: Optional[str]
    show_header: bool
    log_level: str
    default_block_color: str
    default_block_icon: str
    default_backlog_color: str
    minimum_block_duration: int
    default_backlog_duration: int
    minimum_gap_minutes: int
    focus_goal_minutes: NotRequired[int]
    daily_block_goal: NotRequired[int]


def get_default_configuration() -> Configuration:
    return {
        "owner_id": "local",
        "data_path": None,
        "show_header": True,
        "log_level": "WARNING",
        "default_block_color": "#3b82f6",
        "default_block_icon": "zap",
        "default_backlog_color": "#27272a",
        "minimum_block_duration": 5,
        "default_backlog_duration": 30,
        "minimum_gap_minutes": 5,
        "focus_goal_minutes": 360,
        "daily_block_goal": 4,
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_OCCURRENCES_DIR, DATA_BACKLOG_DIR, DATA_REMINDERS_DIR
    global DATA_ID_MAP_PATH

    DATA_PATH = data_path
    DATA_OCCURRENCES_DIR = DATA_PATH / "occurrences"
    DATA_BACKLOG_DIR = DATA_PATH / "backlog"
    DATA_REMINDERS_DIR = DATA_PATH / "reminders"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories load their data.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
