# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from blockday import configuration
from blockday import state as app_state
from blockday.logger import configure_logging
from blockday.model.id_map import IdMap
from blockday.repository.configuration import CONFIGURATION_REPO
from blockday.template.id_map import get_id_map_template


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    app_state.set_show_header(config["show_header"])
    app_state.set_owner_id(config["owner_id"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_ID_MAP_PATH.is_file():
        configuration.DATA_ID_MAP_PATH.touch()
        id_map: IdMap = get_id_map_template()
        configuration.DATA_ID_MAP_PATH.write_text(dump(id_map, Dumper=Dumper))

    # Directory-based entity stores (one file per entity)
    for data_dir in (
        configuration.DATA_OCCURRENCES_DIR,
        configuration.DATA_BACKLOG_DIR,
        configuration.DATA_REMINDERS_DIR,
    ):
        if not data_dir.is_dir():
            data_dir.mkdir(parents=True, exist_ok=True)
