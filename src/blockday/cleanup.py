# SPDX-License-Identifier: MIT

import atexit
import logging

from blockday.error import StorageError
from blockday.repository.backlog import BACKLOG_REPO
from blockday.repository.configuration import CONFIGURATION_REPO
from blockday.repository.id_map import ID_MAP_REPO
from blockday.repository.occurrence import OCCURRENCE_REPO
from blockday.repository.reminder import REMINDER_REPO

logger = logging.getLogger(__name__)


def flush() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()

    # Entity repositories
    try:
        OCCURRENCE_REPO.flush()
        BACKLOG_REPO.flush()
        REMINDER_REPO.flush()
    except StorageError as e:
        logger.error("Changes could not be saved: %s", e.message)
        raise


def register_cleanup() -> None:
    atexit.register(flush)
