"""
Shared fixtures.

Every repository is backed by its own directory under pytest's tmp_path, so
tests never touch the user's data directory.
"""

from typing import Optional

import pendulum
import pytest

from blockday.model.backlog_item import BacklogItem, BacklogSubItem
from blockday.model.occurrence import Occurrence, SubItem
from blockday.repository.backlog import BacklogRepository
from blockday.repository.id_map import IdMapRepository
from blockday.repository.occurrence import OccurrenceRepository
from blockday.repository.reminder import ReminderRepository
from blockday.template.backlog_item import get_backlog_item_template
from blockday.template.occurrence import get_occurrence_template, get_sub_item_template

OWNER = "owner-1"
OTHER_OWNER = "owner-2"

# 2024-01-01 is a Monday
MONDAY = pendulum.date(2024, 1, 1)


# =============================================================================
# REPOSITORIES
# =============================================================================


@pytest.fixture
def occurrence_repo(tmp_path):
    """Occurrence store in a temporary directory."""
    return OccurrenceRepository(tmp_path / "occurrences")


@pytest.fixture
def backlog_repo(tmp_path):
    """Backlog store in a temporary directory."""
    return BacklogRepository(tmp_path / "backlog")


@pytest.fixture
def reminder_repo(tmp_path):
    """Reminder store in a temporary directory."""
    return ReminderRepository(tmp_path / "reminders")


@pytest.fixture
def id_map_repo(tmp_path):
    """Id map stored in a temporary file."""
    return IdMapRepository(tmp_path / "id_map.yaml")


# =============================================================================
# FACTORIES
# =============================================================================


@pytest.fixture
def make_sub_item():
    """Build a block sub-item."""

    def _make(
        title: str, duration: int, pinned_time: Optional[int] = None, done: bool = False
    ) -> SubItem:
        sub_item = get_sub_item_template(title, duration)
        sub_item["pinned_time"] = pinned_time
        sub_item["done"] = done
        return sub_item

    return _make


@pytest.fixture
def make_occurrence():
    """Build an unsaved one-off occurrence."""

    def _make(
        start_time: int = 540,
        total_duration: int = 60,
        sub_items: Optional[list[SubItem]] = None,
        title: str = "Deep work",
        date: pendulum.Date = MONDAY,
        status: str = "pending",
    ) -> Occurrence:
        occurrence = get_occurrence_template(OWNER, date)
        occurrence["title"] = title
        occurrence["start_time"] = start_time
        occurrence["total_duration"] = total_duration
        occurrence["sub_items"] = sub_items or []
        occurrence["status"] = status  # type: ignore[typeddict-item]
        return occurrence

    return _make


@pytest.fixture
def make_backlog_item():
    """Build an unsaved backlog item with a fixed id."""

    def _make(
        title: str = "Write report",
        id: str = "item-1",
        priority: str = "medium",
        estimated_duration: int = 30,
        linked_block_type: Optional[str] = None,
        deadline: Optional[pendulum.Date] = None,
        sub_items: Optional[list[BacklogSubItem]] = None,
        suggestible: bool = True,
        status: str = "pending",
    ) -> BacklogItem:
        item = get_backlog_item_template(OWNER)
        item["id"] = id
        item["title"] = title
        item["priority"] = priority  # type: ignore[typeddict-item]
        item["estimated_duration"] = estimated_duration
        item["linked_block_type"] = linked_block_type
        item["deadline"] = deadline
        item["sub_items"] = sub_items or []
        item["suggestible"] = suggestible
        item["status"] = status  # type: ignore[typeddict-item]
        return item

    return _make
