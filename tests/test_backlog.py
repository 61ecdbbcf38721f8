"""Tests for backlog bookkeeping."""

import pendulum
import pytest

from blockday.error import NotFoundError, ValidationError
from blockday.service import backlog as backlog_service

OWNER = "owner-1"
TODAY = pendulum.date(2024, 1, 8)


class TestCreate:
    def test_defaults(self, backlog_repo):
        """A new item is pending, medium priority and suggestible."""
        item_id = backlog_service.create_backlog_item(backlog_repo, OWNER, "  Write report  ")

        item = backlog_repo.get(OWNER, item_id)
        assert item["title"] == "Write report"
        assert item["priority"] == "medium"
        assert item["estimated_duration"] == 30
        assert item["status"] == "pending"
        assert item["suggestible"]

    def test_validates_title(self, backlog_repo):
        """Titles shorter than two characters are rejected."""
        with pytest.raises(ValidationError):
            backlog_service.create_backlog_item(backlog_repo, OWNER, " x ")

    def test_validates_priority(self, backlog_repo):
        """Only low, medium and high are priorities."""
        with pytest.raises(ValidationError):
            backlog_service.create_backlog_item(backlog_repo, OWNER, "Report", priority="urgent")

    def test_validates_duration(self, backlog_repo):
        """Estimates under five minutes are rejected."""
        with pytest.raises(ValidationError):
            backlog_service.create_backlog_item(
                backlog_repo, OWNER, "Report", estimated_duration=4
            )

    def test_validates_sub_items(self, backlog_repo):
        """Sub-items need a title and a positive duration."""
        with pytest.raises(ValidationError):
            backlog_service.create_backlog_item(
                backlog_repo,
                OWNER,
                "Report",
                sub_items=[{"title": " ", "duration": 10, "done": False}],
            )
        with pytest.raises(ValidationError):
            backlog_service.create_backlog_item(
                backlog_repo,
                OWNER,
                "Report",
                sub_items=[{"title": "Outline", "duration": 0, "done": False}],
            )


class TestUpdate:
    def test_update(self, backlog_repo):
        """Patched fields are validated and stored."""
        item_id = backlog_service.create_backlog_item(backlog_repo, OWNER, "Report")

        backlog_service.update_backlog_item(
            backlog_repo, OWNER, item_id, {"title": "Annual report", "priority": "high"}
        )

        item = backlog_repo.get(OWNER, item_id)
        assert item["title"] == "Annual report"
        assert item["priority"] == "high"

    def test_update_rejects_bad_priority(self, backlog_repo):
        """A bad patch writes nothing."""
        item_id = backlog_service.create_backlog_item(backlog_repo, OWNER, "Report")

        with pytest.raises(ValidationError):
            backlog_service.update_backlog_item(backlog_repo, OWNER, item_id, {"priority": "asap"})
        assert backlog_repo.get(OWNER, item_id)["priority"] == "medium"

    def test_update_missing(self, backlog_repo):
        """Updating an unknown item raises NotFoundError."""
        with pytest.raises(NotFoundError):
            backlog_service.update_backlog_item(backlog_repo, OWNER, "missing", {"title": "New"})

    def test_toggle_sub_item(self, backlog_repo):
        """Toggling returns and stores the new done flag."""
        item_id = backlog_service.create_backlog_item(
            backlog_repo,
            OWNER,
            "Report",
            sub_items=[{"title": "Outline", "duration": 10, "done": False}],
        )

        assert backlog_service.toggle_backlog_sub_item(backlog_repo, OWNER, item_id, 0)
        assert backlog_repo.get(OWNER, item_id)["sub_items"][0]["done"]
        with pytest.raises(NotFoundError):
            backlog_service.toggle_backlog_sub_item(backlog_repo, OWNER, item_id, 1)

    def test_pending_items(self, backlog_repo):
        """Completed items are left out of the suggestion pool."""
        done_id = backlog_service.create_backlog_item(backlog_repo, OWNER, "Done")
        backlog_service.create_backlog_item(backlog_repo, OWNER, "Open")
        backlog_service.update_backlog_item(backlog_repo, OWNER, done_id, {"status": "completed"})

        assert [item["title"] for item in backlog_service.pending_items(backlog_repo, OWNER)] == [
            "Open"
        ]

    def test_delete(self, backlog_repo):
        """Deleted items are gone."""
        item_id = backlog_service.create_backlog_item(backlog_repo, OWNER, "Report")

        backlog_service.delete_backlog_item(backlog_repo, OWNER, item_id)

        assert backlog_repo.get(OWNER, item_id) is None


class TestDeadlineLabel:
    @pytest.mark.parametrize(
        "offset,label",
        [(-3, "overdue (3d)"), (0, "today"), (1, "tomorrow"), (5, "5 days")],
    )
    def test_labels(self, offset, label):
        """Deadlines are described relative to today."""
        assert backlog_service.deadline_label(TODAY.add(days=offset), TODAY) == label

    def test_no_deadline(self):
        """Items without a deadline say so."""
        assert backlog_service.deadline_label(None, TODAY) == "no deadline"
