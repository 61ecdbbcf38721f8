"""Tests for best-fit backlog suggestions."""

import pendulum
import pytest

from blockday.service.suggestion import best_fit, is_urgent

TODAY = pendulum.date(2024, 1, 8)


class TestBestFit:
    def test_nothing_for_empty_budget(self, make_backlog_item):
        """A zero or negative budget never suggests anything."""
        pool = [make_backlog_item(estimated_duration=5)]

        assert best_fit(pool, 0, "block", today=TODAY) is None
        assert best_fit(pool, -10, "gap", today=TODAY) is None

    def test_nothing_for_empty_pool(self):
        """An empty backlog suggests nothing."""
        assert best_fit([], 60, "block", today=TODAY) is None

    @pytest.mark.parametrize("mode", ["block", "gap"])
    def test_never_exceeds_budget(self, make_backlog_item, mode):
        """Whatever is suggested fits the budget."""
        pool = [
            make_backlog_item("Short", id="a", estimated_duration=10),
            make_backlog_item("Medium", id="b", estimated_duration=45, priority="high"),
            make_backlog_item(
                "Long",
                id="c",
                estimated_duration=120,
                sub_items=[
                    {"title": "Part one", "duration": 50, "done": False},
                    {"title": "Part two", "duration": 70, "done": False},
                ],
            ),
        ]

        for budget in range(0, 150, 5):
            suggestion = best_fit(pool, budget, mode, today=TODAY)
            if suggestion is not None:
                assert suggestion["item"]["estimated_duration"] <= budget

    def test_urgency_beats_priority(self, make_backlog_item):
        """Work due tomorrow wins over high priority work with no deadline."""
        pool = [
            make_backlog_item("Important", id="a", priority="high"),
            make_backlog_item("Due", id="b", priority="low", deadline=TODAY.add(days=1)),
        ]

        assert best_fit(pool, 60, "block", today=TODAY)["item"]["title"] == "Due"

    def test_priority_beats_duration(self, make_backlog_item):
        """Higher priority wins over a better duration fit."""
        pool = [
            make_backlog_item("Long", id="a", priority="medium", estimated_duration=55),
            make_backlog_item("High", id="b", priority="high", estimated_duration=10),
        ]

        assert best_fit(pool, 60, "block", today=TODAY)["item"]["title"] == "High"

    def test_block_prefers_longest(self, make_backlog_item):
        """Inside a block the longest fitting item fills the most time."""
        pool = [
            make_backlog_item("Short", id="a", estimated_duration=10),
            make_backlog_item("Long", id="b", estimated_duration=40),
        ]

        assert best_fit(pool, 60, "block", today=TODAY)["item"]["title"] == "Long"

    def test_gap_prefers_shortest(self, make_backlog_item):
        """In a gap the shortest fitting item is the quick win."""
        pool = [
            make_backlog_item("Short", id="a", estimated_duration=10),
            make_backlog_item("Long", id="b", estimated_duration=40),
        ]

        assert best_fit(pool, 60, "gap", today=TODAY)["item"]["title"] == "Short"

    def test_gap_tie_prefers_general(self, make_backlog_item):
        """On an exact tie in a gap, untyped work wins."""
        pool = [
            make_backlog_item("Gym prep", id="a", linked_block_type="Gym"),
            make_backlog_item("Inbox", id="b"),
        ]

        assert best_fit(pool, 60, "gap", today=TODAY)["item"]["title"] == "Inbox"

    def test_block_type_filter(self, make_backlog_item):
        """Typed work only goes into blocks of its type; general work goes anywhere."""
        typed = make_backlog_item("Stretching", id="a", linked_block_type="Gym")

        assert best_fit([typed], 60, "block", "Deep work", TODAY) is None
        assert best_fit([typed], 60, "block", "Gym", TODAY)["item"]["title"] == "Stretching"
        assert best_fit([typed], 60, "gap", "Deep work", TODAY) is not None

        general = make_backlog_item("Inbox", id="b", linked_block_type="general")
        assert best_fit([general], 60, "block", "Deep work", TODAY) is not None

    def test_splits_oversized_item(self, make_backlog_item):
        """Too long as a whole, the next pending sub-item is offered instead."""
        item = make_backlog_item(
            "Migrate database",
            id="parent",
            estimated_duration=90,
            sub_items=[
                {"title": "Backup", "duration": 30, "done": True},
                {"title": "Schema", "duration": 20, "done": False},
                {"title": "Data", "duration": 40, "done": False},
            ],
        )

        suggestion = best_fit([item], 25, "block", today=TODAY)

        assert suggestion["is_split"]
        assert suggestion["parent_id"] == "parent"
        assert suggestion["nested_index"] == 1
        assert suggestion["item"]["title"] == "Schema - Migrate database"
        assert suggestion["item"]["estimated_duration"] == 20

    def test_split_must_fit(self, make_backlog_item):
        """Only the next pending sub-item is considered, not any later one."""
        item = make_backlog_item(
            "Migrate database",
            estimated_duration=90,
            sub_items=[
                {"title": "Schema", "duration": 40, "done": False},
                {"title": "Data", "duration": 10, "done": False},
            ],
        )

        assert best_fit([item], 25, "block", today=TODAY) is None

    def test_skips_unsuggestible_and_completed(self, make_backlog_item):
        """Opted-out and finished items are never suggested."""
        pool = [
            make_backlog_item("Hidden", id="a", suggestible=False),
            make_backlog_item("Done", id="b", status="completed"),
        ]

        assert best_fit(pool, 60, "block", today=TODAY) is None


class TestIsUrgent:
    def test_due_soon(self, make_backlog_item):
        """Overdue, today and tomorrow are urgent; later is not."""
        assert is_urgent(make_backlog_item(deadline=TODAY.subtract(days=3)), TODAY)
        assert is_urgent(make_backlog_item(deadline=TODAY), TODAY)
        assert is_urgent(make_backlog_item(deadline=TODAY.add(days=1)), TODAY)
        assert not is_urgent(make_backlog_item(deadline=TODAY.add(days=2)), TODAY)
        assert not is_urgent(make_backlog_item(), TODAY)
