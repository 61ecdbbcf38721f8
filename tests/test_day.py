"""Tests for assembling a day: gaps and fill suggestions."""

import pendulum

from blockday.model.ref import concrete_ref
from blockday.service.day import build_day_plan, find_gaps

OWNER = "owner-1"
MONDAY = pendulum.date(2024, 1, 1)


def resolved(*occurrences):
    return [
        {"ref": concrete_ref(f"block-{index}"), "occurrence": occurrence}
        for index, occurrence in enumerate(occurrences)
    ]


class TestFindGaps:
    def test_gap_between_blocks(self, make_occurrence):
        """Free time between two blocks is a gap."""
        gaps = find_gaps(
            resolved(make_occurrence(540, 60), make_occurrence(660, 60, title="Review"))
        )

        assert gaps == [(600, 60)]

    def test_short_gaps_are_ignored(self, make_occurrence):
        """Gaps under the minimum are not reported."""
        occurrences = resolved(make_occurrence(540, 60), make_occurrence(603, 60))

        assert find_gaps(occurrences) == []
        assert find_gaps(occurrences, minimum_gap_minutes=3) == [(600, 3)]

    def test_contained_block(self, make_occurrence):
        """A block inside a longer one does not open a gap."""
        gaps = find_gaps(
            resolved(
                make_occurrence(540, 180),
                make_occurrence(600, 30),
                make_occurrence(750, 30),
            )
        )

        assert gaps == [(720, 30)]

    def test_no_blocks(self):
        """An empty day has no gaps between blocks."""
        assert find_gaps([]) == []


class TestBuildDayPlan:
    def test_plan(self, occurrence_repo, backlog_repo, make_occurrence, make_backlog_item):
        """Blocks carry their layout and suggestion; gaps carry theirs."""
        occurrence_repo.insert(make_occurrence(540, 60))
        occurrence_repo.insert(make_occurrence(660, 60, title="Review"))
        backlog_repo.insert(make_backlog_item("Read paper", estimated_duration=45))

        plan = build_day_plan(occurrence_repo, backlog_repo, OWNER, MONDAY, today=MONDAY)

        assert plan["date"] == MONDAY
        assert [entry["occurrence"]["title"] for entry in plan["entries"]] == [
            "Deep work",
            "Review",
        ]
        assert plan["entries"][0]["layout"]["needed_duration"] == 0
        assert plan["entries"][0]["suggestion"]["item"]["title"] == "Read paper"
        assert [(gap["start"], gap["duration"]) for gap in plan["gaps"]] == [(600, 60)]
        assert plan["gaps"][0]["suggestion"]["item"]["title"] == "Read paper"

    def test_full_block_has_no_suggestion(
        self, occurrence_repo, backlog_repo, make_occurrence, make_sub_item, make_backlog_item
    ):
        """A block whose sub-items fill it is not offered more work."""
        occurrence_repo.insert(make_occurrence(540, 60, sub_items=[make_sub_item("Email", 60)]))
        backlog_repo.insert(make_backlog_item("Read paper", estimated_duration=10))

        plan = build_day_plan(occurrence_repo, backlog_repo, OWNER, MONDAY, today=MONDAY)

        assert plan["entries"][0]["suggestion"] is None

    def test_completed_block_has_no_suggestion(
        self, occurrence_repo, backlog_repo, make_occurrence, make_backlog_item
    ):
        """Completed blocks are not offered more work."""
        occurrence_repo.insert(make_occurrence(540, 60, status="completed"))
        backlog_repo.insert(make_backlog_item("Read paper", estimated_duration=10))

        plan = build_day_plan(occurrence_repo, backlog_repo, OWNER, MONDAY, today=MONDAY)

        assert plan["entries"][0]["suggestion"] is None

    def test_block_type_follows_title(
        self, occurrence_repo, backlog_repo, make_occurrence, make_backlog_item
    ):
        """Typed work is only offered to blocks of that type."""
        occurrence_repo.insert(make_occurrence(540, 60, title="Gym"))
        backlog_repo.insert(
            make_backlog_item("Write chapter", estimated_duration=30, linked_block_type="Writing")
        )

        plan = build_day_plan(occurrence_repo, backlog_repo, OWNER, MONDAY, today=MONDAY)

        assert plan["entries"][0]["suggestion"] is None

    def test_minimum_gap(self, occurrence_repo, backlog_repo, make_occurrence):
        """The minimum gap length is configurable."""
        occurrence_repo.insert(make_occurrence(540, 60))
        occurrence_repo.insert(make_occurrence(610, 60))

        assert build_day_plan(occurrence_repo, backlog_repo, OWNER, MONDAY, today=MONDAY)[
            "gaps"
        ] != []
        assert (
            build_day_plan(
                occurrence_repo,
                backlog_repo,
                OWNER,
                MONDAY,
                minimum_gap_minutes=15,
                today=MONDAY,
            )["gaps"]
            == []
        )
