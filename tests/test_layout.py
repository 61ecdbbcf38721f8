"""Tests for sub-item placement inside a block."""

import pytest

from blockday.service.layout import (
    Segment,
    find_leftmost_fit,
    free_minutes,
    layout,
    layout_summary,
)


def assert_no_overlaps(placed):
    for current, following in zip(placed, placed[1:]):
        assert current["computed_start"] <= following["computed_start"]
        assert current["computed_end"] <= following["computed_start"]


class TestFindLeftmostFit:
    def test_free_at_earliest(self):
        """With nothing in the way the earliest point is used."""
        assert find_leftmost_fit(0, 10, []) == 0

    def test_skips_adjacent_segments(self):
        """Touching segments are skipped one after another."""
        assert find_leftmost_fit(0, 10, [Segment(5, 15), Segment(15, 20)]) == 20

    def test_rescans_unordered_segments(self):
        """Moving past one segment can land in an earlier listed one."""
        assert find_leftmost_fit(0, 15, [Segment(20, 30), Segment(0, 10)]) == 30

    def test_fits_in_hole(self):
        """A hole large enough is used."""
        assert find_leftmost_fit(0, 10, [Segment(0, 10), Segment(25, 30)]) == 10


class TestLayout:
    def test_fills_before_pinned(self, make_occurrence, make_sub_item):
        """A unpinned 30 fits before B pinned at 09:00 in a block starting 08:30."""
        occurrence = make_occurrence(
            start_time=510,
            total_duration=60,
            sub_items=[make_sub_item("A", 30), make_sub_item("B", 20, pinned_time=540)],
        )

        placed = layout(occurrence)

        assert [p["sub_item"]["title"] for p in placed] == ["A", "B"]
        assert (placed[0]["computed_start"], placed[0]["computed_end"]) == (510, 540)
        assert (placed[1]["computed_start"], placed[1]["computed_end"]) == (540, 560)
        assert placed[0]["gap_before_minutes"] == 0
        assert placed[1]["gap_before_minutes"] == 0
        assert placed[1]["is_pinned"]
        assert not placed[0]["is_pinned"]

    def test_flows_around_pin_at_start(self, make_occurrence, make_sub_item):
        """A pin at the block start pushes unpinned work after it."""
        occurrence = make_occurrence(
            start_time=510,
            sub_items=[make_sub_item("A", 30), make_sub_item("B", 20, pinned_time=510)],
        )

        placed = layout(occurrence)

        assert [p["sub_item"]["title"] for p in placed] == ["B", "A"]
        assert placed[1]["computed_start"] == 530

    def test_keeps_list_indexes(self, make_occurrence, make_sub_item):
        """Placed items remember their position in the sub-item list."""
        occurrence = make_occurrence(
            start_time=510,
            sub_items=[make_sub_item("A", 30), make_sub_item("B", 20, pinned_time=510)],
        )

        assert [p["index"] for p in layout(occurrence)] == [1, 0]

    def test_reports_gaps(self, make_occurrence, make_sub_item):
        """Free time before a later pin is reported as a gap."""
        occurrence = make_occurrence(
            start_time=510,
            total_duration=90,
            sub_items=[make_sub_item("A", 20), make_sub_item("B", 20, pinned_time=560)],
        )

        summary = layout_summary(occurrence)

        assert summary["placed"][1]["gap_before_minutes"] == 30
        assert summary["total_gap_minutes"] == 30
        assert summary["needed_duration"] == 70
        assert summary["flow_end"] == 580

    def test_overflow_is_flagged(self, make_occurrence, make_sub_item):
        """Work past the block end is marked and the block is over capacity."""
        occurrence = make_occurrence(
            start_time=540,
            total_duration=60,
            sub_items=[make_sub_item("A", 40), make_sub_item("B", 40)],
        )

        summary = layout_summary(occurrence)

        assert not summary["placed"][0]["is_past_block_end"]
        assert summary["placed"][1]["is_past_block_end"]
        assert summary["is_over_capacity"]
        assert free_minutes(occurrence) == 0

    def test_empty_block(self, make_occurrence):
        """A block without sub-items needs nothing."""
        summary = layout_summary(make_occurrence())

        assert summary["placed"] == []
        assert summary["needed_duration"] == 0
        assert free_minutes(make_occurrence()) == 60

    @pytest.mark.parametrize(
        "pins",
        [
            [None, None, None],
            [None, 560, None],
            [600, None, 540],
            [None, 545, 575],
        ],
    )
    def test_never_overlaps(self, make_occurrence, make_sub_item, pins):
        """No two placed sub-items share a minute."""
        durations = [25, 15, 20]
        sub_items = [
            make_sub_item(f"item {index}", duration, pinned_time=pin)
            for index, (duration, pin) in enumerate(zip(durations, pins))
        ]
        occurrence = make_occurrence(start_time=540, total_duration=90, sub_items=sub_items)

        placed = layout(occurrence)

        assert len(placed) == 3
        assert_no_overlaps(placed)
