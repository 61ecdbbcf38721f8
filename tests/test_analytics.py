"""Tests for the daily efficiency scores."""

from blockday.service.analytics import efficiency_stats


def scores(stats):
    return {stat["subject"]: stat["score"] for stat in stats}


class TestEfficiencyStats:
    def test_empty_day(self):
        """No blocks: no focus, no consistency, neutral output."""
        assert scores(efficiency_stats([])) == {"focus": 0, "consistency": 0, "output": 50}

    def test_blocks_without_sub_items(self, make_occurrence):
        """Output is zero when blocks exist but hold no sub-items."""
        assert scores(efficiency_stats([make_occurrence(540, 60)]))["output"] == 0

    def test_scores(self, make_occurrence, make_sub_item):
        """Scores are percentages of the goals and of sub-items done."""
        occurrences = [
            make_occurrence(
                540, 90, sub_items=[make_sub_item("A", 10, done=True), make_sub_item("B", 10)]
            ),
            make_occurrence(660, 90, sub_items=[make_sub_item("C", 10), make_sub_item("D", 10)]),
        ]

        stats = efficiency_stats(occurrences)

        assert scores(stats) == {"focus": 50, "consistency": 50, "output": 25}
        assert all(stat["full_mark"] == 100 for stat in stats)

    def test_capped_at_full_mark(self, make_occurrence):
        """Exceeding a goal scores 100."""
        occurrences = [make_occurrence(60 * hour, 60) for hour in range(8)]

        result = scores(efficiency_stats(occurrences))

        assert result["focus"] == 100
        assert result["consistency"] == 100

    def test_rounding(self, make_occurrence, make_sub_item):
        """Scores round half up to whole percentages."""
        one_of_three = [
            make_occurrence(
                540,
                60,
                sub_items=[
                    make_sub_item("A", 10, done=True),
                    make_sub_item("B", 10),
                    make_sub_item("C", 10),
                ],
            )
        ]
        two_of_three = [
            make_occurrence(
                540,
                60,
                sub_items=[
                    make_sub_item("A", 10, done=True),
                    make_sub_item("B", 10, done=True),
                    make_sub_item("C", 10),
                ],
            )
        ]

        assert scores(efficiency_stats(one_of_three))["output"] == 33
        assert scores(efficiency_stats(two_of_three))["output"] == 67

    def test_custom_goals(self, make_occurrence):
        """Goals come from configuration."""
        result = scores(
            efficiency_stats([make_occurrence(540, 60)], focus_goal_minutes=120, daily_block_goal=2)
        )

        assert result["focus"] == 50
        assert result["consistency"] == 50
