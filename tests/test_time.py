"""Tests for minute-of-day and calendar helpers."""

import pendulum
import pytest

from blockday.error import ValidationError
from blockday.time import (
    date_from_str,
    date_to_str,
    day_of_week,
    duration_to_display_str,
    is_weekday,
    minutes_from_hhmm,
    minutes_to_hhmm,
    next_date_on_weekday,
)

MONDAY = pendulum.date(2024, 1, 1)


class TestMinutesOfDay:
    def test_parses_hhmm(self):
        """Single and double digit hours are both accepted."""
        assert minutes_from_hhmm("8:05") == 485
        assert minutes_from_hhmm("08:05") == 485
        assert minutes_from_hhmm("23:59") == 1439
        assert minutes_from_hhmm("0:00") == 0

    @pytest.mark.parametrize("value", ["24:00", "12:60", "8.30", "", "noon"])
    def test_rejects_bad_times(self, value):
        """Out of range or malformed times raise ValidationError."""
        with pytest.raises(ValidationError):
            minutes_from_hhmm(value)

    def test_formats_hhmm(self):
        """Minutes format as zero-padded HH:mm."""
        assert minutes_to_hhmm(485) == "08:05"
        assert minutes_to_hhmm(0) == "00:00"

    def test_formats_past_midnight_wrapped(self):
        """A block ending after midnight renders on the next day's clock."""
        assert minutes_to_hhmm(1470) == "00:30"

    def test_duration_display(self):
        """Durations render as hours and minutes."""
        assert duration_to_display_str(90) == "1H 30M"
        assert duration_to_display_str(5) == "0H 5M"


class TestDates:
    def test_round_trips_iso_date(self):
        """Dates are stored as YYYY-MM-DD strings."""
        date = date_from_str("2024-01-08")
        assert date == pendulum.date(2024, 1, 8)
        assert date_to_str(date) == "2024-01-08"

    @pytest.mark.parametrize("value", ["2024-13-01", "yesterday", "08/01/2024"])
    def test_rejects_bad_dates(self, value):
        """Anything but a valid calendar date raises ValidationError."""
        with pytest.raises(ValidationError):
            date_from_str(value)

    def test_day_of_week_is_iso(self):
        """Monday is 1 and Sunday is 7."""
        assert day_of_week(MONDAY) == 1
        assert day_of_week(pendulum.date(2024, 1, 7)) == 7

    def test_is_weekday(self):
        """Saturday and Sunday are not weekdays."""
        assert is_weekday(pendulum.date(2024, 1, 5))
        assert not is_weekday(pendulum.date(2024, 1, 6))
        assert not is_weekday(pendulum.date(2024, 1, 7))

    def test_next_date_on_weekday(self):
        """The start date itself counts when it already falls on the weekday."""
        assert next_date_on_weekday(MONDAY, 1) == MONDAY
        assert next_date_on_weekday(MONDAY, 5) == pendulum.date(2024, 1, 5)
        assert next_date_on_weekday(pendulum.date(2024, 1, 3), 1) == pendulum.date(2024, 1, 8)
