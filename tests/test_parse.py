"""Tests for command-line argument parsing."""

import pytest
import typer

from blockday.terminal.parse import parse_date, parse_duration, parse_sub_item, parse_time
from blockday.time import today_local


class TestParseDuration:
    @pytest.mark.parametrize(
        "value,minutes",
        [("90", 90), (45, 45), ("1:30", 90), ("1h30m", 90), ("2h", 120), ("15m", 15)],
    )
    def test_formats(self, value, minutes):
        """Plain minutes, HH:mm and h/m notation are accepted."""
        assert parse_duration(value) == minutes

    @pytest.mark.parametrize("value", ["", "abc", "1:3", "h"])
    def test_invalid(self, value):
        """Anything else is a bad parameter."""
        with pytest.raises(typer.BadParameter):
            parse_duration(value)

    def test_none(self):
        """A missing option stays missing."""
        assert parse_duration(None) is None


class TestParseTime:
    def test_valid(self):
        """Times become minutes after midnight."""
        assert parse_time("8:05") == 485
        assert parse_time("23:59") == 1439

    @pytest.mark.parametrize("value", ["24:00", "7:60", "noon"])
    def test_invalid(self, value):
        """Out-of-range or malformed times are rejected."""
        with pytest.raises(typer.BadParameter):
            parse_time(value)


class TestParseDate:
    def test_iso(self):
        """Dates in YYYY-MM-DD form parse as-is."""
        assert parse_date("2024-01-01").isoformat() == "2024-01-01"

    def test_relative(self):
        """Words and day offsets are relative to today."""
        today = today_local()

        assert parse_date("t") == today
        assert parse_date("tomorrow") == today.add(days=1)
        assert parse_date("y") == today.subtract(days=1)
        assert parse_date("-3") == today.subtract(days=3)

    @pytest.mark.parametrize("value", ["2024-13-01", "someday"])
    def test_invalid(self, value):
        """Impossible dates and unknown words are rejected."""
        with pytest.raises(typer.BadParameter):
            parse_date(value)


class TestParseSubItem:
    def test_title_and_duration(self):
        """The last colon separates the title from the duration."""
        assert parse_sub_item("Email:15") == ("Email", 15)
        assert parse_sub_item("Call re: budget:1h") == ("Call re: budget", 60)

    @pytest.mark.parametrize("value", ["Email", ":15", "Email:soon"])
    def test_invalid(self, value):
        """A title and a duration are both required."""
        with pytest.raises(typer.BadParameter):
            parse_sub_item(value)
