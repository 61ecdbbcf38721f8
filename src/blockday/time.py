# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast

import pendulum

from blockday.error import ValidationError

MINUTES_PER_DAY = 1440

_HHMM_P = re.compile(r"^(\d{1,2}):(\d{2})$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def minutes_from_hhmm(time_str: str) -> int:
    """
    Parse a time string in (H)H:mm format into a minute-of-day.

    Raises:
        ValidationError: If the format is wrong or hour/minute are out of range
    """
    time_match = _HHMM_P.match(time_str.strip())
    if not time_match:
        raise ValidationError(
            f"Time must be in HH:mm format (e.g., 8:00 or 17:30), got '{time_str}'"
        )

    hour = int(time_match.group(1))
    minute = int(time_match.group(2))

    if hour < 0 or hour > 23:
        raise ValidationError(f"Hour must be between 0 and 23, got {hour}")
    if minute < 0 or minute > 59:
        raise ValidationError(f"Minute must be between 0 and 59, got {minute}")

    return hour * 60 + minute


def minutes_from_hhmm_optional(time_str: Optional[str]) -> Optional[int]:
    if time_str is None:
        return None
    return minutes_from_hhmm(time_str)


def minutes_to_hhmm(minute_of_day: int) -> str:
    # Values past midnight wrap, so a block ending at 24:30 renders as 00:30
    wrapped = minute_of_day % MINUTES_PER_DAY
    return f"{wrapped // 60:02d}:{wrapped % 60:02d}"


def minutes_to_hhmm_optional(minute_of_day: Optional[int]) -> Optional[str]:
    if minute_of_day is None:
        return None
    return minutes_to_hhmm(minute_of_day)


def is_valid_minute_of_day(minute_of_day: int) -> bool:
    return 0 <= minute_of_day < MINUTES_PER_DAY


def duration_to_display_str(minutes: int) -> str:
    return f"{minutes // 60}H {minutes % 60}M"


def date_to_str(date: pendulum.Date) -> str:
    return date.isoformat()


def date_to_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a pendulum.Date."""
    try:
        parsed = pendulum.parse(date_str.strip(), exact=True)
    except ValueError:
        raise ValidationError(f"Date must be in YYYY-MM-DD format, got '{date_str}'")
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if not isinstance(parsed, pendulum.Date):
        raise ValidationError(f"Date must be in YYYY-MM-DD format, got '{date_str}'")
    return parsed


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_str(date_str)


def day_of_week(date: pendulum.Date) -> int:
    """ISO day of week: Monday is 1, Sunday is 7."""
    return date.isoweekday()


def is_weekday(date: pendulum.Date) -> bool:
    return day_of_week(date) <= 5


def next_date_on_weekday(start: pendulum.Date, iso_weekday: int) -> pendulum.Date:
    """First date on or after `start` that falls on `iso_weekday`."""
    offset = (iso_weekday - day_of_week(start)) % 7
    return start.add(days=offset)


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")
