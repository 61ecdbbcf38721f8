# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from blockday.error import BlockdayError
from blockday.model.ref import Ref, parse_ref
from blockday.repository.id_map import ID_MAP_REPO
from blockday.time import date_from_str, minutes_from_hhmm, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param)

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except BlockdayError as e:
            raise typer.BadParameter(e.message)

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return today_local().add(days=int(date))

    if date == "today" or date == "t":
        return today_local()
    if date == "yesterday" or date == "y":
        return today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today_local().add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_time(time_param: Optional[str]) -> Optional[int]:
    """
    Parse a time string in (H)H:mm format into minutes after midnight.

    Raises:
        typer.BadParameter: If the time format is invalid or values are out of range
    """
    if time_param is None:
        return None

    try:
        return minutes_from_hhmm(time_param)
    except BlockdayError as e:
        raise typer.BadParameter(e.message)


def parse_duration(duration_param: Optional[str | int]) -> Optional[int]:
    """Minutes from "90", "1:30" or "1h30m"."""
    if duration_param is None:
        return None

    duration = str(duration_param).strip().lower()

    if re.match(r"^\d+$", duration):
        return int(duration)

    hhmm_match = re.match(r"^(\d+):(\d{2})$", duration)
    if hhmm_match:
        return int(hhmm_match.group(1)) * 60 + int(hhmm_match.group(2))

    hm_match = re.match(r"^(?:(\d+)h)?\s*(?:(\d+)m)?$", duration)
    if hm_match and (hm_match.group(1) or hm_match.group(2)):
        return int(hm_match.group(1) or 0) * 60 + int(hm_match.group(2) or 0)

    raise typer.BadParameter(
        f"Duration must be minutes, HH:mm or like 1h30m, got '{duration_param}'"
    )


def parse_sub_item(sub_item_param: str) -> tuple[str, int]:
    """Split "title:duration" into its parts."""
    title, separator, duration = sub_item_param.rpartition(":")
    if separator == "" or title.strip() == "":
        raise typer.BadParameter(
            f"Sub-item must look like 'title:duration', got '{sub_item_param}'"
        )
    parsed_duration = parse_duration(duration)
    if parsed_duration is None:
        raise typer.BadParameter(f"Sub-item '{title}' is missing a duration")
    return title.strip(), parsed_duration


def block_ref(synthetic_id: int) -> Ref:
    try:
        return parse_ref(ID_MAP_REPO.get_real_id("blocks", synthetic_id))
    except BlockdayError as e:
        raise typer.BadParameter(e.message)


def backlog_id(synthetic_id: int) -> str:
    try:
        return ID_MAP_REPO.get_real_id("backlog", synthetic_id)
    except BlockdayError as e:
        raise typer.BadParameter(e.message)


def reminder_id(synthetic_id: int) -> str:
    try:
        return ID_MAP_REPO.get_real_id("reminders", synthetic_id)
    except BlockdayError as e:
        raise typer.BadParameter(e.message)
