# SPDX-License-Identifier: MIT

from typing import Optional

from blockday.model.occurrence import Occurrence, PlacedSubItem
from blockday.time import duration_to_display_str, minutes_to_hhmm

COMPLETED_COLOR = "grey42"
WARNING_COLOR = "red1"


def colored(value: str, color: Optional[str]) -> str:
    if color is None or color == "":
        return value
    return f"[{color}]{value}[/{color}]"


def time_range(start: int, duration: int) -> str:
    return f"{minutes_to_hhmm(start)}-{minutes_to_hhmm(start + duration)}"


def block_state(occurrence: Occurrence) -> str:
    """X if completed, blank if pending"""
    if occurrence["status"] == "completed":
        return "X"
    return " "


def sub_item_state(done: bool) -> str:
    return "X" if done else " "


def placement_flags(placed: PlacedSubItem) -> str:
    """
    Markers shown beside a placed sub-item.

    "@" pinned to a clock time
    "!" runs past the end of its block
    """
    flags = ""
    if placed["is_pinned"]:
        flags += "@"
    if placed["is_past_block_end"]:
        flags += "!"
    return flags


def load_str(needed_duration: int, total_duration: int) -> str:
    load = f"{duration_to_display_str(needed_duration)} / {duration_to_display_str(total_duration)}"
    if needed_duration > total_duration:
        return colored(load, WARNING_COLOR)
    return load
