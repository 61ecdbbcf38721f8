# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from blockday.model.reminder import Reminder
from blockday.service.analytics import StatScore
from blockday.service.day import DayPlan
from blockday.time import date_to_display_str, duration_to_display_str
from blockday.view.backlog import suggestion_str
from blockday.view.block import block_row
from blockday.view.header import header
from blockday.view.util import time_range


def day_view(
    owner_id: str,
    plan: DayPlan,
    stats: list[StatScore],
    reminders: list[Reminder] = [],
) -> None:
    """
    Display one day: its blocks in start order, the gaps between them with
    the best-fit backlog item for each, then reminders and scores.
    """
    header(owner_id, date_to_display_str(plan["date"]))

    console = Console()

    blocks_table = Table(box=box.SIMPLE)
    for column in ["id", "state", "time", "title", "rec", "load", "fill with"]:
        blocks_table.add_column(column)
    for entry in plan["entries"]:
        row = block_row(entry["ref"], entry["occurrence"])
        row.append(suggestion_str(entry["suggestion"]))
        blocks_table.add_row(*row)
    console.print(blocks_table)

    if len(plan["gaps"]) > 0:
        gaps_table = Table(box=box.SIMPLE)
        for column in ["gap", "length", "fill with"]:
            gaps_table.add_column(column)
        for gap in plan["gaps"]:
            gaps_table.add_row(
                time_range(gap["start"], gap["duration"]),
                duration_to_display_str(gap["duration"]),
                suggestion_str(gap["suggestion"]),
            )
        console.print(gaps_table)

    if len(reminders) > 0:
        console.print("[bold]Reminders[/bold]")
        for reminder in reminders:
            console.print(f"  - {reminder['title']}")

    stats_view(stats)


def stats_view(stats: list[StatScore]) -> None:
    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("score")
    stats_table.add_column("value")
    for stat in stats:
        stats_table.add_row(stat["subject"], f"{stat['score']}/{stat['full_mark']}")

    console = Console()
    console.print(stats_table)
