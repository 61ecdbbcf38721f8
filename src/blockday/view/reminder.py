# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from blockday.model.reminder import Reminder
from blockday.repository.id_map import ID_MAP_REPO
from blockday.time import date_to_str
from blockday.view.header import header
from blockday.view.util import colored


def reminders_view(owner_id: str, report_name: str, reminders: list[Reminder]) -> None:
    header(owner_id, report_name)

    reminders_table = Table(box=box.SIMPLE)
    for column in ["id", "title", "date", "repeat", "description"]:
        reminders_table.add_column(column)

    for reminder in reminders:
        row = [
            str(ID_MAP_REPO.associate_id("reminders", reminder["id"] or "")),
            reminder["title"],
            date_to_str(reminder["target_date"]),
            reminder["repeat"],
            reminder["description"] or "",
        ]
        reminders_table.add_row(*[colored(value, reminder["color"]) for value in row])

    console = Console()
    console.print(reminders_table)
