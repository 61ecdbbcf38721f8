# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from blockday.model.backlog_item import BacklogItem
from blockday.repository.id_map import ID_MAP_REPO
from blockday.service.backlog import deadline_label
from blockday.service.suggestion import Suggestion
from blockday.time import date_to_str_optional, duration_to_display_str
from blockday.view.header import header
from blockday.view.util import COMPLETED_COLOR, colored, sub_item_state


def backlog_id(item_id: Optional[str]) -> str:
    if item_id is None:
        return ""
    return str(ID_MAP_REPO.associate_id("backlog", item_id))


def backlog_view(
    owner_id: str,
    items: list[BacklogItem],
    today: Optional[pendulum.Date] = None,
) -> None:
    header(owner_id, "backlog")

    backlog_table = Table(box=box.SIMPLE)
    for column in ["id", "priority", "title", "estimate", "type", "deadline", "subs"]:
        backlog_table.add_column(column)

    for item in items:
        sub_items = ""
        if len(item["sub_items"]) > 0:
            done_count = len([sub_item for sub_item in item["sub_items"] if sub_item["done"]])
            sub_items = f"{done_count}/{len(item['sub_items'])}"

        row = [
            backlog_id(item["id"]),
            item["priority"],
            item["title"],
            duration_to_display_str(item["estimated_duration"]),
            item["linked_block_type"] or "",
            deadline_label(item["deadline"], today),
            sub_items,
        ]
        if item["status"] == "completed":
            row = [colored(value, COMPLETED_COLOR) for value in row]
        backlog_table.add_row(*row)

    console = Console()
    console.print(backlog_table)


def single_backlog_item_view(owner_id: str, item: BacklogItem) -> None:
    header(owner_id, "backlog item")

    item_table = Table(box=box.SIMPLE)
    item_table.add_column("property")
    item_table.add_column("value")

    item_table.add_row("id", backlog_id(item["id"]))
    item_table.add_row("title", item["title"])
    item_table.add_row("description", item["description"] or "")
    item_table.add_row("priority", item["priority"])
    item_table.add_row("estimate", duration_to_display_str(item["estimated_duration"]))
    item_table.add_row("type", item["linked_block_type"] or "")
    item_table.add_row("deadline", date_to_str_optional(item["deadline"]) or "")
    item_table.add_row("status", item["status"])
    item_table.add_row("suggestible", "yes" if item["suggestible"] else "no")

    console = Console()
    console.print(item_table)

    if len(item["sub_items"]) == 0:
        return

    sub_items_table = Table(box=box.SIMPLE)
    for column in ["#", "state", "title", "duration"]:
        sub_items_table.add_column(column)
    for index, sub_item in enumerate(item["sub_items"]):
        sub_items_table.add_row(
            str(index),
            sub_item_state(sub_item["done"]),
            sub_item["title"],
            duration_to_display_str(sub_item["duration"]),
        )
    console.print(sub_items_table)


def suggestion_str(suggestion: Optional[Suggestion]) -> str:
    if suggestion is None:
        return ""
    item = suggestion["item"]
    if suggestion["is_split"]:
        label = f"{backlog_id(suggestion['parent_id'])}.{suggestion['nested_index']}"
    else:
        label = backlog_id(item["id"])
    return f"[{label}] {item['title']} ({duration_to_display_str(item['estimated_duration'])})"


def suggestion_view(owner_id: str, budget: int, suggestion: Optional[Suggestion]) -> None:
    header(owner_id, f"best fit for {duration_to_display_str(budget)}")

    console = Console()
    if suggestion is None:
        console.print("Nothing in the backlog fits.")
        return
    console.print(suggestion_str(suggestion))
