# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from blockday.model.occurrence import Occurrence
from blockday.model.ref import Ref, format_ref, is_virtual
from blockday.repository.id_map import ID_MAP_REPO
from blockday.service.layout import layout_summary
from blockday.time import (
    date_to_display_str,
    duration_to_display_str,
    minutes_to_hhmm,
)
from blockday.view.header import header
from blockday.view.util import (
    COMPLETED_COLOR,
    WARNING_COLOR,
    block_state,
    colored,
    load_str,
    placement_flags,
    sub_item_state,
    time_range,
)


def single_block_view(owner_id: str, ref: Ref, occurrence: Occurrence) -> None:
    """Display one block with its sub-items laid out on the clock."""
    header(owner_id, "block")

    summary = layout_summary(occurrence)

    block_table = Table(box=box.SIMPLE)
    block_table.add_column("property")
    block_table.add_column("value")

    block_table.add_row("id", str(ID_MAP_REPO.associate_id("blocks", format_ref(ref))))
    block_table.add_row("title", colored(occurrence["title"], occurrence["color"]))
    block_table.add_row("date", date_to_display_str(occurrence["date"]))
    block_table.add_row(
        "time", time_range(occurrence["start_time"], occurrence["total_duration"])
    )
    block_table.add_row("duration", duration_to_display_str(occurrence["total_duration"]))
    block_table.add_row("status", occurrence["status"])
    block_table.add_row("icon", occurrence["icon"] or "")
    if occurrence["recurrence"] is not None:
        block_table.add_row("repeats", occurrence["recurrence"]["cadence"])
    elif is_virtual(ref) or occurrence["overrides_template_id"] is not None:
        block_table.add_row("repeats", "changed on this date")
    block_table.add_row(
        "load", load_str(summary["needed_duration"], occurrence["total_duration"])
    )
    block_table.add_row("ends", minutes_to_hhmm(summary["flow_end"]))

    console = Console()
    console.print(block_table)

    if len(summary["placed"]) == 0:
        return

    sub_items_table = Table(box=box.SIMPLE)
    for column in ["#", "state", "time", "title", "duration", "flags"]:
        sub_items_table.add_column(column)

    for placed in summary["placed"]:
        sub_item = placed["sub_item"]
        title = sub_item["title"]
        if len(sub_item["nested"]) > 0:
            done_count = len([nested for nested in sub_item["nested"] if nested["done"]])
            title += f" ({done_count}/{len(sub_item['nested'])})"

        row = [
            str(placed["index"]),
            sub_item_state(sub_item["done"]),
            time_range(placed["computed_start"], sub_item["duration"]),
            title,
            duration_to_display_str(sub_item["duration"]),
            placement_flags(placed),
        ]
        if sub_item["done"]:
            row = [colored(value, COMPLETED_COLOR) for value in row]
        elif placed["is_past_block_end"]:
            row = [colored(value, WARNING_COLOR) for value in row]
        sub_items_table.add_row(*row)

    console.print(sub_items_table)


def block_row(ref: Ref, occurrence: Occurrence) -> list[str]:
    summary = layout_summary(occurrence)
    row = [
        str(ID_MAP_REPO.associate_id("blocks", format_ref(ref))),
        block_state(occurrence),
        time_range(occurrence["start_time"], occurrence["total_duration"]),
        occurrence["title"],
        "R" if is_virtual(ref) else "",
        load_str(summary["needed_duration"], occurrence["total_duration"]),
    ]
    if occurrence["status"] == "completed":
        return [colored(value, COMPLETED_COLOR) for value in row]
    return [colored(value, occurrence["color"]) for value in row]
