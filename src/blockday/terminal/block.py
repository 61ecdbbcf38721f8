# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from blockday import state as app_state
from blockday.error import BlockdayError
from blockday.model.occurrence import SubItem
from blockday.model.ref import Ref, concrete_ref, virtual_ref
from blockday.repository.configuration import CONFIGURATION_REPO
from blockday.repository.occurrence import OCCURRENCE_REPO
from blockday.service import block as block_service
from blockday.service import intent
from blockday.service.fork import delete_occurrence, get_occurrence
from blockday.service.layout import free_minutes
from blockday.template.occurrence import get_sub_item_template
from blockday.terminal.custom_typer import AliasedTyperGroup
from blockday.terminal.parse import (
    block_ref,
    parse_date,
    parse_duration,
    parse_sub_item,
    parse_time,
)
from blockday.terminal.util import fail, result_ref, scope_of
from blockday.time import duration_to_display_str, today_local
from blockday.view.block import single_block_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

SERIES_HELP = "apply to every date of a recurring block"


def show(ref: Ref) -> None:
    owner_id = app_state.get_owner_id()
    single_block_view(owner_id, ref, get_occurrence(OCCURRENCE_REPO, owner_id, ref))


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    start: Annotated[int, typer.Argument(parser=parse_time, help="valid input: HH:mm")],
    duration: Annotated[
        int, typer.Argument(parser=parse_duration, help="valid input: 90, 1:30, 1h30m")
    ],
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--date",
            "-d",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    icon: Annotated[Optional[str], typer.Option("--icon", "-i")] = None,
    sub_items: Annotated[
        Optional[list[str]],
        typer.Option("--sub", "-s", help="valid input: title:duration (repeatable)"),
    ] = None,
    weekly: Annotated[
        bool, typer.Option("--weekly", "-w", help="repeat every week on this weekday")
    ] = False,
    weekdays: Annotated[
        bool, typer.Option("--weekdays", "-wd", help="repeat Monday through Friday")
    ] = False,
) -> None:
    """Schedule a block, optionally repeating."""
    owner_id = app_state.get_owner_id()
    config = CONFIGURATION_REPO.get_config()
    block_date = date if date is not None else today_local()

    block_sub_items: list[SubItem] = []
    for sub_item_param in sub_items or []:
        sub_title, sub_duration = parse_sub_item(sub_item_param)
        block_sub_items.append(get_sub_item_template(sub_title, sub_duration))

    try:
        if weekly or weekdays:
            template_id = block_service.create_recurring_block(
                OCCURRENCE_REPO,
                owner_id,
                title,
                block_date,
                start,
                duration,
                cadence="weekday_series" if weekdays else "weekly",
                color=color or config["default_block_color"],
                icon=icon or config["default_block_icon"],
                sub_items=block_sub_items,
                minimum_duration=config["minimum_block_duration"],
            )
            ref: Ref = virtual_ref(template_id, block_date)
        else:
            occurrence_id = block_service.create_block(
                OCCURRENCE_REPO,
                owner_id,
                title,
                block_date,
                start,
                duration,
                color=color or config["default_block_color"],
                icon=icon or config["default_block_icon"],
                sub_items=block_sub_items,
                minimum_duration=config["minimum_block_duration"],
            )
            ref = concrete_ref(occurrence_id)
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("show, sh", no_args_is_help=True)
def show_block(id: int) -> None:
    try:
        show(block_ref(id))
    except BlockdayError as e:
        fail(e)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: int,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    icon: Annotated[Optional[str], typer.Option("--icon", "-i")] = None,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    try:
        ref = block_service.update_block(
            OCCURRENCE_REPO,
            owner_id,
            block_ref(id),
            title=title,
            color=color,
            icon=icon,
            scope=scope_of(series),
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("move, mv", no_args_is_help=True)
def move(
    id: int,
    start: Annotated[int, typer.Argument(parser=parse_time, help="valid input: HH:mm")],
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    """Move a block to a new start time. Pinned sub-items move with it."""
    owner_id = app_state.get_owner_id()
    ref = result_ref(
        intent.move(OCCURRENCE_REPO, owner_id, block_ref(id), start, scope_of(series))
    )
    try:
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("drag, dr", no_args_is_help=True)
def drag(
    id: int,
    pixels: Annotated[float, typer.Argument(help="vertical drag distance, negative is earlier")],
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    """Move a block by a drag distance, snapped to the drag speed."""
    owner_id = app_state.get_owner_id()
    try:
        ref = block_service.drag_block(
            OCCURRENCE_REPO, owner_id, block_ref(id), pixels, scope_of(series)
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("toggle, x", no_args_is_help=True)
def toggle(
    id: int,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    """Mark a block completed, or pending again."""
    owner_id = app_state.get_owner_id()
    ref = result_ref(
        intent.toggle_status(OCCURRENCE_REPO, owner_id, block_ref(id), scope_of(series))
    )
    try:
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("resize, rs", no_args_is_help=True)
def resize(
    id: int,
    duration: Annotated[
        int, typer.Argument(parser=parse_duration, help="valid input: 90, 1:30, 1h30m")
    ],
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    config = CONFIGURATION_REPO.get_config()
    try:
        ref = block_service.resize_block(
            OCCURRENCE_REPO,
            owner_id,
            block_ref(id),
            duration,
            scope_of(series),
            minimum_duration=config["minimum_block_duration"],
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("fit, f", no_args_is_help=True)
def fit(
    id: int,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    """Resize a block to exactly hold its sub-items."""
    owner_id = app_state.get_owner_id()
    config = CONFIGURATION_REPO.get_config()
    try:
        ref = block_service.resize_to_fit(
            OCCURRENCE_REPO,
            owner_id,
            block_ref(id),
            scope_of(series),
            minimum_duration=config["minimum_block_duration"],
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("delete, del", no_args_is_help=True)
def delete(
    id: int,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    """
    Delete a block. For a recurring block this removes one date, or with
    --series the whole series. Removing a weekday from a Monday to Friday
    series keeps the other four weekdays as weekly series.
    """
    owner_id = app_state.get_owner_id()
    try:
        new_series = delete_occurrence(
            OCCURRENCE_REPO, owner_id, block_ref(id), scope_of(series)
        )
    except BlockdayError as e:
        fail(e)

    typer.echo("Deleted")
    if len(new_series) > 0:
        typer.echo(f"Kept {len(new_series)} weekly series for the remaining weekdays")


@app.command("free", no_args_is_help=True)
def free(id: int) -> None:
    """Show how many minutes a block has left for more work."""
    owner_id = app_state.get_owner_id()
    try:
        occurrence = get_occurrence(OCCURRENCE_REPO, owner_id, block_ref(id))
    except BlockdayError as e:
        fail(e)

    typer.echo(duration_to_display_str(free_minutes(occurrence)))
