# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from blockday import state as app_state
from blockday.error import BlockdayError
from blockday.model.backlog_item import BacklogItemPatch, BacklogSubItem
from blockday.model.ref import concrete_ref
from blockday.repository.backlog import BACKLOG_REPO
from blockday.repository.configuration import CONFIGURATION_REPO
from blockday.repository.id_map import ID_MAP_REPO
from blockday.repository.occurrence import OCCURRENCE_REPO
from blockday.service import backlog as backlog_service
from blockday.service.block import schedule_backlog_item
from blockday.service.suggestion import best_fit
from blockday.terminal.block import show
from blockday.terminal.custom_typer import AliasedTyperGroup
from blockday.terminal.parse import (
    backlog_id,
    parse_date,
    parse_duration,
    parse_sub_item,
    parse_time,
)
from blockday.terminal.util import fail
from blockday.time import today_local
from blockday.view.backlog import (
    backlog_view,
    single_backlog_item_view,
    suggestion_view,
)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def _sub_items(sub_item_params: list[str]) -> list[BacklogSubItem]:
    sub_items: list[BacklogSubItem] = []
    for sub_item_param in sub_item_params:
        title, duration = parse_sub_item(sub_item_param)
        sub_items.append({"title": title, "duration": duration, "done": False})
    return sub_items


def _show(item_id: str) -> None:
    owner_id = app_state.get_owner_id()
    single_backlog_item_view(
        owner_id, backlog_service.require_backlog_item(BACKLOG_REPO, owner_id, item_id)
    )


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    priority: Annotated[
        str, typer.Option("--priority", "-pr", help="valid input: low, medium, high")
    ] = "medium",
    estimate: Annotated[
        Optional[int],
        typer.Option(
            "--estimate", "-e", parser=parse_duration, help="valid input: 90, 1:30, 1h30m"
        ),
    ] = None,
    block_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="only suggest inside blocks with this title"),
    ] = None,
    deadline: Annotated[
        Optional[pendulum.Date],
        typer.Option("--deadline", "-dl", parser=parse_date, help=DATE_HELP),
    ] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    sub_items: Annotated[
        Optional[list[str]],
        typer.Option("--sub", "-s", help="valid input: title:duration (repeatable)"),
    ] = None,
    not_suggestible: Annotated[
        bool, typer.Option("--not-suggestible", help="never offer as a best fit")
    ] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    config = CONFIGURATION_REPO.get_config()

    try:
        item_id = backlog_service.create_backlog_item(
            BACKLOG_REPO,
            owner_id,
            title,
            priority=backlog_service.validate_priority(priority),
            estimated_duration=(
                estimate if estimate is not None else config["default_backlog_duration"]
            ),
            linked_block_type=block_type,
            deadline=deadline,
            description=description,
            color=color or config["default_backlog_color"],
            suggestible=not not_suggestible,
            sub_items=_sub_items(sub_items or []),
        )
        _show(item_id)
    except BlockdayError as e:
        fail(e)


@app.command("list, ls")
def list_items(
    all: Annotated[bool, typer.Option("--all", "-a", help="include completed items")] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    ID_MAP_REPO.clear_ids("backlog")
    items = BACKLOG_REPO.query(owner_id, status=None if all else "pending")
    backlog_view(owner_id, items)


@app.command("show, sh", no_args_is_help=True)
def show_item(id: int) -> None:
    try:
        _show(backlog_id(id))
    except BlockdayError as e:
        fail(e)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: int,
    title: Annotated[Optional[str], typer.Option("--title", "-ti")] = None,
    priority: Annotated[
        Optional[str], typer.Option("--priority", "-pr", help="valid input: low, medium, high")
    ] = None,
    estimate: Annotated[
        Optional[int],
        typer.Option(
            "--estimate", "-e", parser=parse_duration, help="valid input: 90, 1:30, 1h30m"
        ),
    ] = None,
    block_type: Annotated[Optional[str], typer.Option("--type", "-t")] = None,
    remove_block_type: Annotated[bool, typer.Option("--remove-type")] = False,
    deadline: Annotated[
        Optional[pendulum.Date],
        typer.Option("--deadline", "-dl", parser=parse_date, help=DATE_HELP),
    ] = None,
    remove_deadline: Annotated[bool, typer.Option("--remove-deadline")] = False,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    add_sub_items: Annotated[
        Optional[list[str]],
        typer.Option("--add-sub", "-as", help="valid input: title:duration (repeatable)"),
    ] = None,
    suggestible: Annotated[Optional[bool], typer.Option("--suggestible/--not-suggestible")] = None,
) -> None:
    owner_id = app_state.get_owner_id()
    item_id = backlog_id(id)

    patch: BacklogItemPatch = {}
    if title is not None:
        patch["title"] = title
    if priority is not None:
        patch["priority"] = priority  # type: ignore[typeddict-item]
    if estimate is not None:
        patch["estimated_duration"] = estimate
    if block_type is not None:
        patch["linked_block_type"] = block_type
    if remove_block_type:
        patch["linked_block_type"] = None
    if deadline is not None:
        patch["deadline"] = deadline
    if remove_deadline:
        patch["deadline"] = None
    if description is not None:
        patch["description"] = description
    if color is not None:
        patch["color"] = color
    if suggestible is not None:
        patch["suggestible"] = suggestible

    try:
        if add_sub_items is not None:
            item = backlog_service.require_backlog_item(BACKLOG_REPO, owner_id, item_id)
            patch["sub_items"] = item["sub_items"] + _sub_items(add_sub_items)
        backlog_service.update_backlog_item(BACKLOG_REPO, owner_id, item_id, patch)
        _show(item_id)
    except BlockdayError as e:
        fail(e)


@app.command("delete, del", no_args_is_help=True)
def delete(id: int) -> None:
    owner_id = app_state.get_owner_id()
    try:
        backlog_service.delete_backlog_item(BACKLOG_REPO, owner_id, backlog_id(id))
    except BlockdayError as e:
        fail(e)
    typer.echo("Deleted")


@app.command("toggle-sub, ts", no_args_is_help=True)
def toggle_sub(id: int, index: int) -> None:
    owner_id = app_state.get_owner_id()
    item_id = backlog_id(id)
    try:
        backlog_service.toggle_backlog_sub_item(BACKLOG_REPO, owner_id, item_id, index)
        _show(item_id)
    except BlockdayError as e:
        fail(e)


@app.command("suggest, sg", no_args_is_help=True)
def suggest(
    minutes: Annotated[
        int, typer.Argument(parser=parse_duration, help="valid input: 90, 1:30, 1h30m")
    ],
    gap: Annotated[
        bool, typer.Option("--gap", "-g", help="fill free time between blocks")
    ] = False,
    block_type: Annotated[
        Optional[str], typer.Option("--type", "-t", help="title of the block to fill")
    ] = None,
) -> None:
    """Show the best backlog item for a number of free minutes."""
    owner_id = app_state.get_owner_id()
    suggestion = best_fit(
        backlog_service.pending_items(BACKLOG_REPO, owner_id),
        minutes,
        "gap" if gap else "block",
        block_type,
        today_local(),
    )
    suggestion_view(owner_id, minutes, suggestion)


@app.command("schedule, sc", no_args_is_help=True)
def schedule(
    id: int,
    start: Annotated[int, typer.Argument(parser=parse_time, help="valid input: HH:mm")],
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    nested: Annotated[
        Optional[int],
        typer.Option("--nested", "-n", help="schedule only this sub-item"),
    ] = None,
) -> None:
    """Turn a backlog item into its own block."""
    owner_id = app_state.get_owner_id()
    config = CONFIGURATION_REPO.get_config()
    try:
        occurrence_id = schedule_backlog_item(
            OCCURRENCE_REPO,
            BACKLOG_REPO,
            owner_id,
            backlog_id(id),
            date if date is not None else today_local(),
            start,
            nested,
            minimum_duration=config["minimum_block_duration"],
        )
        show(concrete_ref(occurrence_id))
    except BlockdayError as e:
        fail(e)
