# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from blockday import state as app_state
from blockday.error import BlockdayError
from blockday.repository.backlog import BACKLOG_REPO
from blockday.repository.occurrence import OCCURRENCE_REPO
from blockday.service import block as block_service
from blockday.service import intent
from blockday.terminal.block import SERIES_HELP, show
from blockday.terminal.custom_typer import AliasedTyperGroup
from blockday.terminal.parse import backlog_id, block_ref, parse_duration, parse_time
from blockday.terminal.util import fail, result_ref, scope_of

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    id: int,
    title: str,
    duration: Annotated[
        int, typer.Argument(parser=parse_duration, help="valid input: 90, 1:30, 1h30m")
    ],
    at: Annotated[
        Optional[int],
        typer.Option("--at", parser=parse_time, help="pin to a clock time, HH:mm"),
    ] = None,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    try:
        ref = block_service.add_sub_item(
            OCCURRENCE_REPO,
            owner_id,
            block_ref(id),
            title,
            duration,
            pinned_time=at,
            scope=scope_of(series),
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("toggle, x", no_args_is_help=True)
def toggle(
    id: int,
    index: int,
    nested: Annotated[
        Optional[int],
        typer.Option("--nested", "-n", help="toggle a checklist entry of the sub-item"),
    ] = None,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    try:
        if nested is None:
            ref = block_service.toggle_sub_item(
                OCCURRENCE_REPO, owner_id, block_ref(id), index, scope_of(series)
            )
        else:
            ref = block_service.toggle_nested_sub_item(
                OCCURRENCE_REPO, owner_id, block_ref(id), index, nested, scope_of(series)
            )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("up, u", no_args_is_help=True)
def up(
    id: int,
    index: int,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    try:
        ref = block_service.move_sub_item(
            OCCURRENCE_REPO, owner_id, block_ref(id), index, "up", scope_of(series)
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("down, dn", no_args_is_help=True)
def down(
    id: int,
    index: int,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    try:
        ref = block_service.move_sub_item(
            OCCURRENCE_REPO, owner_id, block_ref(id), index, "down", scope_of(series)
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("remove, rm", no_args_is_help=True)
def remove(
    id: int,
    index: int,
    series: Annotated[bool, typer.Option("--series", help=SERIES_HELP)] = False,
) -> None:
    owner_id = app_state.get_owner_id()
    try:
        ref = block_service.remove_sub_item(
            OCCURRENCE_REPO, owner_id, block_ref(id), index, scope_of(series)
        )
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("pin, p", no_args_is_help=True)
def pin(
    id: int,
    index: int,
    time: Annotated[int, typer.Argument(parser=parse_time, help="valid input: HH:mm")],
) -> None:
    """Fix a sub-item to a clock time inside its block."""
    owner_id = app_state.get_owner_id()
    ref = result_ref(intent.set_pin(OCCURRENCE_REPO, owner_id, block_ref(id), index, time))
    try:
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("unpin, un", no_args_is_help=True)
def unpin(id: int, index: int) -> None:
    owner_id = app_state.get_owner_id()
    ref = result_ref(intent.set_pin(OCCURRENCE_REPO, owner_id, block_ref(id), index, None))
    try:
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("assign, as", no_args_is_help=True)
def assign(
    id: int,
    backlog: Annotated[int, typer.Argument(help="backlog item number")],
    nested: Annotated[
        Optional[int],
        typer.Option("--nested", "-n", help="take only this sub-item of the backlog item"),
    ] = None,
) -> None:
    """Move backlog work into a block."""
    owner_id = app_state.get_owner_id()
    ref = result_ref(
        intent.assign_backlog_item(
            OCCURRENCE_REPO,
            BACKLOG_REPO,
            owner_id,
            block_ref(id),
            backlog_id(backlog),
            nested,
        )
    )
    try:
        show(ref)
    except BlockdayError as e:
        fail(e)


@app.command("detach, dt", no_args_is_help=True)
def detach(id: int, index: int) -> None:
    """Move a sub-item out of its block and back to the backlog."""
    owner_id = app_state.get_owner_id()
    ref = result_ref(
        intent.detach_sub_item(OCCURRENCE_REPO, BACKLOG_REPO, owner_id, block_ref(id), index)
    )
    try:
        show(ref)
    except BlockdayError as e:
        fail(e)
