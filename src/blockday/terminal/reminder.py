# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from blockday import state as app_state
from blockday.error import BlockdayError
from blockday.repository.id_map import ID_MAP_REPO
from blockday.repository.reminder import REMINDER_REPO
from blockday.service.reminder import (
    REPEAT_PATTERNS,
    create_reminder,
    delete_reminder,
    reminders_for_date,
)
from blockday.terminal.custom_typer import AliasedTyperGroup
from blockday.terminal.parse import parse_date, reminder_id
from blockday.terminal.util import fail
from blockday.time import date_to_str, today_local
from blockday.view.reminder import reminders_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    repeat: Annotated[
        str, typer.Option("--repeat", "-r", help=f"valid input: {', '.join(REPEAT_PATTERNS)}")
    ] = "none",
    description: Annotated[Optional[str], typer.Option("--description", "-de")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
) -> None:
    owner_id = app_state.get_owner_id()
    try:
        id = create_reminder(
            REMINDER_REPO,
            owner_id,
            title,
            date if date is not None else today_local(),
            repeat,
            description,
            color,
        )
    except BlockdayError as e:
        fail(e)

    reminder = REMINDER_REPO.get(owner_id, id)
    if reminder is not None:
        reminders_view(owner_id, "reminder", [reminder])


@app.command("list, ls")
def list_reminders(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """List every reminder, or only those falling on --date."""
    owner_id = app_state.get_owner_id()
    ID_MAP_REPO.clear_ids("reminders")
    reminders = REMINDER_REPO.query(owner_id)
    if date is None:
        reminders_view(owner_id, "reminders", reminders)
        return
    reminders_view(owner_id, date_to_str(date), reminders_for_date(reminders, date))


@app.command("delete, del", no_args_is_help=True)
def delete(id: int) -> None:
    owner_id = app_state.get_owner_id()
    try:
        delete_reminder(REMINDER_REPO, owner_id, reminder_id(id))
    except BlockdayError as e:
        fail(e)
    typer.echo("Deleted")
