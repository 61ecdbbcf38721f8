# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from blockday import state as app_state
from blockday.terminal import backlog, block, configuration, reminder, sub_item
from blockday.terminal.custom_typer import OrderedTyperGroup
from blockday.terminal.day import day

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="blockday - Time blocking in the CLI",
    no_args_is_help=True,
)
app.command(name="day, d")(day)
app.add_typer(block.app, name="block, b", help="Scheduled blocks")
app.add_typer(sub_item.app, name="sub, s", help="Work inside a block")
app.add_typer(backlog.app, name="backlog, bl", help="Unscheduled work")
app.add_typer(reminder.app, name="reminder, r", help="Dated reminders")
app.add_typer(configuration.app, name="config, c", help="Settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    owner: Annotated[
        Optional[str],
        typer.Option("--owner", help="Work on another owner's data for this command"),
    ] = None,
) -> None:
    """
    blockday - Time blocking in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        app_state.set_show_header(False)
    if owner is not None:
        app_state.set_owner_id(owner)


def run() -> None:
    app()
