# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from blockday import state as app_state
from blockday.error import BlockdayError
from blockday.repository.backlog import BACKLOG_REPO
from blockday.repository.configuration import CONFIGURATION_REPO
from blockday.repository.id_map import ID_MAP_REPO
from blockday.repository.occurrence import OCCURRENCE_REPO
from blockday.repository.reminder import REMINDER_REPO
from blockday.service.analytics import (
    DAILY_BLOCK_GOAL,
    FOCUS_GOAL_MINUTES,
    efficiency_stats,
)
from blockday.service.day import build_day_plan
from blockday.service.reminder import reminders_for_date
from blockday.terminal.parse import parse_date
from blockday.terminal.util import fail
from blockday.time import today_local
from blockday.view.day import day_view


def day(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Argument(
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
) -> None:
    """Show a day's blocks, the gaps between them and what could fill them."""
    owner_id = app_state.get_owner_id()
    config = CONFIGURATION_REPO.get_config()
    plan_date = date if date is not None else today_local()

    ID_MAP_REPO.clear_ids("blocks")
    ID_MAP_REPO.clear_ids("backlog")

    try:
        plan = build_day_plan(
            OCCURRENCE_REPO,
            BACKLOG_REPO,
            owner_id,
            plan_date,
            minimum_gap_minutes=config["minimum_gap_minutes"],
        )
        reminders = reminders_for_date(REMINDER_REPO.query(owner_id), plan_date)
    except BlockdayError as e:
        fail(e)

    stats = efficiency_stats(
        [entry["occurrence"] for entry in plan["entries"]],
        focus_goal_minutes=config.get("focus_goal_minutes", FOCUS_GOAL_MINUTES),
        daily_block_goal=config.get("daily_block_goal", DAILY_BLOCK_GOAL),
    )
    day_view(owner_id, plan, stats, reminders)
