# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from blockday import configuration
from blockday.repository.configuration import CONFIGURATION_REPO
from blockday.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("owner_id", config["owner_id"])
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("show_header", "✓ Enabled" if config["show_header"] else "✗ Disabled")
    table.add_row("log_level", config["log_level"])
    table.add_row("default_block_color", config["default_block_color"])
    table.add_row("default_block_icon", config["default_block_icon"])
    table.add_row("default_backlog_color", config["default_backlog_color"])
    table.add_row("minimum_block_duration", str(config["minimum_block_duration"]))
    table.add_row("default_backlog_duration", str(config["default_backlog_duration"]))
    table.add_row("minimum_gap_minutes", str(config["minimum_gap_minutes"]))
    table.add_row("focus_goal_minutes", str(config.get("focus_goal_minutes", "")))
    table.add_row("daily_block_goal", str(config.get("daily_block_goal", "")))

    console.print(table)

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    owner_id: Annotated[
        Optional[str], typer.Option("--owner-id", help="Owner the data is stored under")
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Reset data path to the platform default"),
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header", help="Show report headers"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=f"valid input: {', '.join(LOG_LEVELS)}"),
    ] = None,
    default_block_color: Annotated[Optional[str], typer.Option("--default-block-color")] = None,
    default_block_icon: Annotated[Optional[str], typer.Option("--default-block-icon")] = None,
    default_backlog_color: Annotated[
        Optional[str], typer.Option("--default-backlog-color")
    ] = None,
    minimum_block_duration: Annotated[
        Optional[int], typer.Option("--minimum-block-duration", min=1)
    ] = None,
    default_backlog_duration: Annotated[
        Optional[int], typer.Option("--default-backlog-duration", min=5)
    ] = None,
    minimum_gap_minutes: Annotated[
        Optional[int], typer.Option("--minimum-gap-minutes", min=1)
    ] = None,
    focus_goal_minutes: Annotated[
        Optional[int], typer.Option("--focus-goal-minutes", min=1)
    ] = None,
    daily_block_goal: Annotated[Optional[int], typer.Option("--daily-block-goal", min=1)] = None,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Log level must be one of {', '.join(LOG_LEVELS)}", param_hint="--log-level"
        )

    CONFIGURATION_REPO.update_config(
        owner_id=owner_id,
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        log_level=log_level,
        default_block_color=default_block_color,
        default_block_icon=default_block_icon,
        default_backlog_color=default_backlog_color,
        minimum_block_duration=minimum_block_duration,
        default_backlog_duration=default_backlog_duration,
        minimum_gap_minutes=minimum_gap_minutes,
        focus_goal_minutes=focus_goal_minutes,
        daily_block_goal=daily_block_goal,
    )
    view()
