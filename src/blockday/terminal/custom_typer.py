# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core
from rich.console import Console
from rich.padding import Padding

from blockday import state as app_state

console = Console()

_ALIAS_SPLIT_P = re.compile(r"\s*,\s*")


def command_aliases(registered_name: str) -> list[str]:
    """'block, b' -> ['block', 'b']"""
    return [alias for alias in _ALIAS_SPLIT_P.split(registered_name) if alias != ""]


class AliasedTyperGroup(typer.core.TyperGroup):
    """
    Group whose commands are registered as "name, alias, ..." and can be
    invoked by any of those names.
    """

    def _registered_name(self, alias: str) -> Optional[str]:
        for registered_name in self.commands:
            if alias in command_aliases(registered_name):
                return registered_name
        return None

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        registered_name = self._registered_name(cmd_name)
        return super().get_command(ctx, registered_name or cmd_name)

    def add_command(self, cmd: click.Command, name: Optional[str] = None) -> None:
        name = name or cmd.name or ""
        for alias in command_aliases(name):
            registered_name = self._registered_name(alias)
            if registered_name is not None and registered_name != name:
                raise ValueError(f"'{alias}' is already an alias of '{registered_name}'")
        super().add_command(cmd, name)


class OrderedTyperGroup(AliasedTyperGroup):
    """Top-level group: fixed command order and the current owner above the help."""

    command_order = ("day", "block", "sub", "backlog", "reminder", "config")

    def list_commands(self, ctx: click.Context) -> list[str]:
        def position(registered_name: str) -> int:
            name = command_aliases(registered_name)[0]
            if name in self.command_order:
                return self.command_order.index(name)
            return len(self.command_order)

        return sorted(self.commands, key=position)

    def format_help(
        self, ctx: click.Context, formatter: click.formatting.HelpFormatter
    ) -> None:
        console.print(
            Padding(f"[plum1]owner: {app_state.get_owner_id()}[/plum1]", (1, 0, 0, 1))
        )
        super().format_help(ctx, formatter)
