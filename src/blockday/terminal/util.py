# SPDX-License-Identifier: MIT

from typing import NoReturn

import typer

from blockday.error import BlockdayError
from blockday.model.ref import Ref, parse_ref
from blockday.service.fork import Scope
from blockday.service.intent import ActionResult


def fail(error: BlockdayError) -> NoReturn:
    typer.echo(f"Error: {error.message}", err=True)
    raise typer.Exit(1)


def scope_of(series: bool) -> Scope:
    return "series" if series else "instance"


def result_ref(result: ActionResult) -> Ref:
    """Reference carried by a successful action, exiting on failure."""
    if not result["success"]:
        typer.echo(f"Error: {result['error']}", err=True)
        raise typer.Exit(1)
    return parse_ref(result["data"])
