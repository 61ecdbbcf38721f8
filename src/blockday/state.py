# SPDX-License-Identifier: MIT

"""Per-invocation settings: whose data is shown, and how much chrome to print."""

from contextvars import ContextVar

from blockday.model.entity_id import OwnerId

_owner_id: ContextVar[OwnerId] = ContextVar("owner_id", default="local")
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_owner_id(value: OwnerId) -> None:
    _owner_id.set(value)


def get_owner_id() -> OwnerId:
    return _owner_id.get()


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()
