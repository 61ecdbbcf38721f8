# SPDX-License-Identifier: MIT

import re
from typing import Literal, TypedDict, TypeIs

import pendulum

from blockday.error import ValidationError
from blockday.model.entity_id import EntityId
from blockday.time import date_from_str, date_to_str


class ConcreteRef(TypedDict):
    ref_type: Literal["concrete"]
    id: EntityId


class VirtualRef(TypedDict):
    ref_type: Literal["virtual"]
    template_id: EntityId
    date: pendulum.Date


Ref = ConcreteRef | VirtualRef

_VIRTUAL_SEPARATOR = "-virtual-"
_VIRTUAL_P = re.compile(r"^(?P<template_id>.+)-virtual-(?P<date>\d{4}-\d{2}-\d{2})$")


def concrete_ref(id: EntityId) -> ConcreteRef:
    return {"ref_type": "concrete", "id": id}


def virtual_ref(template_id: EntityId, date: pendulum.Date) -> VirtualRef:
    return {"ref_type": "virtual", "template_id": template_id, "date": date}


def is_virtual(ref: Ref) -> TypeIs[VirtualRef]:
    return ref["ref_type"] == "virtual"


def format_ref(ref: Ref) -> str:
    """Textual token for a reference, used only at the presentation boundary."""
    if is_virtual(ref):
        return f"{ref['template_id']}{_VIRTUAL_SEPARATOR}{date_to_str(ref['date'])}"
    return ref["id"]


def parse_ref(token: str) -> Ref:
    token = token.strip()
    if token == "":
        raise ValidationError("Block reference cannot be empty")
    virtual_match = _VIRTUAL_P.match(token)
    if virtual_match:
        return virtual_ref(
            virtual_match.group("template_id"),
            date_from_str(virtual_match.group("date")),
        )
    return concrete_ref(token)
