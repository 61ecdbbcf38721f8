# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

IdMapKind = Literal["blocks", "backlog", "reminders"]


type IdMapDict = dict[IdMapKind, IdMapMapping]


class IdMap(TypedDict):
    """
    Short numbers shown in the terminal, mapped to what they stand for.

    blocks map to formatted occurrence references, so a number can point at a
    template projected onto one date. backlog and reminders map to entity ids.

    Example:

    Block on screen as 3, a weekly template projected onto 2024-01-08.

    id_map["blocks"]["synthetic_to_real"][3]  # "<template id>-virtual-2024-01-08"
    """

    blocks: "IdMapMapping"
    backlog: "IdMapMapping"
    reminders: "IdMapMapping"


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, str]
    real_to_synthetic: dict[str, int]
