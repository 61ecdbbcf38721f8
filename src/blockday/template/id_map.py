# SPDX-License-Identifier: MIT

from blockday.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {
        "blocks": {"synthetic_to_real": {}, "real_to_synthetic": {}},
        "backlog": {"synthetic_to_real": {}, "real_to_synthetic": {}},
        "reminders": {"synthetic_to_real": {}, "real_to_synthetic": {}},
    }
