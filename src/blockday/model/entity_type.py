# SPDX-License-Identifier: MIT


class EntityType:
    OCCURRENCE = "occurrence"
    BACKLOG_ITEM = "backlog_item"
    REMINDER = "reminder"
