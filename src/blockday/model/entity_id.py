# SPDX-License-Identifier: MIT

import uuid

type EntityId = str

type OwnerId = str


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())
