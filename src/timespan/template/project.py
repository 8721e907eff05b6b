# SPDX-License-Identifier: MIT

from timespan.model.entity_id import generate_entity_id
from timespan.model.project import Project
from timespan.time import now_utc


def get_project_template() -> Project:
    now = now_utc()
    return {
        "id": generate_entity_id(),
        "name": "",
        "description": None,
        "directory_path": None,
        "is_client_project": False,
        "created_at": now,
        "updated_at": now,
    }
