# SPDX-License-Identifier: MIT

from timespan.model.entity_id import generate_entity_id
from timespan.model.time_entry import TimeEntry
from timespan.time import now_utc


def get_time_entry_template() -> TimeEntry:
    now = now_utc()
    return {
        "id": generate_entity_id(),
        "project_id": "",
        "project_name": "",
        "task_description": None,
        "start_time": now,
        "end_time": None,
        "duration": None,
        "tags": [],
        "created_at": now,
        "updated_at": now,
    }
