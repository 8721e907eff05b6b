# SPDX-License-Identifier: MIT

from timespan.model.entity_id import generate_entity_id
from timespan.model.timer import ActiveTimer
from timespan.time import now_utc


def get_active_timer_template() -> ActiveTimer:
    return {
        "id": generate_entity_id(),
        "project_id": "",
        "project_name": "",
        "task_description": None,
        "start_time": now_utc(),
        "tags": [],
    }
