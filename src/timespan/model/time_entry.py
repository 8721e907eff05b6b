# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from timespan.model.entity_id import EntityId


class TimeEntry(TypedDict):
    id: EntityId
    project_id: EntityId
    project_name: str
    task_description: Optional[str]
    start_time: pendulum.DateTime
    end_time: Optional[pendulum.DateTime]
    duration: Optional[pendulum.Duration]
    tags: list[str]
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
