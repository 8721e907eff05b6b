# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from typing import Optional, TypeAlias, TypedDict

import pendulum

from timespan.model.entity_id import EntityId


class ActiveTimer(TypedDict):
    id: EntityId
    project_id: EntityId
    project_name: str
    task_description: Optional[str]
    start_time: pendulum.DateTime
    tags: list[str]


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Running:
    timer: ActiveTimer


TimerState: TypeAlias = Idle | Running
