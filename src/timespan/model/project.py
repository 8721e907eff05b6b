# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from timespan.model.entity_id import EntityId


class Project(TypedDict):
    id: EntityId
    name: str
    description: Optional[str]
    directory_path: Optional[str]
    is_client_project: bool
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
