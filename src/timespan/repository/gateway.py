# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

import pendulum

from timespan.model.entity_id import EntityId
from timespan.model.project import Project
from timespan.model.time_entry import TimeEntry
from timespan.model.timer import ActiveTimer


class Repository(ABC):
    """
    Storage contract consumed by the services.

    Every call either commits its whole change or raises and leaves the
    stored state untouched. Lookups signal absence with None, never with an
    exception.
    """

    @abstractmethod
    async def create_project(self, project: Project) -> None: ...

    @abstractmethod
    async def get_project_by_name(self, name: str) -> Optional[Project]: ...

    @abstractmethod
    async def get_project_by_id(self, id: EntityId) -> Optional[Project]: ...

    @abstractmethod
    async def list_projects(self) -> list[Project]: ...

    @abstractmethod
    async def update_project(self, project: Project) -> None: ...

    @abstractmethod
    async def delete_project(self, id: EntityId) -> None: ...

    @abstractmethod
    async def create_time_entry(self, entry: TimeEntry) -> None: ...

    @abstractmethod
    async def get_time_entry_by_id(self, id: EntityId) -> Optional[TimeEntry]: ...

    @abstractmethod
    async def get_active_time_entry(self) -> Optional[TimeEntry]: ...

    @abstractmethod
    async def list_time_entries_by_project(
        self, project_id: EntityId
    ) -> list[TimeEntry]: ...

    @abstractmethod
    async def list_time_entries_by_date_range(
        self, start: pendulum.DateTime, end: pendulum.DateTime
    ) -> list[TimeEntry]: ...

    @abstractmethod
    async def update_time_entry(self, entry: TimeEntry) -> None: ...

    @abstractmethod
    async def count_time_entries_for_project(self, project_id: EntityId) -> int: ...

    @abstractmethod
    async def save_active_timer(self, timer: ActiveTimer) -> None: ...

    @abstractmethod
    async def start_active_timer(self, timer: ActiveTimer) -> None:
        """Store the timer only if no timer is active, as one atomic step."""
        ...

    @abstractmethod
    async def finish_active_timer(self, entry: TimeEntry) -> None:
        """Append the finalized entry and empty the timer slot atomically."""
        ...

    @abstractmethod
    async def update_active_timer_tags(self, id: EntityId, tags: list[str]) -> None:
        """Replace the tags of the active timer if it is still the given one."""
        ...

    @abstractmethod
    async def get_active_timer(self) -> Optional[ActiveTimer]: ...

    @abstractmethod
    async def clear_active_timer(self) -> None: ...

    @abstractmethod
    async def clear_all(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...
