# SPDX-License-Identifier: MIT

import asyncio
import json
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TypeVar

import pendulum

from timespan import time
from timespan.errors import (
    NoActiveTimerError,
    ProjectAlreadyExistsError,
    ProjectHasTimeEntriesError,
    StorageError,
    TimerAlreadyRunningError,
)
from timespan.logger import get_logger
from timespan.model.entity_id import EntityId
from timespan.model.project import Project
from timespan.model.time_entry import TimeEntry
from timespan.model.timer import ActiveTimer
from timespan.repository.gateway import Repository

logger = get_logger(__name__)

T = TypeVar("T")

IN_MEMORY = ":memory:"

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS projects (
        id TEXT PRIMARY KEY,
        name TEXT UNIQUE NOT NULL,
        description TEXT,
        directory_path TEXT,
        is_client_project INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS time_entries (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL,
        project_name TEXT NOT NULL,
        task_description TEXT,
        start_time TEXT NOT NULL,
        end_time TEXT,
        duration_seconds INTEGER,
        tags TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        FOREIGN KEY (project_id) REFERENCES projects (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS active_timer (
        id TEXT PRIMARY KEY,
        project_id TEXT NOT NULL,
        project_name TEXT NOT NULL,
        task_description TEXT,
        start_time TEXT NOT NULL,
        tags TEXT
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_time_entries_start_time ON time_entries (start_time)",
    "CREATE INDEX IF NOT EXISTS idx_time_entries_project_id ON time_entries (project_id)",
]

PROJECT_COLUMNS = (
    "id, name, description, directory_path, is_client_project, created_at, updated_at"
)
TIME_ENTRY_COLUMNS = (
    "id, project_id, project_name, task_description, start_time, end_time, "
    "duration_seconds, tags, created_at, updated_at"
)
ACTIVE_TIMER_COLUMNS = "id, project_id, project_name, task_description, start_time, tags"


class SqliteRepository(Repository):
    """
    Repository backed by a single sqlite3 connection.

    The connection is shared by every call and guarded by one lock. Work runs
    on a worker thread so callers can await it without blocking the event
    loop.
    """

    def __init__(self, database_path: Path | str = IN_MEMORY) -> None:
        self._database_path = str(database_path)
        self._lock = threading.Lock()

        try:
            if self._database_path != IN_MEMORY:
                Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                self._database_path, check_same_thread=False, isolation_level=None
            )
            self._connection.row_factory = sqlite3.Row
            self._connection.execute("PRAGMA foreign_keys = ON")
            self.__create_tables()
        except (sqlite3.Error, OSError) as e:
            logger.error(
                "database_open_failed", database=self._database_path, error=str(e)
            )
            raise StorageError(e) from e

        logger.debug("database_opened", database=self._database_path)

    @classmethod
    def in_memory(cls) -> "SqliteRepository":
        return cls(IN_MEMORY)

    def __create_tables(self) -> None:
        with self.__transaction() as connection:
            for statement in SCHEMA:
                connection.execute(statement)

    @contextmanager
    def __transaction(self) -> Iterator[sqlite3.Connection]:
        self._connection.execute("BEGIN IMMEDIATE")
        try:
            yield self._connection
        except BaseException:
            self._connection.execute("ROLLBACK")
            raise
        self._connection.execute("COMMIT")

    def __locked(self, operation: Callable[..., T], *args: Any) -> T:
        with self._lock:
            try:
                return operation(*args)
            except sqlite3.Error as e:
                logger.error(
                    "storage_operation_failed",
                    operation=operation.__name__,
                    error=str(e),
                )
                raise StorageError(e) from e

    async def __run(self, operation: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(self.__locked, operation, *args)

    def close(self) -> None:
        with self._lock:
            self._connection.close()
        logger.debug("database_closed", database=self._database_path)

    # Serialization

    def __convert_project_for_serialization(self, project: Project) -> dict[str, Any]:
        return {
            "id": project["id"],
            "name": project["name"],
            "description": project["description"],
            "directory_path": project["directory_path"],
            "is_client_project": int(project["is_client_project"]),
            "created_at": time.datetime_to_iso_str(project["created_at"]),
            "updated_at": time.datetime_to_iso_str(project["updated_at"]),
        }

    def __convert_project_for_deserialization(self, row: sqlite3.Row) -> Project:
        return {
            "id": row["id"],
            "name": row["name"],
            "description": row["description"],
            "directory_path": row["directory_path"],
            "is_client_project": bool(row["is_client_project"]),
            "created_at": time.datetime_from_str(row["created_at"]),
            "updated_at": time.datetime_from_str(row["updated_at"]),
        }

    def __convert_time_entry_for_serialization(
        self, entry: TimeEntry
    ) -> dict[str, Any]:
        return {
            "id": entry["id"],
            "project_id": entry["project_id"],
            "project_name": entry["project_name"],
            "task_description": entry["task_description"],
            "start_time": time.datetime_to_iso_str(entry["start_time"]),
            "end_time": time.datetime_to_iso_str_optional(entry["end_time"]),
            "duration_seconds": time.duration_to_seconds_optional(entry["duration"]),
            "tags": self.__tags_to_json(entry["tags"]),
            "created_at": time.datetime_to_iso_str(entry["created_at"]),
            "updated_at": time.datetime_to_iso_str(entry["updated_at"]),
        }

    def __convert_time_entry_for_deserialization(self, row: sqlite3.Row) -> TimeEntry:
        return {
            "id": row["id"],
            "project_id": row["project_id"],
            "project_name": row["project_name"],
            "task_description": row["task_description"],
            "start_time": time.datetime_from_str(row["start_time"]),
            "end_time": time.datetime_from_str_optional(row["end_time"]),
            "duration": time.duration_from_seconds_optional(row["duration_seconds"]),
            "tags": self.__tags_from_json(row["tags"]),
            "created_at": time.datetime_from_str(row["created_at"]),
            "updated_at": time.datetime_from_str(row["updated_at"]),
        }

    def __convert_timer_for_serialization(self, timer: ActiveTimer) -> dict[str, Any]:
        return {
            "id": timer["id"],
            "project_id": timer["project_id"],
            "project_name": timer["project_name"],
            "task_description": timer["task_description"],
            "start_time": time.datetime_to_iso_str(timer["start_time"]),
            "tags": self.__tags_to_json(timer["tags"]),
        }

    def __convert_timer_for_deserialization(self, row: sqlite3.Row) -> ActiveTimer:
        return {
            "id": row["id"],
            "project_id": row["project_id"],
            "project_name": row["project_name"],
            "task_description": row["task_description"],
            "start_time": time.datetime_from_str(row["start_time"]),
            "tags": self.__tags_from_json(row["tags"]),
        }

    def __tags_to_json(self, tags: list[str]) -> Optional[str]:
        if len(tags) == 0:
            return None
        return json.dumps(tags)

    def __tags_from_json(self, tags: Optional[str]) -> list[str]:
        if tags is None:
            return []
        try:
            return list(json.loads(tags))
        except ValueError:
            logger.warning("invalid_tags_column", value=tags)
            return []

    # Projects

    async def create_project(self, project: Project) -> None:
        await self.__run(self.__create_project, project)

    def __create_project(self, project: Project) -> None:
        try:
            with self.__transaction() as connection:
                connection.execute(
                    f"INSERT INTO projects ({PROJECT_COLUMNS}) "
                    "VALUES (:id, :name, :description, :directory_path, "
                    ":is_client_project, :created_at, :updated_at)",
                    self.__convert_project_for_serialization(project),
                )
        except sqlite3.IntegrityError as e:
            raise ProjectAlreadyExistsError(project["name"]) from e

    async def get_project_by_name(self, name: str) -> Optional[Project]:
        return await self.__run(self.__get_project, "name", name)

    async def get_project_by_id(self, id: EntityId) -> Optional[Project]:
        return await self.__run(self.__get_project, "id", id)

    def __get_project(self, column: str, value: str) -> Optional[Project]:
        row = self._connection.execute(
            f"SELECT {PROJECT_COLUMNS} FROM projects WHERE {column} = ?", (value,)
        ).fetchone()
        if row is None:
            return None
        return self.__convert_project_for_deserialization(row)

    async def list_projects(self) -> list[Project]:
        return await self.__run(self.__list_projects)

    def __list_projects(self) -> list[Project]:
        rows = self._connection.execute(
            f"SELECT {PROJECT_COLUMNS} FROM projects ORDER BY name ASC"
        ).fetchall()
        return [self.__convert_project_for_deserialization(row) for row in rows]

    async def update_project(self, project: Project) -> None:
        await self.__run(self.__update_project, project)

    def __update_project(self, project: Project) -> None:
        try:
            with self.__transaction() as connection:
                connection.execute(
                    "UPDATE projects SET name = :name, description = :description, "
                    "directory_path = :directory_path, "
                    "is_client_project = :is_client_project, "
                    "created_at = :created_at, updated_at = :updated_at "
                    "WHERE id = :id",
                    self.__convert_project_for_serialization(project),
                )
        except sqlite3.IntegrityError as e:
            raise ProjectAlreadyExistsError(project["name"]) from e

    async def delete_project(self, id: EntityId) -> None:
        await self.__run(self.__delete_project, id)

    def __delete_project(self, id: EntityId) -> None:
        with self.__transaction() as connection:
            if self.__count_time_entries_for_project(id) > 0:
                project = self.__get_project("id", id)
                raise ProjectHasTimeEntriesError(
                    project["name"] if project is not None else id
                )
            connection.execute("DELETE FROM projects WHERE id = ?", (id,))

    # Time entries

    async def create_time_entry(self, entry: TimeEntry) -> None:
        await self.__run(self.__create_time_entry, entry)

    def __create_time_entry(self, entry: TimeEntry) -> None:
        with self.__transaction() as connection:
            self.__insert_time_entry(connection, entry)

    def __insert_time_entry(
        self, connection: sqlite3.Connection, entry: TimeEntry
    ) -> None:
        connection.execute(
            f"INSERT INTO time_entries ({TIME_ENTRY_COLUMNS}) "
            "VALUES (:id, :project_id, :project_name, :task_description, "
            ":start_time, :end_time, :duration_seconds, :tags, "
            ":created_at, :updated_at)",
            self.__convert_time_entry_for_serialization(entry),
        )

    async def get_time_entry_by_id(self, id: EntityId) -> Optional[TimeEntry]:
        return await self.__run(self.__get_time_entry_by_id, id)

    def __get_time_entry_by_id(self, id: EntityId) -> Optional[TimeEntry]:
        row = self._connection.execute(
            f"SELECT {TIME_ENTRY_COLUMNS} FROM time_entries WHERE id = ?", (id,)
        ).fetchone()
        if row is None:
            return None
        return self.__convert_time_entry_for_deserialization(row)

    async def get_active_time_entry(self) -> Optional[TimeEntry]:
        return await self.__run(self.__get_active_time_entry)

    def __get_active_time_entry(self) -> Optional[TimeEntry]:
        row = self._connection.execute(
            f"SELECT {TIME_ENTRY_COLUMNS} FROM time_entries "
            "WHERE end_time IS NULL ORDER BY start_time DESC LIMIT 1"
        ).fetchone()
        if row is None:
            return None
        return self.__convert_time_entry_for_deserialization(row)

    async def list_time_entries_by_project(
        self, project_id: EntityId
    ) -> list[TimeEntry]:
        return await self.__run(self.__list_time_entries_by_project, project_id)

    def __list_time_entries_by_project(self, project_id: EntityId) -> list[TimeEntry]:
        rows = self._connection.execute(
            f"SELECT {TIME_ENTRY_COLUMNS} FROM time_entries "
            "WHERE project_id = ? ORDER BY start_time DESC",
            (project_id,),
        ).fetchall()
        return [self.__convert_time_entry_for_deserialization(row) for row in rows]

    async def list_time_entries_by_date_range(
        self, start: pendulum.DateTime, end: pendulum.DateTime
    ) -> list[TimeEntry]:
        return await self.__run(self.__list_time_entries_by_date_range, start, end)

    def __list_time_entries_by_date_range(
        self, start: pendulum.DateTime, end: pendulum.DateTime
    ) -> list[TimeEntry]:
        rows = self._connection.execute(
            f"SELECT {TIME_ENTRY_COLUMNS} FROM time_entries "
            "WHERE start_time >= ? AND start_time <= ? ORDER BY start_time ASC",
            (time.datetime_to_iso_str(start), time.datetime_to_iso_str(end)),
        ).fetchall()
        return [self.__convert_time_entry_for_deserialization(row) for row in rows]

    async def update_time_entry(self, entry: TimeEntry) -> None:
        await self.__run(self.__update_time_entry, entry)

    def __update_time_entry(self, entry: TimeEntry) -> None:
        with self.__transaction() as connection:
            connection.execute(
                "UPDATE time_entries SET project_id = :project_id, "
                "project_name = :project_name, task_description = :task_description, "
                "start_time = :start_time, end_time = :end_time, "
                "duration_seconds = :duration_seconds, tags = :tags, "
                "created_at = :created_at, updated_at = :updated_at "
                "WHERE id = :id",
                self.__convert_time_entry_for_serialization(entry),
            )

    async def count_time_entries_for_project(self, project_id: EntityId) -> int:
        return await self.__run(self.__count_time_entries_for_project, project_id)

    def __count_time_entries_for_project(self, project_id: EntityId) -> int:
        row = self._connection.execute(
            "SELECT COUNT(*) FROM time_entries WHERE project_id = ?", (project_id,)
        ).fetchone()
        return int(row[0])

    # Active timer

    async def save_active_timer(self, timer: ActiveTimer) -> None:
        await self.__run(self.__save_active_timer, timer)

    def __save_active_timer(self, timer: ActiveTimer) -> None:
        with self.__transaction() as connection:
            connection.execute("DELETE FROM active_timer")
            self.__insert_active_timer(connection, timer)

    async def start_active_timer(self, timer: ActiveTimer) -> None:
        await self.__run(self.__start_active_timer, timer)

    def __start_active_timer(self, timer: ActiveTimer) -> None:
        with self.__transaction() as connection:
            current = self.__get_active_timer()
            if current is not None:
                raise TimerAlreadyRunningError(current["project_name"])
            self.__insert_active_timer(connection, timer)

    def __insert_active_timer(
        self, connection: sqlite3.Connection, timer: ActiveTimer
    ) -> None:
        connection.execute(
            f"INSERT INTO active_timer ({ACTIVE_TIMER_COLUMNS}) "
            "VALUES (:id, :project_id, :project_name, :task_description, "
            ":start_time, :tags)",
            self.__convert_timer_for_serialization(timer),
        )

    async def finish_active_timer(self, entry: TimeEntry) -> None:
        await self.__run(self.__finish_active_timer, entry)

    def __finish_active_timer(self, entry: TimeEntry) -> None:
        with self.__transaction() as connection:
            if self.__get_active_timer() is None:
                raise NoActiveTimerError()
            self.__insert_time_entry(connection, entry)
            connection.execute("DELETE FROM active_timer")

    async def update_active_timer_tags(self, id: EntityId, tags: list[str]) -> None:
        await self.__run(self.__update_active_timer_tags, id, tags)

    def __update_active_timer_tags(self, id: EntityId, tags: list[str]) -> None:
        with self.__transaction() as connection:
            cursor = connection.execute(
                "UPDATE active_timer SET tags = ? WHERE id = ?",
                (self.__tags_to_json(tags), id),
            )
            if cursor.rowcount == 0:
                raise NoActiveTimerError()

    async def get_active_timer(self) -> Optional[ActiveTimer]:
        return await self.__run(self.__get_active_timer)

    def __get_active_timer(self) -> Optional[ActiveTimer]:
        row = self._connection.execute(
            f"SELECT {ACTIVE_TIMER_COLUMNS} FROM active_timer LIMIT 1"
        ).fetchone()
        if row is None:
            return None
        return self.__convert_timer_for_deserialization(row)

    async def clear_active_timer(self) -> None:
        await self.__run(self.__clear_active_timer)

    def __clear_active_timer(self) -> None:
        with self.__transaction() as connection:
            connection.execute("DELETE FROM active_timer")

    async def clear_all(self) -> None:
        await self.__run(self.__clear_all)

    def __clear_all(self) -> None:
        with self.__transaction() as connection:
            connection.execute("DELETE FROM time_entries")
            connection.execute("DELETE FROM projects")
            connection.execute("DELETE FROM active_timer")
