"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Iterator

import pendulum
import pytest

from timespan import configuration
from timespan.model.project import Project
from timespan.model.time_entry import TimeEntry
from timespan.repository.configuration import CONFIGURATION_REPO
from timespan.repository.sqlite import SqliteRepository
from timespan.repository.store import close_repository
from timespan.service.entry import new_time_entry, stop_time_entry
from timespan.service.project import new_project


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    return tmp_path / "timespan.db"


@pytest.fixture
def repository(database_path: Path) -> Iterator[SqliteRepository]:
    """A repository on a fresh database file, closed after the test."""
    repo = SqliteRepository(database_path)
    yield repo
    repo.close()


@pytest.fixture(autouse=True)
def isolated_configuration(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Point the config file and default database into tmp_path."""
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.setattr(
        configuration, "DATA_DATABASE_PATH", tmp_path / "default" / "timespan.db"
    )
    CONFIGURATION_REPO.reload()
    yield
    close_repository()
    CONFIGURATION_REPO.reload()


def make_project(name: str = "Acme", description: str | None = None) -> Project:
    return new_project(name, description)


def make_entry(
    project: Project,
    start: pendulum.DateTime,
    duration: pendulum.Duration,
    task: str | None = None,
) -> TimeEntry:
    entry = new_time_entry(project["id"], project["name"], task, start)
    stop_time_entry(entry, start + duration)
    return entry
