"""Tests for client directory discovery."""

import sqlite3

import pytest

from timespan.errors import InvalidDurationError, StorageError
from timespan.model.discovery import DEFAULT_EXCLUDE_PATTERNS, DiscoveryOptions
from timespan.service.discovery import (
    ClientDiscoveryService,
    generate_description,
    scan_client_directories,
    should_exclude,
)
from timespan.service.project import ProjectService


@pytest.fixture
def clients_dir(tmp_path):
    base = tmp_path / "Clients"
    base.mkdir()
    (base / "Acme").mkdir()
    (base / "Beta Release").mkdir()
    (base / "Beta Release" / ".git").mkdir()
    (base / ".hidden").mkdir()
    (base / ".vscode").mkdir()
    (base / "notes.md").write_text("not a directory")
    (base / "contract.pdf").write_text("not a directory")
    return base


@pytest.mark.parametrize(
    "name, excluded",
    [
        (".DS_Store", True),
        (".git", True),
        (".anything", True),
        ("report.pdf", True),
        ("README.md", True),
        ("Acme", False),
        ("Beta Release", False),
    ],
)
def test_should_exclude_default_patterns(name, excluded):
    assert should_exclude(name, DEFAULT_EXCLUDE_PATTERNS) is excluded


def test_generate_description(tmp_path):
    assert generate_description("Acme", tmp_path, False) == (
        f"Client project Location: {tmp_path}"
    )
    assert generate_description("Beta Release", tmp_path, True) == (
        f"Product release work (Git repository) Location: {tmp_path}"
    )


def test_scan_lists_sorted_subdirectories(clients_dir):
    directories = scan_client_directories(clients_dir, DEFAULT_EXCLUDE_PATTERNS)

    assert [directory.name for directory in directories] == ["Acme", "Beta Release"]
    assert directories[0].is_git_repo is False
    assert directories[1].is_git_repo is True
    assert directories[0].last_modified is not None
    assert directories[0].path == clients_dir / "Acme"


def test_scan_missing_base_path(tmp_path):
    with pytest.raises(InvalidDurationError, match="Base path does not exist"):
        scan_client_directories(tmp_path / "missing", DEFAULT_EXCLUDE_PATTERNS)


@pytest.mark.asyncio
class TestDiscoverClients:
    """Tests for registering discovered directories as projects."""

    async def test_creates_client_projects(self, repository, clients_dir):
        service = ClientDiscoveryService(repository)

        result = await service.discover_clients(DiscoveryOptions(base_path=clients_dir))

        assert [p["name"] for p in result.created_projects] == [
            "[CLIENT] Acme",
            "[CLIENT] Beta Release",
        ]
        stored = await repository.get_project_by_name("[CLIENT] Acme")
        assert stored is not None
        assert stored["is_client_project"] is True
        assert stored["directory_path"] == str(clients_dir / "Acme")
        assert result.errors == []

    async def test_second_run_skips_known_directories(self, repository, clients_dir):
        service = ClientDiscoveryService(repository)
        options = DiscoveryOptions(base_path=clients_dir)
        await service.discover_clients(options)

        result = await service.discover_clients(options)

        assert result.created_projects == []
        assert result.updated_projects == []
        assert result.skipped_directories == [
            "[CLIENT] Acme (already exists)",
            "[CLIENT] Beta Release (already exists)",
        ]

    async def test_moved_directory_updates_existing_project(
        self, repository, clients_dir
    ):
        await ProjectService(repository).create_project("[CLIENT] Acme", "manual")
        service = ClientDiscoveryService(repository)

        result = await service.discover_clients(DiscoveryOptions(base_path=clients_dir))

        assert [p["name"] for p in result.updated_projects] == ["[CLIENT] Acme"]
        stored = await repository.get_project_by_name("[CLIENT] Acme")
        assert stored is not None
        assert stored["directory_path"] == str(clients_dir / "Acme")
        assert stored["is_client_project"] is True
        assert stored["description"] == "manual"

    async def test_dry_run_writes_nothing(self, repository, clients_dir):
        service = ClientDiscoveryService(repository)

        result = await service.discover_clients(
            DiscoveryOptions(base_path=clients_dir, dry_run=True)
        )

        assert len(result.created_projects) == 2
        assert await repository.list_projects() == []

    async def test_without_prefix(self, repository, clients_dir):
        service = ClientDiscoveryService(repository)

        result = await service.discover_clients(
            DiscoveryOptions(base_path=clients_dir, project_prefix=None)
        )

        assert [p["name"] for p in result.created_projects] == ["Acme", "Beta Release"]

    async def test_custom_exclude_patterns(self, repository, clients_dir):
        service = ClientDiscoveryService(repository)

        result = await service.discover_clients(
            DiscoveryOptions(
                base_path=clients_dir, exclude_patterns=[".*", "Beta*"]
            )
        )

        assert [d.name for d in result.discovered_directories] == ["Acme"]

    async def test_failure_on_one_directory_does_not_stop_others(
        self, repository, clients_dir, monkeypatch
    ):
        service = ClientDiscoveryService(repository)
        original = repository.create_project

        async def create_project(project):
            if project["name"] == "[CLIENT] Acme":
                raise InvalidDurationError("boom")
            await original(project)

        monkeypatch.setattr(repository, "create_project", create_project)

        result = await service.discover_clients(DiscoveryOptions(base_path=clients_dir))

        assert len(result.errors) == 1
        assert result.errors[0].startswith("Acme:")
        assert [p["name"] for p in result.created_projects] == ["[CLIENT] Beta Release"]

    async def test_storage_failure_on_one_directory_is_sanitized(
        self, repository, clients_dir, monkeypatch
    ):
        service = ClientDiscoveryService(repository)

        async def create_project(project):
            raise StorageError(sqlite3.OperationalError("disk I/O error at /secret/db"))

        monkeypatch.setattr(repository, "create_project", create_project)

        result = await service.discover_clients(DiscoveryOptions(base_path=clients_dir))

        assert result.errors == [
            "Acme: Database operation failed",
            "Beta Release: Database operation failed",
        ]
        assert result.created_projects == []

    async def test_missing_base_path(self, repository, tmp_path):
        service = ClientDiscoveryService(repository)

        with pytest.raises(InvalidDurationError):
            await service.discover_clients(
                DiscoveryOptions(base_path=tmp_path / "missing")
            )

    async def test_list_client_projects(self, repository, clients_dir):
        service = ClientDiscoveryService(repository)
        await ProjectService(repository).create_project("Internal")
        await service.discover_clients(DiscoveryOptions(base_path=clients_dir))

        clients = await service.list_client_projects()

        assert [p["name"] for p in clients] == [
            "[CLIENT] Acme",
            "[CLIENT] Beta Release",
        ]
