"""Tests for ProjectService."""

import pendulum
import pytest

from conftest import make_entry
from timespan.errors import (
    InvalidProjectNameError,
    ProjectAlreadyExistsError,
    ProjectHasTimeEntriesError,
    ProjectNotFoundError,
)
from timespan.service.project import ProjectService, new_client_project


@pytest.mark.asyncio
class TestProjectService:
    """Tests for the project registry."""

    @pytest.mark.parametrize(
        "name, description",
        [
            ("Acme", None),
            ("Acme", "Rocket skates"),
            ("[CLIENT] Wile E. Coyote", "Desert logistics"),
            ("ünïcødé ✓", "beschrijving met accenten: é à ï"),
        ],
    )
    async def test_create_then_get_round_trips(self, repository, name, description):
        """Test name and description survive storage unchanged."""
        service = ProjectService(repository)

        await service.create_project(name, description)
        project = await service.get_project(name)

        assert project is not None
        assert project["name"] == name
        assert project["description"] == description
        assert project["is_client_project"] is False

    async def test_duplicate_name_fails_and_keeps_one_row(self, repository):
        """Test a second create with the same name is rejected."""
        service = ProjectService(repository)
        await service.create_project("Acme")

        with pytest.raises(ProjectAlreadyExistsError):
            await service.create_project("Acme", "again")

        projects = await service.list_projects()
        assert [project["name"] for project in projects] == ["Acme"]
        assert projects[0]["description"] is None

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_blank_name_is_rejected(self, repository, name):
        service = ProjectService(repository)

        with pytest.raises(InvalidProjectNameError):
            await service.create_project(name)

        assert await service.list_projects() == []

    async def test_update_description(self, repository):
        service = ProjectService(repository)
        created = await service.create_project("Acme", "old")

        updated = await service.update_project("Acme", "new")

        stored = await service.get_project("Acme")
        assert stored is not None
        assert stored["description"] == "new"
        assert updated["updated_at"] >= created["updated_at"]

    async def test_update_missing_project(self, repository):
        service = ProjectService(repository)

        with pytest.raises(ProjectNotFoundError, match="Project not found: Acme"):
            await service.update_project("Acme", "new")

    async def test_delete_project_without_entries(self, repository):
        service = ProjectService(repository)
        await service.create_project("Acme")

        await service.delete_project("Acme")

        assert await service.get_project("Acme") is None

    async def test_delete_project_with_entries_keeps_everything(self, repository):
        """Test deleting a project that has entries fails and changes nothing."""
        service = ProjectService(repository)
        project = await service.create_project("Acme")
        entry = make_entry(
            project,
            pendulum.datetime(2024, 3, 12, 9, tz="UTC"),
            pendulum.duration(hours=1),
        )
        await repository.create_time_entry(entry)

        with pytest.raises(
            ProjectHasTimeEntriesError,
            match="Cannot delete project with time entries: Acme",
        ):
            await service.delete_project("Acme")

        assert await service.get_project("Acme") is not None
        assert await repository.list_time_entries_by_project(project["id"]) == [entry]

    async def test_delete_missing_project(self, repository):
        service = ProjectService(repository)

        with pytest.raises(ProjectNotFoundError):
            await service.delete_project("Acme")

    async def test_list_client_projects(self, repository):
        service = ProjectService(repository)
        await service.create_project("Internal")
        await repository.create_project(
            new_client_project("[CLIENT] Acme", None, "/clients/Acme")
        )

        clients = await service.list_client_projects()

        assert [project["name"] for project in clients] == ["[CLIENT] Acme"]
        assert clients[0]["directory_path"] == "/clients/Acme"
