# SPDX-License-Identifier: MIT

from typing import Optional

from timespan.errors import (
    InvalidProjectNameError,
    ProjectAlreadyExistsError,
    ProjectNotFoundError,
)
from timespan.logger import get_logger
from timespan.model.project import Project
from timespan.repository.gateway import Repository
from timespan.template.project import get_project_template
from timespan.time import now_utc

logger = get_logger(__name__)


def new_project(name: str, description: Optional[str] = None) -> Project:
    project = get_project_template()
    project["name"] = name
    project["description"] = description
    return project


def new_client_project(
    name: str, description: Optional[str], directory_path: str
) -> Project:
    project = new_project(name, description)
    project["directory_path"] = directory_path
    project["is_client_project"] = True
    return project


class ProjectService:
    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    async def create_project(
        self, name: str, description: Optional[str] = None
    ) -> Project:
        """
        Create a project with a unique, non-empty name.

        Raises:
            InvalidProjectNameError: if name is empty or only whitespace
            ProjectAlreadyExistsError: if a project with this name exists
        """
        if name.strip() == "":
            raise InvalidProjectNameError(name)

        # the store's unique constraint also rejects duplicates
        if await self.repository.get_project_by_name(name) is not None:
            raise ProjectAlreadyExistsError(name)

        project = new_project(name, description)
        await self.repository.create_project(project)

        logger.info("project_created", project=name, project_id=project["id"])
        return project

    async def get_project(self, name: str) -> Optional[Project]:
        return await self.repository.get_project_by_name(name)

    async def list_projects(self) -> list[Project]:
        return await self.repository.list_projects()

    async def list_client_projects(self) -> list[Project]:
        return [
            project
            for project in await self.repository.list_projects()
            if project["is_client_project"]
        ]

    async def update_project(
        self, name: str, new_description: Optional[str]
    ) -> Project:
        project = await self.repository.get_project_by_name(name)
        if project is None:
            raise ProjectNotFoundError(name)

        project["description"] = new_description
        project["updated_at"] = now_utc()
        await self.repository.update_project(project)

        logger.info("project_updated", project=name)
        return project

    async def delete_project(self, name: str) -> None:
        project = await self.repository.get_project_by_name(name)
        if project is None:
            raise ProjectNotFoundError(name)

        await self.repository.delete_project(project["id"])
        logger.info("project_deleted", project=name)
