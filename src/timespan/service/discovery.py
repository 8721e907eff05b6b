# SPDX-License-Identifier: MIT

import asyncio
from fnmatch import fnmatch
from pathlib import Path
from typing import Optional

from timespan.errors import (
    FilesystemError,
    InvalidDurationError,
    TimespanError,
    sanitize_error_message,
)
from timespan.logger import get_logger
from timespan.model.discovery import ClientDirectory, DiscoveryOptions, DiscoveryResult
from timespan.model.project import Project
from timespan.repository.gateway import Repository
from timespan.service.project import new_client_project
from timespan.time import datetime_from_timestamp, now_utc

logger = get_logger(__name__)


def should_exclude(name: str, exclude_patterns: list[str]) -> bool:
    return any(fnmatch(name, pattern) for pattern in exclude_patterns)


def generate_description(name: str, path: Path, is_git_repo: bool) -> str:
    parts = ["Product release work" if "Release" in name else "Client project"]
    if is_git_repo:
        parts.append("(Git repository)")
    parts.append(f"Location: {path}")
    return " ".join(parts)


def project_name_for(directory_name: str, prefix: Optional[str]) -> str:
    if prefix:
        return f"{prefix} {directory_name}"
    return directory_name


def analyze_directory(path: Path) -> ClientDirectory:
    is_git_repo = (path / ".git").exists()
    try:
        last_modified = datetime_from_timestamp(int(path.stat().st_mtime))
    except OSError:
        last_modified = None
    return ClientDirectory(
        name=path.name,
        path=path,
        is_git_repo=is_git_repo,
        last_modified=last_modified,
        suggested_description=generate_description(path.name, path, is_git_repo),
    )


def scan_client_directories(
    base_path: Path, exclude_patterns: list[str]
) -> list[ClientDirectory]:
    """
    List the immediate subdirectories of base_path that are not excluded.

    Raises:
        InvalidDurationError: if base_path does not exist
        FilesystemError: if base_path cannot be read
    """
    if not base_path.exists():
        raise InvalidDurationError(f"Base path does not exist: {base_path}")

    try:
        children = sorted(base_path.iterdir(), key=lambda child: child.name)
    except OSError as e:
        raise FilesystemError(e) from e

    return [
        analyze_directory(child)
        for child in children
        if child.is_dir() and not should_exclude(child.name, exclude_patterns)
    ]


class ClientDiscoveryService:
    def __init__(self, repository: Repository) -> None:
        self.repository = repository

    async def discover_clients(self, options: DiscoveryOptions) -> DiscoveryResult:
        """
        Register every client directory under options.base_path as a project.

        New directories become client projects, known ones with a moved path
        are updated and unchanged ones are skipped. Failures on a single
        directory are collected in the result's errors.
        """
        directories = await asyncio.to_thread(
            scan_client_directories, options.base_path, options.exclude_patterns
        )

        result = DiscoveryResult(discovered_directories=directories)
        for directory in directories:
            try:
                await self.__register_directory(directory, options, result)
            except TimespanError as e:
                logger.warning(
                    "client_discovery_failed", directory=directory.name, error=str(e)
                )
                result.errors.append(f"{directory.name}: {sanitize_error_message(e)}")

        logger.info(
            "client_discovery_finished",
            base_path=str(options.base_path),
            discovered=len(result.discovered_directories),
            created=len(result.created_projects),
            updated=len(result.updated_projects),
            dry_run=options.dry_run,
        )
        return result

    async def __register_directory(
        self,
        directory: ClientDirectory,
        options: DiscoveryOptions,
        result: DiscoveryResult,
    ) -> None:
        name = project_name_for(directory.name, options.project_prefix)
        directory_path = str(directory.path)

        existing = await self.repository.get_project_by_name(name)
        if existing is None:
            project = new_client_project(
                name, directory.suggested_description, directory_path
            )
            if not options.dry_run:
                await self.repository.create_project(project)
            logger.info("client_discovered", project=name, path=directory_path)
            result.created_projects.append(project)
            return

        if existing["directory_path"] == directory_path:
            result.skipped_directories.append(f"{name} (already exists)")
            return

        existing["directory_path"] = directory_path
        existing["is_client_project"] = True
        existing["updated_at"] = now_utc()
        if not options.dry_run:
            await self.repository.update_project(existing)
        logger.info("client_project_updated", project=name, path=directory_path)
        result.updated_projects.append(existing)

    async def list_client_projects(self) -> list[Project]:
        return [
            project
            for project in await self.repository.list_projects()
            if project["is_client_project"]
        ]
