# SPDX-License-Identifier: MIT

import asyncio
from pathlib import Path
from typing import Optional

import pendulum

from timespan.errors import InvalidDurationError, ProjectNotFoundError
from timespan.logger import get_logger
from timespan.model.git import CommitAnalysis, GitCommit, GitImportResult
from timespan.model.time_entry import TimeEntry
from timespan.repository.gateway import Repository
from timespan.service import estimate
from timespan.service.entry import add_tag, new_time_entry, stop_time_entry
from timespan.source_control.git import FIELD_SEPARATOR, RECORD_SEPARATOR, Git
from timespan.time import datetime_from_timestamp, now_utc

logger = get_logger(__name__)

CLIENT_PROJECT_PREFIX = "[CLIENT]"
RECENT_COMMITS_LIMIT = 50
GIT_TAG = "git"
COMMIT_TAG_PREFIX = "commit:"


def parse_git_log(output: str, repository_path: Path) -> list[GitCommit]:
    """Parse `git log --numstat` output produced with the LOG_FORMAT pretty format."""
    commits: list[GitCommit] = []

    for record in output.split(RECORD_SEPARATOR):
        if record.strip() == "":
            continue

        fields = record.split(FIELD_SEPARATOR)
        if len(fields) < 6:
            logger.warning("unparseable_git_log_record", record=record[:80])
            continue

        hash, author, author_email, timestamp, message, numstat = fields[:6]
        commit = GitCommit(
            hash=hash.strip(),
            message=message.strip(),
            author=author or "Unknown",
            author_email=author_email,
            timestamp=datetime_from_timestamp(int(timestamp)),
            repository_path=repository_path,
        )

        for line in numstat.splitlines():
            parts = line.split("\t", 2)
            if len(parts) != 3:
                continue
            insertions, deletions, file = parts
            commit.files_changed.append(file)
            # binary files report "-" for both counts
            if insertions.isdigit():
                commit.insertions += int(insertions)
            if deletions.isdigit():
                commit.deletions += int(deletions)

        commits.append(commit)

    return commits


def extract_repo_name_from_url(url: str) -> Optional[str]:
    name = url.rstrip("/").split("/")[-1].split(":")[-1].removesuffix(".git")
    return name or None


def commit_tag(commit: GitCommit) -> str:
    return f"{COMMIT_TAG_PREFIX}{commit.short_hash}"


class GitService:
    def __init__(self, repository: Repository, git: Optional[Git] = None) -> None:
        self.repository = repository
        self.git = git or Git()

    async def get_commits(
        self,
        repo_path: Path,
        since: Optional[pendulum.DateTime] = None,
        limit: Optional[int] = None,
    ) -> list[GitCommit]:
        """
        Read commits from a local repository, newest first.

        Raises:
            FilesystemError: if git is unavailable or repo_path is not a repository
        """
        output = await asyncio.to_thread(self.git.log, repo_path, since, limit)
        commits = parse_git_log(output, repo_path)
        logger.debug("git_commits_read", path=str(repo_path), commits=len(commits))
        return commits

    async def get_recent_commits(self, repo_path: Path, days: int) -> list[GitCommit]:
        since = now_utc().subtract(days=days)
        return await self.get_commits(repo_path, since, RECENT_COMMITS_LIMIT)

    async def is_git_repo(self, repo_path: Path) -> bool:
        return await asyncio.to_thread(self.git.is_git_repo, repo_path)

    def analyze_commit(self, commit: GitCommit) -> CommitAnalysis:
        return estimate.analyze_commit(commit)

    async def detect_project(self, repo_path: Path) -> Optional[str]:
        """
        Guess the project a repository belongs to.

        Tries, in order: a project named after the directory, the client
        project for that directory, and the repository name from the origin
        remote. Falls back to the directory name even when no such project
        is registered.
        """
        dir_name = repo_path.resolve().name or None

        if dir_name is not None:
            if await self.repository.get_project_by_name(dir_name) is not None:
                return dir_name

            client_name = f"{CLIENT_PROJECT_PREFIX} {dir_name}"
            if await self.repository.get_project_by_name(client_name) is not None:
                return client_name

        if await self.is_git_repo(repo_path):
            url = await asyncio.to_thread(self.git.remote_url, repo_path)
            if url is not None:
                repo_name = extract_repo_name_from_url(url)
                if (
                    repo_name is not None
                    and await self.repository.get_project_by_name(repo_name)
                    is not None
                ):
                    return repo_name

        return dir_name

    def build_time_entry(
        self, analysis: CommitAnalysis, project_id: str, project_name: str
    ) -> TimeEntry:
        """The commit is taken as the end of a work interval of the estimated length."""
        commit = analysis.commit
        end_time = commit.timestamp
        start_time = end_time - analysis.estimated_duration

        entry = new_time_entry(project_id, project_name, commit.summary, start_time)
        stop_time_entry(entry, end_time)
        add_tag(entry, GIT_TAG)
        add_tag(entry, analysis.commit_type.value)
        add_tag(entry, commit_tag(commit))
        return entry

    async def import_commits(
        self,
        repo_path: Path,
        project_name: str,
        since: Optional[pendulum.DateTime] = None,
        limit: Optional[int] = None,
        dry_run: bool = False,
    ) -> GitImportResult:
        """
        Record one time entry per commit not imported before.

        Raises:
            ProjectNotFoundError: if project_name is not registered
            FilesystemError: if the commits cannot be read
        """
        project = await self.repository.get_project_by_name(project_name)
        if project is None:
            raise ProjectNotFoundError(project_name)

        existing_tags = {
            tag
            for entry in await self.repository.list_time_entries_by_project(
                project["id"]
            )
            for tag in entry["tags"]
        }

        result = GitImportResult()
        for commit in await self.get_commits(repo_path, since, limit):
            if commit_tag(commit) in existing_tags:
                result.skipped.append(commit)
                continue

            analysis = self.analyze_commit(commit)
            try:
                entry = self.build_time_entry(analysis, project["id"], project["name"])
            except InvalidDurationError:
                logger.warning("commit_skipped", commit=commit.short_hash)
                result.skipped.append(commit)
                continue

            if not dry_run:
                await self.repository.create_time_entry(entry)
                logger.info(
                    "commit_imported",
                    commit=commit.short_hash,
                    project=project["name"],
                    estimated_minutes=int(analysis.estimated_duration.total_seconds())
                    // 60,
                )
            result.imported.append(entry)

        return result
