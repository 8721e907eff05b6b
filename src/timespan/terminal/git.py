# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from timespan.errors import ProjectNotFoundError
from timespan.model.git import CommitAnalysis, GitCommit, GitImportResult
from timespan.repository.store import get_repository
from timespan.service.git import GitService
from timespan.terminal.completion import complete_project
from timespan.terminal.custom_typer import AliasedTyperGroup
from timespan.terminal.error import run_command
from timespan.terminal.parse import parse_path
from timespan.time import now_utc
from timespan.view.view.views import git as git_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DEFAULT_DAYS = 7

PathOption = Annotated[
    Optional[str],
    typer.Option("--path", "-p", help="repository path (default: current directory)"),
]
DaysOption = Annotated[
    int, typer.Option("--days", help="only commits from the last N days")
]
LimitOption = Annotated[
    Optional[int], typer.Option("--limit", "-l", help="maximum number of commits")
]


@app.command("analyze, a")
def analyze(
    path: PathOption = None,
    days: DaysOption = DEFAULT_DAYS,
    limit: LimitOption = None,
) -> None:
    """Estimate the effort behind recent commits."""
    repo_path = parse_path(path)

    async def analyze_commits() -> list[CommitAnalysis]:
        service = GitService(get_repository())
        since = now_utc().subtract(days=days)
        commits = await service.get_commits(repo_path, since, limit)
        return [service.analyze_commit(commit) for commit in commits]

    git_report.commit_analysis_view(run_command(analyze_commits()))


@app.command("status, s")
def status(path: PathOption = None, days: DaysOption = DEFAULT_DAYS) -> None:
    """Show the repository, its detected project and recent activity."""
    repo_path = parse_path(path)

    async def repository_status() -> tuple[bool, Optional[str], list[GitCommit]]:
        service = GitService(get_repository())
        is_git_repo = await service.is_git_repo(repo_path)
        project_name = await service.detect_project(repo_path)
        commits: list[GitCommit] = []
        if is_git_repo:
            commits = await service.get_recent_commits(repo_path, days)
        return is_git_repo, project_name, commits

    is_git_repo, project_name, commits = run_command(repository_status())
    git_report.git_status_view(repo_path, is_git_repo, project_name, commits, days)


@app.command("import, i")
def import_commits(
    path: PathOption = None,
    project: Annotated[
        Optional[str],
        typer.Option(
            "--project",
            help="project to record time against (default: detected)",
            autocompletion=complete_project,
        ),
    ] = None,
    days: DaysOption = DEFAULT_DAYS,
    limit: LimitOption = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="show entries without saving them")
    ] = False,
) -> None:
    """Record estimated time entries for commits."""
    repo_path = parse_path(path)

    async def import_history() -> GitImportResult:
        service = GitService(get_repository())
        project_name = project
        if project_name is None:
            project_name = await service.detect_project(repo_path)
        if project_name is None:
            raise ProjectNotFoundError(repo_path.name)
        since = now_utc().subtract(days=days)
        return await service.import_commits(
            repo_path, project_name, since, limit, dry_run
        )

    git_report.import_result_view(run_command(import_history()), dry_run)
