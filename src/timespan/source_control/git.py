# SPDX-License-Identifier: MIT

import shutil
import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional

import pendulum

from timespan.errors import FilesystemError

# git log output: one record per commit, fields split by unit separators,
# followed by the --numstat lines
RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x1f"
LOG_FORMAT = "%x1e%H%x1f%an%x1f%ae%x1f%ct%x1f%B%x1f"
GIT_DATE_FORMAT = "YYYY-MM-DD HH:mm:ss ZZ"


class GitCommand(Enum):
    IS_REPO = 0
    LOG = 1
    REMOTE_URL = 2


class Git:
    def is_git_repo(self, folder: Path) -> bool:
        self.__fail_if_git_not_available()
        if not folder.is_dir():
            return False
        result = self.__execute_git_command(GitCommand.IS_REPO, folder)
        return result.returncode == 0

    def log(
        self,
        folder: Path,
        since: Optional[pendulum.DateTime] = None,
        limit: Optional[int] = None,
    ) -> str:
        self.__fail_if_git_not_available()
        if not self.is_git_repo(folder):
            raise FilesystemError(f"Failed to open git repository at {folder}")

        result = self.__execute_git_command(
            GitCommand.LOG, folder, since=since, limit=limit
        )
        if result.returncode != 0:
            # a freshly initialized repository has no HEAD yet
            if "does not have any commits" in result.stderr:
                return ""
            raise FilesystemError(f"git log failed: {result.stderr.strip()}")
        return result.stdout

    def remote_url(self, folder: Path, remote: str = "origin") -> Optional[str]:
        self.__fail_if_git_not_available()
        result = self.__execute_git_command(GitCommand.REMOTE_URL, folder, remote=remote)
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        return url or None

    def __fail_if_git_not_available(self) -> None:
        git_available = shutil.which("git")
        if git_available is None:
            raise FilesystemError("Git is not available on the system")

    def __execute_git_command(
        self,
        command: GitCommand,
        folder: Path,
        since: Optional[pendulum.DateTime] = None,
        limit: Optional[int] = None,
        remote: str = "origin",
    ) -> subprocess.CompletedProcess[str]:
        git_command: list[str] = ["git", "-C", str(folder.resolve())]

        match command:
            case GitCommand.IS_REPO:
                git_command += ["rev-parse", "--git-dir"]
            case GitCommand.LOG:
                git_command += ["log", "--numstat", "--no-color", f"--format={LOG_FORMAT}"]
                if since is not None:
                    git_command.append(
                        f"--since={since.in_tz('UTC').format(GIT_DATE_FORMAT)}"
                    )
                if limit is not None:
                    git_command.append(f"--max-count={limit}")
            case GitCommand.REMOTE_URL:
                git_command += ["remote", "get-url", remote]

        try:
            return subprocess.run(
                git_command,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
            )
        except OSError as e:
            raise FilesystemError(e) from e
