# SPDX-License-Identifier: MIT

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pendulum

from timespan.model.project import Project

DEFAULT_EXCLUDE_PATTERNS: list[str] = [
    ".DS_Store",
    ".git",
    # all hidden files and directories
    ".*",
    "*.pdf",
    "*.mp4",
    "*.zip",
    "*.whisper",
    "*.html",
    "*.mht",
    "*.pages",
    "*.md",
    # editor and IDE folders
    ".vscode",
    ".idea",
    ".claude",
    ".cursor",
    ".vscode-insiders",
    ".atom",
    ".sublime-text",
    ".vim",
    ".emacs.d",
]


@dataclass
class DiscoveryOptions:
    base_path: Path
    exclude_patterns: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS)
    )
    project_prefix: Optional[str] = "[CLIENT]"
    dry_run: bool = False


@dataclass(frozen=True)
class ClientDirectory:
    name: str
    path: Path
    is_git_repo: bool
    last_modified: Optional[pendulum.DateTime]
    suggested_description: Optional[str]


@dataclass
class DiscoveryResult:
    discovered_directories: list[ClientDirectory] = field(default_factory=list)
    created_projects: list[Project] = field(default_factory=list)
    updated_projects: list[Project] = field(default_factory=list)
    skipped_directories: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
