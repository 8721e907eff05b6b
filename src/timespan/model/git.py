# SPDX-License-Identifier: MIT

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

import pendulum

from timespan.model.time_entry import TimeEntry


class CommitType(StrEnum):
    FEATURE = "feature"
    BUG_FIX = "bug_fix"
    REFACTOR = "refactor"
    DOCUMENTATION = "documentation"
    TEST = "test"
    CHORE = "chore"
    OTHER = "other"


@dataclass
class GitCommit:
    hash: str
    message: str
    author: str
    author_email: str
    timestamp: pendulum.DateTime
    repository_path: Path
    files_changed: list[str] = field(default_factory=list)
    insertions: int = 0
    deletions: int = 0

    @property
    def total_changes(self) -> int:
        return self.insertions + self.deletions

    @property
    def short_hash(self) -> str:
        return self.hash[:8]

    @property
    def summary(self) -> str:
        lines = self.message.strip().splitlines()
        return lines[0] if lines else ""


@dataclass(frozen=True)
class CommitAnalysis:
    commit: GitCommit
    complexity_score: float
    file_type_weights: dict[str, float]
    commit_type: CommitType
    estimated_duration: pendulum.Duration
    confidence_score: float


@dataclass
class GitImportResult:
    imported: list[TimeEntry] = field(default_factory=list)
    skipped: list[GitCommit] = field(default_factory=list)
