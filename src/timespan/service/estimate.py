# SPDX-License-Identifier: MIT

"""
Heuristic effort estimation for commits.

Everything here is a pure function of commit metadata so it can be used
without a repository or a database.
"""

from pathlib import PurePath

import pendulum

from timespan.model.git import CommitAnalysis, CommitType, GitCommit

MAX_COMMIT_DURATION = pendulum.duration(hours=4)

BASE_MINUTES: dict[CommitType, int] = {
    CommitType.FEATURE: 45,
    CommitType.BUG_FIX: 60,
    CommitType.REFACTOR: 30,
    CommitType.DOCUMENTATION: 15,
    CommitType.TEST: 25,
    CommitType.CHORE: 10,
    CommitType.OTHER: 20,
}

FILE_TYPE_WEIGHTS: dict[str, float] = {
    "rs": 1.5,
    "py": 1.3,
    "js": 1.2,
    "ts": 1.2,
    "java": 1.4,
    "cpp": 1.4,
    "c": 1.4,
    "md": 0.5,
    "txt": 0.5,
    "json": 0.3,
    "toml": 0.3,
    "yaml": 0.3,
    "yml": 0.3,
    "html": 0.7,
    "css": 0.7,
}
DEFAULT_FILE_TYPE_WEIGHT = 1.0

FILE_BONUS_MINUTES: dict[str, int] = {
    "rs": 5,
    "js": 3,
    "ts": 3,
    "md": 1,
}


def file_extension(file: str) -> str:
    return PurePath(file).suffix.removeprefix(".")


def detect_commit_type(message: str) -> CommitType:
    msg = message.lower()

    if msg.startswith("feat") or "feature" in msg or "add" in msg:
        return CommitType.FEATURE
    elif msg.startswith("fix") or "bug" in msg or "error" in msg:
        return CommitType.BUG_FIX
    elif "refactor" in msg:
        return CommitType.REFACTOR
    elif msg.startswith("docs") or "documentation" in msg:
        return CommitType.DOCUMENTATION
    elif "test" in msg:
        return CommitType.TEST
    elif "chore" in msg:
        return CommitType.CHORE
    return CommitType.OTHER


def calculate_complexity_score(commit: GitCommit) -> float:
    """Average of a line-volume score (capped at 3) and a file-count score (capped at 2)."""
    lines_score = min(commit.total_changes / 100.0, 3.0)
    files_score = min(len(commit.files_changed) / 10.0, 2.0)
    return (lines_score + files_score) / 2.0


def get_file_type_weights(files: list[str]) -> dict[str, float]:
    weights: dict[str, float] = {}
    for file in files:
        extension = file_extension(file)
        weight = FILE_TYPE_WEIGHTS.get(extension, DEFAULT_FILE_TYPE_WEIGHT)
        key = extension or "unknown"
        weights[key] = weights.get(key, 0.0) + weight
    return weights


def estimate_commit_time(
    commit: GitCommit, commit_type: CommitType, complexity_score: float
) -> pendulum.Duration:
    minutes = BASE_MINUTES[commit_type]

    complexity_multiplier = 1.0 + complexity_score * 0.5
    minutes = int(minutes * complexity_multiplier)

    changes_factor = min(commit.total_changes / 50.0, 3.0)
    minutes += int(changes_factor * 10.0)

    minutes += sum(
        FILE_BONUS_MINUTES.get(file_extension(file), 0)
        for file in commit.files_changed
    )

    return min(pendulum.duration(minutes=minutes), MAX_COMMIT_DURATION)


def calculate_confidence_score(commit: GitCommit, commit_type: CommitType) -> float:
    score = 0.5

    if commit.message.strip() != "":
        score += 0.2

    total_changes = commit.total_changes
    if 10 < total_changes < 500:
        score += 0.2

    # very large commits are usually merges or bulk changes
    if total_changes > 1000:
        score -= 0.3

    if commit_type in (CommitType.FEATURE, CommitType.BUG_FIX):
        score += 0.1

    return max(0.1, min(score, 1.0))


def analyze_commit(commit: GitCommit) -> CommitAnalysis:
    commit_type = detect_commit_type(commit.message)
    complexity_score = calculate_complexity_score(commit)
    return CommitAnalysis(
        commit=commit,
        complexity_score=complexity_score,
        file_type_weights=get_file_type_weights(commit.files_changed),
        commit_type=commit_type,
        estimated_duration=estimate_commit_time(commit, commit_type, complexity_score),
        confidence_score=calculate_confidence_score(commit, commit_type),
    )
