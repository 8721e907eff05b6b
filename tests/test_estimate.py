"""Tests for commit effort estimation."""

from pathlib import Path

import pendulum
import pytest

from timespan.model.git import CommitType, GitCommit
from timespan.service import estimate


def make_commit(
    message: str = "feat: add login",
    files: list[str] | None = None,
    insertions: int = 0,
    deletions: int = 0,
) -> GitCommit:
    return GitCommit(
        hash="0123456789abcdef0123456789abcdef01234567",
        message=message,
        author="Road Runner",
        author_email="beep@acme.test",
        timestamp=pendulum.datetime(2024, 3, 12, 17, tz="UTC"),
        repository_path=Path("/tmp/repo"),
        files_changed=files if files is not None else [],
        insertions=insertions,
        deletions=deletions,
    )


@pytest.mark.parametrize(
    "message, expected",
    [
        ("feat: login page", CommitType.FEATURE),
        ("Add retry to client", CommitType.FEATURE),
        ("fix: crash on empty input", CommitType.BUG_FIX),
        ("Handle error when file is missing", CommitType.BUG_FIX),
        ("Refactor parser", CommitType.REFACTOR),
        ("docs: usage", CommitType.DOCUMENTATION),
        ("Update documentation", CommitType.DOCUMENTATION),
        ("More tests for parser", CommitType.TEST),
        ("chore: bump deps", CommitType.CHORE),
        ("Initial commit", CommitType.OTHER),
        # first matching rule wins
        ("Refactor and fix bug", CommitType.BUG_FIX),
        ("docs: add section", CommitType.FEATURE),
    ],
)
def test_detect_commit_type(message, expected):
    assert estimate.detect_commit_type(message) == expected


def test_complexity_score_is_capped():
    small = make_commit(files=["a.py"], insertions=50)
    huge = make_commit(files=[f"f{i}.py" for i in range(100)], insertions=10_000)

    assert estimate.calculate_complexity_score(small) == pytest.approx(0.3)
    assert estimate.calculate_complexity_score(huge) == pytest.approx(2.5)


def test_file_type_weights_sum_per_extension():
    weights = estimate.get_file_type_weights(
        ["src/main.rs", "src/lib.rs", "README.md", "Makefile", "app.unknownext"]
    )

    assert weights == {"rs": 3.0, "md": 0.5, "unknown": 1.0, "unknownext": 1.0}


def test_estimate_commit_time_formula():
    commit = make_commit(files=["a.rs", "b.ts", "c.md"], insertions=100)
    complexity = estimate.calculate_complexity_score(commit)

    duration = estimate.estimate_commit_time(commit, CommitType.FEATURE, complexity)

    # complexity 0.65 -> int(45 * 1.325) = 59, + 20 for changes, + 5 + 3 + 1 bonus
    assert duration == pendulum.duration(minutes=88)


def test_estimate_commit_time_is_capped():
    commit = make_commit(
        files=[f"f{i}.rs" for i in range(200)], insertions=50_000, deletions=50_000
    )

    duration = estimate.estimate_commit_time(commit, CommitType.BUG_FIX, 2.5)

    assert duration == pendulum.duration(hours=4)


def test_estimate_for_empty_commit():
    commit = make_commit(message="", files=[])

    duration = estimate.estimate_commit_time(commit, CommitType.OTHER, 0.0)

    assert duration == pendulum.duration(minutes=20)


@pytest.mark.parametrize(
    "message, changes, commit_type, expected",
    [
        ("feat: x", 100, CommitType.FEATURE, 1.0),
        ("", 5, CommitType.OTHER, 0.5),
        ("Refactor", 100, CommitType.REFACTOR, 0.9),
        ("", 5000, CommitType.OTHER, 0.2),
        ("Initial import", 5000, CommitType.OTHER, 0.4),
    ],
)
def test_confidence_score(message, changes, commit_type, expected):
    commit = make_commit(message=message, insertions=changes)

    score = estimate.calculate_confidence_score(commit, commit_type)

    assert score == pytest.approx(expected)


def test_analyze_commit():
    commit = make_commit(
        message="fix: off by one\n\nLonger explanation.",
        files=["a.py"],
        insertions=10,
        deletions=5,
    )

    analysis = estimate.analyze_commit(commit)

    assert analysis.commit is commit
    assert analysis.commit_type == CommitType.BUG_FIX
    assert analysis.file_type_weights == {"py": 1.3}
    assert analysis.complexity_score == pytest.approx(0.125)
    # int(60 * 1.0625) = 63, + int(0.3 * 10) = 3
    assert analysis.estimated_duration == pendulum.duration(minutes=66)
    assert analysis.confidence_score == pytest.approx(1.0)
    assert commit.summary == "fix: off by one"
    assert commit.short_hash == "01234567"
