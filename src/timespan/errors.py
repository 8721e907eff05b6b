# SPDX-License-Identifier: MIT


class TimespanError(Exception):
    """Base class for every error the application reports to the user."""

    pass


class ProjectAlreadyExistsError(TimespanError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Project already exists: {name}")


class ProjectNotFoundError(TimespanError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Project not found: {name}")


class ProjectHasTimeEntriesError(TimespanError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot delete project with time entries: {name}")


class InvalidProjectNameError(TimespanError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid project name: {name!r}")


class TimerAlreadyRunningError(TimespanError):
    def __init__(self, project_name: str) -> None:
        self.project_name = project_name
        super().__init__(f"Timer is already running for project: {project_name}")


class NoActiveTimerError(TimespanError):
    def __init__(self) -> None:
        super().__init__("No active timer found")


class InvalidDurationError(TimespanError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid duration format: {reason}")


class StorageError(TimespanError):
    """Wraps a failure of the embedded database."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Database error: {cause}")


class FilesystemError(TimespanError):
    """Wraps a failure reading directories or running git."""

    def __init__(self, cause: str | Exception) -> None:
        self.cause = cause
        super().__init__(f"IO error: {cause}")


def sanitize_error_message(error: TimespanError) -> str:
    """Message shown to the user; infrastructure details only go to the log."""
    if isinstance(error, StorageError):
        return "Database operation failed"
    if isinstance(error, FilesystemError):
        return "File system operation failed"
    return str(error)
