# SPDX-License-Identifier: MIT

from typing import Optional

from timespan import configuration
from timespan.repository.gateway import Repository
from timespan.repository.sqlite import SqliteRepository

_repository: Optional[Repository] = None


def get_repository() -> Repository:
    """Open the configured database on first use and reuse it afterwards."""
    global _repository
    if _repository is None:
        _repository = SqliteRepository(configuration.DATA_DATABASE_PATH)
    return _repository


def close_repository() -> None:
    global _repository
    if _repository is not None:
        _repository.close()
        _repository = None
