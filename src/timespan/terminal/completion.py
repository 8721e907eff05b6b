# SPDX-License-Identifier: MIT

import asyncio

from timespan.errors import TimespanError
from timespan.repository.store import get_repository


def complete_project(incomplete: str) -> list[str]:
    """Return list of available projects for shell completion."""
    try:
        projects = asyncio.run(get_repository().list_projects())
    except TimespanError:
        return []
    return [
        project["name"] for project in projects if project["name"].startswith(incomplete)
    ]
