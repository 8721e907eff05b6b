# SPDX-License-Identifier: MIT

from typing import Optional


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


def format_optional(value: Optional[str]) -> str:
    return value if value is not None else ""
