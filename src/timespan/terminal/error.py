# SPDX-License-Identifier: MIT

import asyncio
from contextlib import contextmanager
from typing import Any, Coroutine, Iterator, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from timespan.errors import TimespanError, sanitize_error_message
from timespan.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

error_console = Console(stderr=True)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print application errors to stderr and exit with code 1."""
    try:
        yield
    except TimespanError as e:
        logger.debug("command_failed", error=str(e), error_type=type(e).__name__)
        error_console.print(f"[red]Error: {escape(sanitize_error_message(e))}[/red]")
        raise typer.Exit(1) from e


def run_command(coroutine: Coroutine[Any, Any, T]) -> T:
    with handle_errors():
        return asyncio.run(coroutine)
