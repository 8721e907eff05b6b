# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from timespan import configuration as app_configuration
from timespan.logger import setup_logging
from timespan.repository.configuration import CONFIGURATION_REPO
from timespan.repository.store import close_repository
from timespan.terminal import configuration, git, project, report
from timespan.terminal.custom_typer import OrderedTyperGroup
from timespan.terminal.timer import start, status, stop, tag
from timespan.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="Timespan - Project time tracking in the CLI",
    no_args_is_help=True,
)
app.command(name="start", no_args_is_help=True)(start)
app.command(name="stop")(stop)
app.command(name="status, st")(status)
app.command(name="tag", no_args_is_help=True)(tag)
app.add_typer(project.app, name="project, p", help="Manage projects")
app.add_typer(report.app, name="report, r", help="Summarize tracked time")
app.add_typer(git.app, name="git, g", help="Estimate and import time from commits")
app.add_typer(configuration.app, name="config, c", help="Show configuration")


@app.callback()
def main_callback(
    database: Annotated[
        Optional[Path],
        typer.Option(
            "--database",
            help="Database file to use instead of the configured one",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    Timespan - Project time tracking in the CLI

    Global options that apply to all commands.
    """
    config = CONFIGURATION_REPO.get_config()

    setup_logging("DEBUG" if verbose else config["log_level"])
    view_state.set_show_header(config["show_header"] and not no_header)

    if database is not None:
        close_repository()
        app_configuration.set_database_path(database)


def run() -> None:
    app()
