# SPDX-License-Identifier: MIT

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timespan import configuration
from timespan.model.discovery import DEFAULT_EXCLUDE_PATTERNS
from timespan.repository.configuration import CONFIGURATION_REPO
from timespan.terminal.custom_typer import AliasedTyperGroup
from timespan.view.view.util import format_enabled

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_path", escape(str(configuration.APP_CONFIG_PATH)))
    table.add_row("database_path", escape(str(configuration.DATA_DATABASE_PATH)))
    table.add_row("show_header", format_enabled(config["show_header"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("discovery_base_path", escape(config["discovery_base_path"]))
    table.add_row("discovery_prefix", escape(config["discovery_prefix"] or "None"))
    exclude_patterns = config.get("discovery_exclude_patterns")
    table.add_row(
        "discovery_exclude_patterns",
        escape(", ".join(exclude_patterns))
        if exclude_patterns
        else f"default ({len(DEFAULT_EXCLUDE_PATTERNS)} patterns)",
    )

    console.print(table)
