# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "timespan"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_DATABASE_PATH: Path = DATA_PATH / "timespan.db"

DEFAULT_DISCOVERY_BASE_PATH = "~/workspace/Clients"
DEFAULT_DISCOVERY_PREFIX = "[CLIENT]"
DEFAULT_LOG_LEVEL = "WARNING"


class Configuration(TypedDict):
    database_path: Optional[str]
    show_header: bool
    log_level: str
    discovery_base_path: str
    discovery_prefix: Optional[str]
    discovery_exclude_patterns: NotRequired[Optional[list[str]]]


def get_default_configuration() -> Configuration:
    return {
        "database_path": None,
        "show_header": True,
        "log_level": DEFAULT_LOG_LEVEL,
        "discovery_base_path": DEFAULT_DISCOVERY_BASE_PATH,
        "discovery_prefix": DEFAULT_DISCOVERY_PREFIX,
        "discovery_exclude_patterns": None,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_DATABASE_PATH variable dynamically.

    This must be called after the config file exists and before the
    repository is opened.
    """
    global DATA_DATABASE_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    database_path_setting = config.get("database_path")
    if database_path_setting is not None:
        DATA_DATABASE_PATH = Path(database_path_setting).expanduser()


def set_database_path(database_path: Path) -> None:
    """Override the database location for the current invocation."""
    global DATA_DATABASE_PATH
    DATA_DATABASE_PATH = database_path.expanduser()
