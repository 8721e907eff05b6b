# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timespan import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not configuration.APP_CONFIG_PATH.is_file():
            self._config = configuration.get_default_configuration()
            return

        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        if self._config is None:
            self._config = configuration.get_default_configuration()
            self.is_dirty = True
            return

        # fill in keys added after the file was written
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reload(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)


CONFIGURATION_REPO = ConfigurationRepository()
