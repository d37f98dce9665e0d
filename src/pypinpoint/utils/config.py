from __future__ import annotations

import ast
import logging
from configparser import ConfigParser, DuplicateOptionError
from os import path as os_path

from ..version import PROJECT_NAME

_logger = logging.getLogger(__name__)


def checkConfigPath(config_path: str) -> bool:
    if not os_path.exists(config_path):
        raise FileExistsError(f"Config file not found: '{config_path}'")
    return True


class Config:
    DEFAULT_PROFILE_NAME = PROJECT_NAME
    CONFIG_EXT = ".conf"

    def __init__(self, config_path: str = "", env=None):
        self.env = env
        self._config: dict = {}
        self._sections: list = []

        self.config_path: str = config_path
        self.config_dir, self.filename = self._splitPathIntoDirAndName(config_path) or ("", "")
        if not self.filename and env is not None:
            self.filename = env.project_name

        if self.config_path:
            self.loadConfig()

    def __getitem__(self, key: str) -> dict:
        return self._config[key]

    def __setitem__(self, key: str, value: dict):
        if key not in self._sections:
            self._sections.append(key)
        self._config[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._config

    def __str__(self) -> str:
        return str(self._config)

    def __repr__(self) -> str:
        prefix = f"{self.env.project_name_text}." if self.env is not None else ""
        return f"{prefix}Config({self._config})"

    def get(self, key: str, default=None):
        return self._config.get(key, default)

    def getSection(self, section: str, defaults: dict | None = None) -> dict:
        """Section values layered over the given defaults."""
        return {**(defaults or {}), **self._config.get(section, {})}

    def _splitPathIntoDirAndName(self, config_path: str) -> tuple[str, str] | bool:
        if not config_path or not isinstance(config_path, str):
            return False
        directory, filename = os_path.split(config_path)
        if not filename.endswith(self.CONFIG_EXT):
            return False
        return directory, filename

    @staticmethod
    def loadSection(config_path: str, parser: ConfigParser, section: str) -> dict:
        if not parser.has_section(section):
            _logger.error(f"Section '{section}' not found in '{config_path}'")
            return {}
        section_data = {}
        for key, value in parser.items(section):
            try:
                section_data[key] = ast.literal_eval(value)
            except (ValueError, SyntaxError):
                section_data[key] = value
        return section_data

    def loadConfig(self, sections: str | list | None = None):
        checkConfigPath(self.config_path)
        parser = ConfigParser(interpolation=None)
        parser.optionxform = str  # Preserve key case
        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                parser.read_file(file)
        except DuplicateOptionError as e:
            _logger.error(f"Duplicate Option Error occurred while loading '{self.config_path}': {e}")
            raise

        if sections is None:
            sections = parser.sections()
        elif isinstance(sections, str):
            sections = [sections]
        for section in sections:
            self[section] = self.loadSection(self.config_path, parser, section)
        _logger.debug(f"Config loaded from '{self.config_path}'")

    def setConfig(self, config: dict):
        for section, values in config.items():
            self[section] = {**self._config.get(section, {}), **values}

    def unloadConfig(self):
        self._config = {}
        self._sections = []

    def saveConfig(self):
        filename = self.filename or self.DEFAULT_PROFILE_NAME
        if not filename.endswith(self.CONFIG_EXT):
            filename += self.CONFIG_EXT
        config_path = os_path.join(self.config_dir, filename)

        parser = ConfigParser(interpolation=None)
        parser.optionxform = str
        for section in self._sections:
            parser[section] = {key: repr(value) for key, value in self._config[section].items()}
        with open(config_path, "w", encoding="utf-8") as file:
            parser.write(file)
        _logger.info(f"Config saved to '{config_path}'")
