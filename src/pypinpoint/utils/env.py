from __future__ import annotations

import logging

from ..version import PROJECT_NAME, PROJECT_NAME_TEXT
from .config import Config

_logger = logging.getLogger(__name__)


class Env:

    def __init__(self, config_path: str = "", project_name: str = PROJECT_NAME, project_dir: str = "",
                 instance: str = "", logs_dir: str = ""):
        self.project_name: str = project_name
        self.project_name_text: str = PROJECT_NAME_TEXT if project_name == PROJECT_NAME else project_name
        self.project_dir: str = project_dir
        self.instance: str = instance
        self.logs_dir: str = logs_dir
        self.resolver = None

        self.config: Config = Config(config_path, env=self)

    def __repr__(self) -> str:
        return f"Env({self.project_name!r}, instance={self.instance!r})"
