from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from os import makedirs, path as os_path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setupLogging(logs_dir: str = "", level: int = logging.INFO, filename: str = "pypinpoint.log") -> logging.Logger:
    """Configure the root logger with console and, when a directory is given, rotating file output."""
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(type(handler) is logging.StreamHandler for handler in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    if logs_dir:
        makedirs(logs_dir, exist_ok=True)
        file_handler = RotatingFileHandler(os_path.join(logs_dir, filename), maxBytes=1_000_000, backupCount=5,
                                           encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    return root
