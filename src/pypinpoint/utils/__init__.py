from __future__ import annotations

from os import path as os_path

from .config import Config, checkConfigPath
from .env import Env
from .logger import setupLogging


def joinPath(*paths: str, ext: str = "") -> str:
    """Join path parts and ensure the result ends with the extension."""
    joined = os_path.join(*paths)
    if ext and not joined.endswith(ext):
        joined += ext
    return joined
