from __future__ import annotations

import logging

from . import version
from .exceptions import (CoordinatesOutOfRangeError, EmptyInputError, GeocodeNotFoundError, NoCoordinatesOrNameError,
                         PinpointError, ShortLinkUnresolvableError)
from .geocoding import GeocodingAdapter
from .matcher import CoordinateMatcher, extractCoordinates
from .models import Coordinates, Failed, FailureKind, NamedCoordinates, ResolutionResult, Resolved
from .normalizer import normalize
from .patterns import DEFAULT_PATTERN_TABLE, PatternTable
from .place_names import extractLocationName
from .resolver import Resolver, resolve
from .short_links import ShortLinkResolver, isShortLink, resolveShortLink
from .utils import Env, setupLogging
from .validator import isValid

_logger = logging.getLogger(__name__)


def loadEnv(config_path: str = "", project_dir: str = "", instance: str = "", logs_dir: str = "",
            log_level: int = logging.INFO) -> Env:
    """Set up logging and load the config profile into an Env."""
    setupLogging(logs_dir, level=log_level, filename=f"{version.PROJECT_NAME}.log")
    env = Env(config_path, project_dir=project_dir, instance=instance, logs_dir=logs_dir)
    _logger.debug(f"Environment loaded for {env.project_name_text} from '{config_path}'")
    return env
