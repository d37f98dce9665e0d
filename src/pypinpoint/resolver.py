from __future__ import annotations

import logging
import re

from .exceptions import (CoordinatesOutOfRangeError, EmptyInputError, GeocodeNotFoundError, NoCoordinatesOrNameError,
                         PinpointError, ShortLinkUnresolvableError)
from .geocoding import DEFAULT_USER_AGENT, GeocodingAdapter
from .matcher import CoordinateMatcher
from .models import Candidate, Coordinates, Failed, FailureKind, NamedCoordinates, ResolutionResult, Resolved
from .normalizer import normalize
from .patterns import DEFAULT_PATTERN_TABLE, PatternTable
from .place_names import extractLocationName
from .short_links import DEFAULT_RELAYS, ShortLinkResolver, isShortLink, looksLikeURL
from .version import PROJECT_NAME

_logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "request_timeout": 10,
    "geocoder_timeout": 10,
    "user_agent": DEFAULT_USER_AGENT,
    "geocoder_domain": "nominatim.openstreetmap.org",
    "language": "en",
    "relays": list(DEFAULT_RELAYS),
    "reverse_geocode": True,
    "geocode_free_text": False,
}

# A location name that is only the numeric pair already extracted
COORDINATE_TEXT = re.compile(r"\s*-?\d+(?:\.\d+)?\s*,\s*-?\d+(?:\.\d+)?\s*")

MESSAGES = {
    FailureKind.EMPTY_INPUT: "Please paste a location link first.",
    FailureKind.NO_COORDINATES_OR_NAME: "Could not extract coordinates or location name from the link. "
                                        "Please paste a valid Google Maps or Apple Maps link.",
    FailureKind.GEOCODE_NOT_FOUND: "Could not find coordinates for this location. "
                                   "Please try a different link or location name.",
}
SHORT_LINK_BLOCKED_MESSAGE = ("This short link appears to be blocked or restricted. "
                              "Please try the full Google Maps link instead.")
SHORT_LINK_FAILED_MESSAGE = "Could not resolve the short link. Please try the full Google Maps link."
SHORT_LINK_EMPTY_MESSAGE = ("Short link resolved but no coordinates or location name found. "
                            "Please try the full Google Maps link.")


class Resolver:
    """Turn a pasted map link or place name into validated, named coordinates."""

    def __init__(self, settings: dict | None = None, pattern_table: PatternTable = DEFAULT_PATTERN_TABLE,
                 short_link_resolver: ShortLinkResolver | None = None, geocoder: GeocodingAdapter | None = None):
        self.settings: dict = {**DEFAULT_SETTINGS, **(settings or {})}
        self.matcher = CoordinateMatcher(pattern_table)
        self.short_link_resolver = short_link_resolver or ShortLinkResolver(
            relays=self.settings["relays"],
            timeout=self.settings["request_timeout"],
            user_agent=self.settings["user_agent"],
        )
        self.geocoder = geocoder or GeocodingAdapter(
            user_agent=self.settings["user_agent"],
            domain=self.settings["geocoder_domain"],
            timeout=self.settings["geocoder_timeout"],
            language=self.settings["language"],
        )

    @classmethod
    def fromEnv(cls, env, **kwargs) -> Resolver:
        resolver = cls(env.config.getSection(PROJECT_NAME, DEFAULT_SETTINGS), **kwargs)
        env.resolver = resolver
        return resolver

    def _extract(self, targets: list[str]) -> tuple[Coordinates | None, str | None, tuple[Candidate, ...]]:
        rejected = ()
        for target in targets:
            extraction = self.matcher.scan(target)
            if extraction.matched:
                return extraction.coordinates, target, ()
            rejected = rejected or extraction.out_of_range
        return None, None, rejected

    def _locate(self, link: str) -> NamedCoordinates:
        targets = [link]
        resolved_short_link = False
        if isShortLink(link):
            _logger.debug(f"Detected short link '{link}'")
            # The original link stays as a fallback target if the expanded one yields nothing
            targets.insert(0, self.short_link_resolver.resolveShortLink(link))
            resolved_short_link = True

        coordinates, matched_target, rejected = self._extract(targets)
        if coordinates is not None:
            location_name = extractLocationName(matched_target)
            if location_name and COORDINATE_TEXT.fullmatch(location_name):
                location_name = None
            return NamedCoordinates.fromCoordinates(coordinates, location_name)
        if rejected:
            raise CoordinatesOutOfRangeError(rejected[0].raw_latitude, rejected[0].raw_longitude)

        location_name = next(filter(None, map(extractLocationName, targets)), None)
        if location_name is None and self.settings["geocode_free_text"] and not looksLikeURL(link):
            location_name = link
        if location_name is None:
            raise NoCoordinatesOrNameError(SHORT_LINK_EMPTY_MESSAGE if resolved_short_link
                                           else MESSAGES[FailureKind.NO_COORDINATES_OR_NAME])

        _logger.debug(f"No coordinates in '{link}', geocoding '{location_name}'")
        coordinates = self.geocoder.geocode(location_name)
        if coordinates is None:
            raise GeocodeNotFoundError(location_name)
        return NamedCoordinates.fromCoordinates(coordinates, location_name)

    def _attachDisplayName(self, coordinates: NamedCoordinates) -> NamedCoordinates:
        if not self.settings["reverse_geocode"]:
            return coordinates
        display_name = self.geocoder.reverseGeocode(coordinates.latitude, coordinates.longitude)
        return NamedCoordinates.fromCoordinates(coordinates, display_name)

    def resolveOrRaise(self, raw_input: str) -> NamedCoordinates:
        """Resolve the input, raising a PinpointError subclass on failure."""
        link = normalize(raw_input)
        if not link:
            raise EmptyInputError(MESSAGES[FailureKind.EMPTY_INPUT])
        coordinates = self._attachDisplayName(self._locate(link))
        _logger.info(f"Resolved '{link}' to ({coordinates.latitude}, {coordinates.longitude}) "
                     f"'{coordinates.location_name}'")
        return coordinates

    def resolve(self, raw_input: str) -> ResolutionResult:
        try:
            return Resolved(self.resolveOrRaise(raw_input))
        except PinpointError as e:
            failure = self.describeFailure(e)
            _logger.info(f"Could not resolve '{raw_input}': {failure.kind.value}")
            return failure

    @staticmethod
    def describeFailure(error: PinpointError) -> Failed:
        """Map a resolution error onto its user facing failure."""
        if isinstance(error, ShortLinkUnresolvableError):
            message = SHORT_LINK_BLOCKED_MESSAGE if error.blocked else SHORT_LINK_FAILED_MESSAGE
            return Failed(FailureKind.SHORT_LINK_UNRESOLVABLE, message)
        if isinstance(error, CoordinatesOutOfRangeError):
            return Failed(FailureKind.COORDINATES_OUT_OF_RANGE, str(error))
        if isinstance(error, GeocodeNotFoundError):
            return Failed(FailureKind.GEOCODE_NOT_FOUND, MESSAGES[FailureKind.GEOCODE_NOT_FOUND])
        if isinstance(error, EmptyInputError):
            return Failed(FailureKind.EMPTY_INPUT, MESSAGES[FailureKind.EMPTY_INPUT])
        return Failed(FailureKind.NO_COORDINATES_OR_NAME, str(error) or MESSAGES[FailureKind.NO_COORDINATES_OR_NAME])


def resolve(raw_input: str) -> ResolutionResult:
    """Resolve a pasted link or place name with default settings.

    Each call builds its own Resolver, so no HTTP session is shared between threads. Callers
    resolving many links should hold one Resolver per thread instead.
    """
    return Resolver().resolve(raw_input)
