from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import CoordinatesOutOfRangeError
from .validator import isValid


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not isValid(self.latitude, self.longitude):
            raise CoordinatesOutOfRangeError(self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"{self.latitude}, {self.longitude}"


@dataclass(frozen=True)
class NamedCoordinates(Coordinates):
    location_name: str | None = None

    @classmethod
    def fromCoordinates(cls, coordinates: Coordinates, location_name: str | None = None) -> NamedCoordinates:
        return cls(coordinates.latitude, coordinates.longitude, location_name)


@dataclass(frozen=True)
class Candidate:
    """A numeric pair captured by one extraction pattern, before it is trusted."""
    pattern: str
    raw_latitude: str
    raw_longitude: str
    latitude: float
    longitude: float
    specific: bool = True

    @property
    def valid(self) -> bool:
        return isValid(self.latitude, self.longitude)

    def toCoordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)


@dataclass(frozen=True)
class Extraction:
    """Outcome of scanning one URL: a valid pair, and any out-of-range pairs seen on the way."""
    coordinates: Coordinates | None = None
    rejected: tuple[Candidate, ...] = field(default_factory=tuple)

    @property
    def matched(self) -> bool:
        return self.coordinates is not None

    @property
    def out_of_range(self) -> tuple[Candidate, ...]:
        """Rejected pairs from provider or parameter patterns, not from catch-all matches."""
        return tuple(candidate for candidate in self.rejected if candidate.specific)


class FailureKind(Enum):
    EMPTY_INPUT = "empty_input"
    SHORT_LINK_UNRESOLVABLE = "short_link_unresolvable"
    NO_COORDINATES_OR_NAME = "no_coordinates_or_name"
    COORDINATES_OUT_OF_RANGE = "coordinates_out_of_range"
    GEOCODE_NOT_FOUND = "geocode_not_found"


@dataclass(frozen=True)
class Resolved:
    coordinates: NamedCoordinates
    ok = True


@dataclass(frozen=True)
class Failed:
    kind: FailureKind
    message: str
    ok = False


ResolutionResult = Resolved | Failed
