from __future__ import annotations


class PinpointError(Exception):
    """Base class for every failure raised while resolving a location."""


class EmptyInputError(PinpointError):
    pass


class ShortLinkUnresolvableError(PinpointError):
    """Every path for expanding a short link was exhausted."""

    def __init__(self, url: str, blocked: bool = False, attempts: tuple = ()):
        self.url = url
        self.blocked = blocked
        self.attempts = attempts
        reason = "blocked or restricted" if blocked else "unresolvable"
        super().__init__(f"Short link '{url}' is {reason}")


class NoCoordinatesOrNameError(PinpointError):
    pass


class CoordinatesOutOfRangeError(PinpointError, ValueError):

    def __init__(self, latitude, longitude):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Invalid coordinates: Latitude ({latitude}) must be between -90 and 90, "
            f"Longitude ({longitude}) must be between -180 and 180."
        )


class GeocodeNotFoundError(PinpointError):

    def __init__(self, location_name: str):
        self.location_name = location_name
        super().__init__(f"No geocoding result for '{location_name}'")
