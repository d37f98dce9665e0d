from __future__ import annotations

import logging

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from .exceptions import CoordinatesOutOfRangeError
from .models import Coordinates
from .version import PROJECT_NAME_TEXT, VERSION

_logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"{PROJECT_NAME_TEXT}/{VERSION}"

# Address components tried in order when naming a reverse geocoded point
NAME_COMPONENTS = ("road", "suburb", "city", "town", "village")


def shortenAddress(full_address: str) -> str:
    """Keep the first two or three comma separated parts of a long address."""
    parts = [part for part in full_address.split(", ") if part]
    if len(parts) >= 3:
        return ", ".join(parts[:3])
    if len(parts) == 2:
        return ", ".join(parts)
    return parts[0] if parts else full_address


def buildLocationName(address: dict) -> str:
    """Construct a short display name from structured address components."""
    name = ""
    if address.get("name"):
        name = address["name"]
    elif address.get("house_number") and address.get("road"):
        name = f"{address['house_number']} {address['road']}"
    else:
        for component in NAME_COMPONENTS:
            if address.get(component):
                name = address[component]
                break
    if not name:
        return ""

    # Add city/state if available and not already included
    city, state = address.get("city"), address.get("state")
    if city and city not in name:
        name += f", {city}"
    elif state and state not in name:
        name += f", {state}"
    return name


class GeocodingAdapter:

    def __init__(self, geolocator=None, user_agent: str = DEFAULT_USER_AGENT,
                 domain: str = "nominatim.openstreetmap.org", timeout: float = 10, language: str = "en"):
        self.geolocator = geolocator or Nominatim(user_agent=user_agent, domain=domain, timeout=timeout)
        self.language: str = language

    def geocode(self, location_name: str) -> Coordinates | None:
        """Forward geocode a place name, taking the best ranked result."""
        if not location_name or not location_name.strip():
            return None
        try:
            location = self.geolocator.geocode(location_name, exactly_one=True, language=self.language)
        except GeopyError as e:
            _logger.warning(f"Geocoding '{location_name}' failed: {e}")
            return None
        if location is None:
            _logger.info(f"No geocoding results found for '{location_name}'")
            return None
        try:
            coordinates = Coordinates(float(location.latitude), float(location.longitude))
        except (TypeError, ValueError, CoordinatesOutOfRangeError) as e:
            _logger.warning(f"Unusable geocoding result for '{location_name}': {e}")
            return None
        _logger.debug(f"Geocoded '{location_name}' to {coordinates}")
        return coordinates

    def lookupDisplayName(self, latitude: float, longitude: float) -> str | None:
        try:
            location = self.geolocator.reverse((latitude, longitude), exactly_one=True, language=self.language,
                                               addressdetails=True, zoom=18)
        except GeopyError as e:
            _logger.warning(f"Reverse geocoding ({latitude}, {longitude}) failed: {e}")
            return None
        if location is None:
            return None
        raw = location.raw or {}
        name = buildLocationName(raw.get("address") or {})
        if not name:
            display_name = raw.get("display_name") or location.address
            name = shortenAddress(display_name) if display_name else ""
        return name or None

    def reverseGeocode(self, latitude: float, longitude: float) -> str:
        """Look up a display name for a point, falling back to the coordinates as text."""
        return self.lookupDisplayName(latitude, longitude) or f"{latitude}, {longitude}"
