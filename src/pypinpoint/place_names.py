from __future__ import annotations

import logging
import re
from urllib.parse import unquote_plus

_logger = logging.getLogger(__name__)

NAME_PARAMETERS = ("name", "q", "address", "place", "location")

NAME_PATTERNS = tuple(re.compile(rf"[?&]{param}=([^&#]+)") for param in NAME_PARAMETERS) + (
    re.compile(r"/maps/place/([^/?#]+)"),  # Matches "/maps/place/Place+Name"
    re.compile(r"/maps/search/([^/?#]+)"),
)


def extractLocationName(url: str) -> str | None:
    """Extract a place name or address from the URL's query or path."""
    if not url:
        return None
    for pattern in NAME_PATTERNS:
        match = pattern.search(url)
        if not match:
            continue
        location_name = unquote_plus(match.group(1)).strip()  # Decode "+" into spaces
        if location_name:
            _logger.debug(f"Location name extracted: '{location_name}'")
            return location_name
    return None
