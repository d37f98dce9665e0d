from __future__ import annotations

import logging

from .models import Candidate, Coordinates, Extraction
from .patterns import DEFAULT_PATTERN_TABLE, FALLBACK_PATTERN, PatternTable

_logger = logging.getLogger(__name__)


def _parseCandidate(pattern_name: str, raw_latitude: str, raw_longitude: str,
                    specific: bool = True) -> Candidate | None:
    try:
        latitude, longitude = float(raw_latitude), float(raw_longitude)
    except ValueError:
        return None
    return Candidate(pattern_name, raw_latitude, raw_longitude, latitude, longitude, specific)


class CoordinateMatcher:

    def __init__(self, pattern_table: PatternTable = DEFAULT_PATTERN_TABLE):
        self.pattern_table: PatternTable = pattern_table

    def _scanTable(self, url: str) -> tuple[Candidate | None, list[Candidate]]:
        rejected = []
        for pattern in self.pattern_table:
            groups = pattern.search(url)
            if groups is None:
                continue
            candidate = _parseCandidate(pattern.name, *groups, specific=pattern.specific)
            if candidate is None:
                continue
            _logger.debug(f"Pattern '{pattern.name}' matched {groups} in '{url}'")
            if candidate.valid:
                return candidate, rejected
            rejected.append(candidate)
        return None, rejected

    @staticmethod
    def _scanFallback(url: str) -> tuple[Candidate | None, list[Candidate]]:
        rejected = []
        for match in FALLBACK_PATTERN.finditer(url):
            candidate = _parseCandidate("fallback", *match.groups(), specific=False)
            if candidate is None:
                continue
            if candidate.valid:
                return candidate, rejected
            rejected.append(candidate)
        return None, rejected

    def scan(self, url: str) -> Extraction:
        """Find the first valid coordinate pair in a URL, keeping track of rejected pairs."""
        if not url:
            return Extraction()
        candidate, rejected = self._scanTable(url)
        if candidate is None:
            candidate, fallback_rejected = self._scanFallback(url)
            rejected.extend(fallback_rejected)
        if candidate is None:
            if rejected:
                _logger.debug(f"Only out of range pairs found in '{url}': {[(c.latitude, c.longitude) for c in rejected]}")
            return Extraction(rejected=tuple(rejected))
        _logger.debug(f"Extracted ({candidate.latitude}, {candidate.longitude}) via '{candidate.pattern}'")
        return Extraction(candidate.toCoordinates(), tuple(rejected))

    def extractCoordinates(self, url: str) -> Coordinates | None:
        return self.scan(url).coordinates


_default_matcher = CoordinateMatcher()


def extractCoordinates(url: str) -> Coordinates | None:
    """Extract a validated latitude and longitude from a map URL."""
    return _default_matcher.extractCoordinates(url)
