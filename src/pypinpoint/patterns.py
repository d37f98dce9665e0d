from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

# Integers and decimals, optionally negative
NUMBER = r"(-?\d+(?:\.\d+)?)"

# Last-resort scan; requires a decimal point so bare integers are not picked up,
# and must not start part way through a longer number
FALLBACK_PATTERN = re.compile(r"(?<![\d.])(-?\d{1,2}\.\d+),(-?\d{1,3}\.\d+)")


@dataclass(frozen=True)
class CoordinatePattern:
    name: str
    regex: re.Pattern
    # False for catch-all patterns that may match numbers unrelated to a location
    specific: bool = True

    @classmethod
    def build(cls, name: str, template: str, specific: bool = True) -> CoordinatePattern:
        """Compile a template where '{n}' marks each captured number."""
        return cls(name, re.compile(template.replace("{n}", NUMBER)), specific)

    def search(self, text: str) -> tuple[str, str] | None:
        match = self.regex.search(text)
        if not match:
            return None
        return match.group(1), match.group(2)


@dataclass(frozen=True)
class PatternTable:
    """Ordered, immutable set of extraction patterns. Earlier entries win."""
    patterns: tuple[CoordinatePattern, ...]

    def __iter__(self) -> Iterator[CoordinatePattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    @property
    def names(self) -> list[str]:
        return [pattern.name for pattern in self.patterns]

    @classmethod
    def fromTemplates(cls, templates: list[tuple]) -> PatternTable:
        """Build from (name, template) or (name, template, specific) entries."""
        return cls(tuple(CoordinatePattern.build(*entry) for entry in templates))


DEFAULT_TEMPLATES = [
    # Google Maps
    ("google_maps_q", r"maps\.google\.com/maps\?q={n},{n}"),
    ("google_maps_ll", r"maps\.google\.com/maps\?ll={n},{n}"),
    ("google_maps_daddr", r"maps\.google\.com/maps\?daddr={n},{n}"),
    ("google_maps_saddr", r"maps\.google\.com/maps\?saddr={n},{n}"),
    ("google_maps_cid", r"maps\.google\.com/maps\?cid=.*?@{n},{n}"),
    ("google_maps_at", r"maps\.google\.com.*?@{n},{n}"),
    ("google_com_maps_at", r"google\.com/maps.*?@{n},{n}"),
    ("google_maps_place_at", r"maps\.google\.com/maps/place/.*?@{n},{n}"),
    ("google_maps_place_path", r"maps\.google\.com/maps/place/.*?/{n},{n}"),
    ("google_maps_root_q", r"maps\.google\.com/\?q={n},{n}"),
    ("google_com_maps_q", r"google\.com/maps\?q={n},{n}"),
    # Apple Maps
    ("apple_ll", r"maps\.apple\.com/\?ll={n},{n}"),
    ("apple_daddr", r"maps\.apple\.com/\?daddr={n},{n}"),
    ("apple_saddr", r"maps\.apple\.com/\?saddr={n},{n}"),
    ("apple_place_coordinate", r"maps\.apple\.com/place\?.*?coordinate={n},{n}"),
    # Bing Maps
    ("bing_cp", r"bing\.com/maps.*?cp={n}~{n}"),
    ("bing_sp", r"bing\.com/maps.*?sp={n},{n}"),
    # OpenStreetMap
    ("osm_marker", r"openstreetmap\.org.*?mlat={n}.*?mlon={n}"),
    ("osm_lat_lon", r"openstreetmap\.org.*?lat={n}.*?lon={n}"),
    # Here
    ("here_map", r"here\.com.*?map={n},{n}"),
    # Waze
    ("waze_ll", r"waze\.com.*?ll={n},{n}"),
    # Provider-agnostic parameters
    ("at", r"@{n},{n}"),
    ("q", r"q={n},{n}"),
    ("ll", r"ll={n},{n}"),
    ("coordinate", r"coordinate={n},{n}"),
    ("lat_lng", r"lat={n}.*?lng={n}"),
    ("latitude_longitude", r"latitude={n}.*?longitude={n}"),
    ("daddr", r"daddr={n},{n}"),
    ("saddr", r"saddr={n},{n}"),
    # Anything that looks like a pair, must stay last
    ("generic_pair", r"{n},{n}", False),
]

DEFAULT_PATTERN_TABLE = PatternTable.fromTemplates(DEFAULT_TEMPLATES)
