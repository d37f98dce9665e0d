from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs, quote, urlparse

import requests

from .exceptions import ShortLinkUnresolvableError

_logger = logging.getLogger(__name__)

SHORT_LINK_PATTERNS = (
    re.compile(r"g\.co/kgs/"),
    re.compile(r"goo\.gl/maps/"),
    re.compile(r"maps\.app\.goo\.gl/"),
    re.compile(r"gmaps\.tinyurl\.com/"),
    re.compile(r"tinyurl\.com/[a-zA-Z0-9]+"),
    re.compile(r"bit\.ly/[a-zA-Z0-9]+"),
    re.compile(r"is\.gd/[a-zA-Z0-9]+"),
)

# Maps hostname followed by a single opaque segment, e.g. maps.google.com/maps/AbC123
OPAQUE_MAPS_PATH = re.compile(r"(?:maps\.)?google\.com/maps/([a-zA-Z0-9]+)/?$")
MAPS_ROUTE_WORDS = {"place", "search", "dir", "embed", "preview", "contrib"}

MAPS_PROVIDER_PATHS = (
    "google.com/maps",
    "maps.google.",
    "maps.apple.com",
    "bing.com/maps",
    "openstreetmap.org",
    "here.com",
    "waze.com",
)

DEFAULT_RELAYS = (
    "https://api.allorigins.win/raw?url={url}",
    "https://cors-anywhere.herokuapp.com/{url}",
    "https://thingproxy.freeboard.io/fetch/{url}",
)

BLOCKED_STATUS_CODES = {401, 403, 429, 451}

URL_LIKE = re.compile(r"^(?:[a-z][a-z0-9+.-]*://|www\.)|^[\w-]+(?:\.[\w-]+)+/", re.IGNORECASE)


def looksLikeURL(text: str) -> bool:
    return bool(URL_LIKE.search(text))


def _isOpaqueMapsLink(url: str) -> bool:
    if not looksLikeURL(url):
        return False
    try:
        parsed = urlparse(url if "://" in url else "https://" + url)
    except ValueError:
        return False
    if parsed.query:
        return False
    match = OPAQUE_MAPS_PATH.search(parsed.netloc + parsed.path)
    return bool(match) and match.group(1).lower() not in MAPS_ROUTE_WORDS


def isShortLink(url: str) -> bool:
    """Check whether a URL belongs to a known shortener or an opaque maps short path."""
    if not url:
        return False
    return any(pattern.search(url) for pattern in SHORT_LINK_PATTERNS) or _isOpaqueMapsLink(url)


def isMapsProviderURL(url: str) -> bool:
    return any(path in url for path in MAPS_PROVIDER_PATHS)


def unwrapConsentRedirect(url: str) -> str:
    """Return the target of a Google consent interstitial, or the URL unchanged."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    if "consent.google." not in parsed.netloc:
        return url
    params = parse_qs(parsed.query)
    if "continue" in params:
        return params["continue"][0]
    return url


class AttemptStatus(Enum):
    RESOLVED = "resolved"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RelayAttempt:
    endpoint: str
    status: AttemptStatus
    final_url: str | None = None
    detail: str = ""
    blocked: bool = False

    @property
    def resolved(self) -> bool:
        return self.status is AttemptStatus.RESOLVED


class ShortLinkResolver:
    """Follow a short link's redirects, directly first and then through relay endpoints."""

    def __init__(self, relays: tuple[str, ...] | list[str] = DEFAULT_RELAYS, timeout: float = 10,
                 user_agent: str | None = None, session: requests.Session | None = None):
        self.relays: tuple[str, ...] = tuple(relays)
        self.timeout: float = timeout
        self.session: requests.Session = session or requests.Session()
        if user_agent:
            self.session.headers.update({"User-Agent": user_agent})

    def _resolveDirect(self, url: str) -> RelayAttempt:
        try:
            response = self.session.head(url, allow_redirects=True, timeout=self.timeout)
        except requests.RequestException as e:
            return RelayAttempt("direct", AttemptStatus.SKIPPED, detail=f"transport error: {e}", blocked=True)
        if response.status_code in BLOCKED_STATUS_CODES:
            return RelayAttempt("direct", AttemptStatus.SKIPPED, detail=f"blocked with HTTP {response.status_code}",
                                blocked=True)
        final_url = unwrapConsentRedirect(response.url or "")
        if not response.ok or not final_url or final_url == url:
            return RelayAttempt("direct", AttemptStatus.SKIPPED, final_url,
                                detail=f"no redirect (HTTP {response.status_code})")
        return RelayAttempt("direct", AttemptStatus.RESOLVED, final_url)

    def _resolveViaRelay(self, relay: str, url: str) -> RelayAttempt:
        endpoint = relay.format(url=quote(url, safe=""))
        try:
            response = self.session.head(endpoint, allow_redirects=True, timeout=self.timeout)
        except requests.RequestException as e:
            return RelayAttempt(relay, AttemptStatus.SKIPPED, detail=f"transport error: {e}")
        if not response.ok:
            return RelayAttempt(relay, AttemptStatus.SKIPPED, detail=f"HTTP {response.status_code}")
        final_url = unwrapConsentRedirect(response.headers.get("X-Final-Url") or response.url or "")
        if final_url == url or not isMapsProviderURL(final_url):
            return RelayAttempt(relay, AttemptStatus.SKIPPED, final_url, detail="unchanged or not a maps URL")
        return RelayAttempt(relay, AttemptStatus.RESOLVED, final_url)

    def attempts(self, url: str):
        """Yield one attempt per network path, stopping after the first resolved one."""
        attempt = self._resolveDirect(url)
        yield attempt
        if attempt.resolved:
            return
        for relay in self.relays:
            attempt = self._resolveViaRelay(relay, url)
            yield attempt
            if attempt.resolved:
                return

    def resolveShortLink(self, url: str) -> str:
        history = []
        for attempt in self.attempts(url):
            history.append(attempt)
            if attempt.resolved:
                _logger.info(f"Short link '{url}' resolved via {attempt.endpoint} to '{attempt.final_url}'")
                return attempt.final_url
            _logger.warning(f"Skipped {attempt.endpoint} for '{url}': {attempt.detail}")
        blocked = history[0].blocked
        _logger.error(f"All paths exhausted for short link '{url}'")
        raise ShortLinkUnresolvableError(url, blocked=blocked, attempts=tuple(history))


def resolveShortLink(url: str) -> str:
    """Expand a short link with the default relays."""
    return ShortLinkResolver().resolveShortLink(url)
