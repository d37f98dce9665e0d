import unittest
from unittest.mock import MagicMock, patch
from urllib.parse import quote

import requests

from pypinpoint.exceptions import ShortLinkUnresolvableError
from pypinpoint.short_links import (AttemptStatus, ShortLinkResolver, isMapsProviderURL, isShortLink,
                                    looksLikeURL, unwrapConsentRedirect)

SHORT_URL = "https://maps.app.goo.gl/AbC123xyz"
RESOLVED_URL = "https://www.google.com/maps/place/Cubbon+Park/@12.9763,77.5929,17z"
RELAYS = (
    "https://relay-one.example/raw?url={url}",
    "https://relay-two.example/{url}",
    "https://relay-three.example/fetch/{url}",
)


def _response(url: str, status_code: int = 200, headers: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.url = url
    response.status_code = status_code
    response.ok = status_code < 400
    response.headers = headers or {}
    return response


class TestIsShortLink(unittest.TestCase):

    def test_known_shorteners(self):
        for url in ["https://g.co/kgs/t31e9pH", "https://goo.gl/maps/xyz987", "https://maps.app.goo.gl/AbC123",
                    "https://gmaps.tinyurl.com/abc", "https://tinyurl.com/y7k2m3", "https://bit.ly/3abcDEF",
                    "https://is.gd/abc12", "https://maps.google.com/maps/AbC123", "https://www.google.com/maps/Xyz789"]:
            with self.subTest(url=url):
                self.assertTrue(isShortLink(url))

    def test_long_links(self):
        for url in ["https://www.google.com/maps?q=12.9716,77.5946", "https://maps.google.com/maps/place/Foo",
                    "https://www.google.com/maps/search/coffee", "https://www.google.com/maps/@12.9,77.5,15z",
                    "https://maps.google.com/maps/AbC123?q=1,2", "https://maps.apple.com/?ll=12.9716,77.5946",
                    "Eiffel Tower, Paris", "Meet at [5pm", "[Home] Eiffel Tower, Paris", ""]:
            with self.subTest(url=url):
                self.assertFalse(isShortLink(url))


class TestHelpers(unittest.TestCase):

    def test_maps_provider(self):
        self.assertTrue(isMapsProviderURL(RESOLVED_URL))
        self.assertTrue(isMapsProviderURL("https://maps.apple.com/?ll=1,2"))
        self.assertFalse(isMapsProviderURL("https://example.com/landing"))

    def test_unwrap_consent(self):
        consent = "https://consent.google.com/m?continue=https://www.google.com/maps/place/Foo/@1.5,2.5&gl=IN"
        self.assertEqual(unwrapConsentRedirect(consent), "https://www.google.com/maps/place/Foo/@1.5,2.5")
        self.assertEqual(unwrapConsentRedirect(RESOLVED_URL), RESOLVED_URL)

    def test_malformed_urls_left_alone(self):
        """Test unbalanced brackets are not treated as a parse failure."""
        self.assertEqual(unwrapConsentRedirect("http://[bad"), "http://[bad")
        self.assertFalse(isShortLink("https://[google.com/maps/AbC123"))
        self.assertTrue(looksLikeURL("https://maps.google.com/maps/AbC123"))
        self.assertFalse(looksLikeURL("Meet at [5pm"))


class TestShortLinkResolver(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.resolver = ShortLinkResolver(relays=RELAYS, timeout=5, session=self.session)

    def test_direct_resolution(self):
        """Test a redirect followed directly needs no relay."""
        self.session.head.return_value = _response(RESOLVED_URL)
        self.assertEqual(self.resolver.resolveShortLink(SHORT_URL), RESOLVED_URL)
        self.session.head.assert_called_once_with(SHORT_URL, allow_redirects=True, timeout=5)

    def test_direct_consent_interstitial(self):
        consent = f"https://consent.google.com/ml?continue={quote(RESOLVED_URL, safe='')}&hl=en"
        self.session.head.return_value = _response(consent)
        self.assertEqual(self.resolver.resolveShortLink(SHORT_URL), RESOLVED_URL)

    def test_relay_fallback_stops_at_first_success(self):
        """Test relays are tried in order and later relays are not contacted."""
        self.session.head.side_effect = [
            requests.ConnectionError("refused"),
            requests.Timeout("slow relay"),
            _response("https://relay-two.example/whatever", headers={"X-Final-Url": RESOLVED_URL}),
            _response(RESOLVED_URL),
        ]
        self.assertEqual(self.resolver.resolveShortLink(SHORT_URL), RESOLVED_URL)
        self.assertEqual(self.session.head.call_count, 3)
        relay_url = self.session.head.call_args_list[1][0][0]
        self.assertEqual(relay_url, "https://relay-one.example/raw?url=https%3A%2F%2Fmaps.app.goo.gl%2FAbC123xyz")

    def test_relay_unchanged_or_non_maps_skipped(self):
        self.session.head.side_effect = [
            _response(SHORT_URL),
            _response("x", headers={"X-Final-Url": SHORT_URL}),
            _response("https://example.com/landing"),
            _response(RESOLVED_URL),
        ]
        self.assertEqual(self.resolver.resolveShortLink(SHORT_URL), RESOLVED_URL)
        statuses = [attempt.status for attempt in ShortLinkResolver(RELAYS, session=MagicMock(**{
            "head.side_effect": [_response(SHORT_URL), _response("https://example.com/landing"),
                                 _response(RESOLVED_URL)]})).attempts(SHORT_URL)]
        self.assertEqual(statuses, [AttemptStatus.SKIPPED, AttemptStatus.SKIPPED, AttemptStatus.RESOLVED])

    @patch('pypinpoint.short_links._logger')
    def test_all_paths_exhausted_blocked(self, mock_logger):
        """Test exhaustion after a refused direct request reports the link as blocked."""
        self.session.head.side_effect = [
            _response(SHORT_URL, status_code=403),
            requests.ConnectionError("down"),
            _response("", status_code=500),
            _response(SHORT_URL),
        ]
        with self.assertRaises(ShortLinkUnresolvableError) as context:
            self.resolver.resolveShortLink(SHORT_URL)
        self.assertTrue(context.exception.blocked)
        self.assertEqual(len(context.exception.attempts), 4)
        self.assertEqual(mock_logger.warning.call_count, 4)
        mock_logger.error.assert_called_once()

    def test_all_paths_exhausted_unresolvable(self):
        self.session.head.return_value = _response(SHORT_URL)
        with self.assertRaises(ShortLinkUnresolvableError) as context:
            self.resolver.resolveShortLink(SHORT_URL)
        self.assertFalse(context.exception.blocked)
        self.assertIn("unresolvable", str(context.exception))

    def test_user_agent_header(self):
        session = MagicMock()
        session.headers = {}
        ShortLinkResolver(session=session, user_agent="PyPinpoint/test")
        self.assertEqual(session.headers["User-Agent"], "PyPinpoint/test")


if __name__ == '__main__':
    unittest.main()
