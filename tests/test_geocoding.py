import unittest
from unittest.mock import MagicMock, patch

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.location import Location

from pypinpoint.geocoding import GeocodingAdapter, buildLocationName, shortenAddress
from pypinpoint.models import Coordinates

DISPLAY_NAME = "Cubbon Park, Ambedkar Veedhi, Sampangi Rama Nagara, Bengaluru, Karnataka, 560001, India"


class TestBuildLocationName(unittest.TestCase):

    def test_preference_order(self):
        self.assertEqual(buildLocationName({"name": "Cubbon Park", "road": "Kasturba Road"}), "Cubbon Park")
        self.assertEqual(buildLocationName({"house_number": "12", "road": "MG Road"}), "12 MG Road")
        self.assertEqual(buildLocationName({"road": "MG Road", "suburb": "Ashok Nagar"}), "MG Road")
        self.assertEqual(buildLocationName({"suburb": "Ashok Nagar", "town": "X"}), "Ashok Nagar")
        self.assertEqual(buildLocationName({"town": "Hosur"}), "Hosur")
        self.assertEqual(buildLocationName({"village": "Nandi"}), "Nandi")

    def test_appends_city_or_state(self):
        self.assertEqual(buildLocationName({"road": "MG Road", "city": "Bengaluru", "state": "Karnataka"}),
                         "MG Road, Bengaluru")
        self.assertEqual(buildLocationName({"village": "Nandi", "state": "Karnataka"}), "Nandi, Karnataka")
        # City already part of the name, so the state is used instead
        self.assertEqual(buildLocationName({"city": "Bengaluru", "state": "Karnataka"}), "Bengaluru, Karnataka")
        self.assertEqual(buildLocationName({"town": "Karnataka Town", "state": "Karnataka"}), "Karnataka Town")

    def test_unusable(self):
        self.assertEqual(buildLocationName({}), "")
        self.assertEqual(buildLocationName({"house_number": "12", "state": "Karnataka"}), "")


class TestShortenAddress(unittest.TestCase):

    def test_shorten(self):
        self.assertEqual(shortenAddress(DISPLAY_NAME), "Cubbon Park, Ambedkar Veedhi, Sampangi Rama Nagara")
        self.assertEqual(shortenAddress("Bengaluru, India"), "Bengaluru, India")
        self.assertEqual(shortenAddress("Antarctica"), "Antarctica")


class TestGeocodingAdapter(unittest.TestCase):

    def setUp(self):
        self.geolocator = MagicMock()
        self.adapter = GeocodingAdapter(geolocator=self.geolocator, language="en")

    def test_geocode(self):
        self.geolocator.geocode.return_value = Location(
            "Eiffel Tower, Paris", (48.8582599, 2.2945006), {"lat": "48.8582599", "lon": "2.2945006"})
        self.assertEqual(self.adapter.geocode("Eiffel Tower"), Coordinates(48.8582599, 2.2945006))
        self.geolocator.geocode.assert_called_once_with("Eiffel Tower", exactly_one=True, language="en")

    def test_geocode_no_result(self):
        self.geolocator.geocode.return_value = None
        self.assertIsNone(self.adapter.geocode("Nowhere at all"))

    @patch('pypinpoint.geocoding._logger')
    def test_geocode_transport_error_swallowed(self, mock_logger):
        self.geolocator.geocode.side_effect = GeocoderTimedOut("timed out")
        self.assertIsNone(self.adapter.geocode("Eiffel Tower"))
        mock_logger.warning.assert_called_once()

    def test_geocode_blank_name(self):
        self.assertIsNone(self.adapter.geocode("   "))
        self.geolocator.geocode.assert_not_called()

    def test_reverse_structured(self):
        raw = {"display_name": DISPLAY_NAME,
               "address": {"road": "Kasturba Road", "city": "Bengaluru", "state": "Karnataka"}}
        self.geolocator.reverse.return_value = Location(DISPLAY_NAME, (12.9763, 77.5929), raw)
        self.assertEqual(self.adapter.reverseGeocode(12.9763, 77.5929), "Kasturba Road, Bengaluru")
        self.geolocator.reverse.assert_called_once_with((12.9763, 77.5929), exactly_one=True, language="en",
                                                        addressdetails=True, zoom=18)

    def test_reverse_display_name_fallback(self):
        raw = {"display_name": DISPLAY_NAME, "address": {"country": "India"}}
        self.geolocator.reverse.return_value = Location(DISPLAY_NAME, (12.9763, 77.5929), raw)
        self.assertEqual(self.adapter.reverseGeocode(12.9763, 77.5929),
                         "Cubbon Park, Ambedkar Veedhi, Sampangi Rama Nagara")

    def test_reverse_missing_fields(self):
        """Test a response without address or display name falls back to the address text."""
        self.geolocator.reverse.return_value = Location("Somewhere, Earth", (1.0, 2.0), {})
        self.assertEqual(self.adapter.reverseGeocode(1.0, 2.0), "Somewhere, Earth")

    def test_reverse_failure_returns_coordinates(self):
        """Test reverse geocoding never raises and falls back to the pair as text."""
        self.geolocator.reverse.side_effect = GeocoderServiceError("503")
        self.assertEqual(self.adapter.reverseGeocode(12.9716, 77.5946), "12.9716, 77.5946")
        self.geolocator.reverse.side_effect = None
        self.geolocator.reverse.return_value = None
        self.assertEqual(self.adapter.reverseGeocode(-1.5, 2), "-1.5, 2")

    @patch('pypinpoint.geocoding.Nominatim')
    def test_default_geolocator(self, mock_nominatim):
        GeocodingAdapter(user_agent="PyPinpoint/test", domain="nominatim.example.org", timeout=3)
        mock_nominatim.assert_called_once_with(user_agent="PyPinpoint/test", domain="nominatim.example.org", timeout=3)


if __name__ == '__main__':
    unittest.main()
