import unittest
from datetime import date
from unittest.mock import patch

from common.utils.custom_exceptions import InvalidDates
from helpers import body_of, load_handler, make_room


class GetAvailableRoomsTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.mod, cls.patches = load_handler("handlers.rooms.get_available_rooms")

    @classmethod
    def tearDownClass(cls):
        for p in cls.patches:
            p.stop()

    def setUp(self):
        self.p_available = patch.object(self.mod.room_service, "get_available_rooms")
        self.mock_available = self.p_available.start()

    def tearDown(self):
        self.p_available.stop()

    def test_success(self):
        self.mock_available.return_value = [make_room("101")]

        resp = self.mod.get_available_rooms(
            {"queryStringParameters": {"checkIn": "2024-01-10", "checkOut": "2024-01-12", "excludeBookingId": "b1"}},
            None,
        )

        self.assertEqual(200, resp["statusCode"])
        self.mock_available.assert_called_once_with(
            date(2024, 1, 10), date(2024, 1, 12), exclude_booking_id="b1"
        )
        self.assertEqual(1, body_of(resp)["data"]["count"])

    def test_missing_dates(self):
        resp = self.mod.get_available_rooms({"queryStringParameters": {"checkIn": "2024-01-10"}}, None)
        self.assertEqual(400, resp["statusCode"])

    def test_reversed_range(self):
        self.mock_available.side_effect = InvalidDates("check-out must be after check-in")
        resp = self.mod.get_available_rooms(
            {"queryStringParameters": {"check_in": "2024-01-12", "check_out": "2024-01-10"}}, None
        )
        self.assertEqual(400, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
