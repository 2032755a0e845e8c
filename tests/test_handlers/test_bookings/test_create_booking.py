import json
import unittest
from unittest.mock import patch

from common.utils.custom_exceptions import (
    BookingValidationError,
    BookingWriteConflict,
    NotFoundException,
    RoomConflict,
)
from helpers import body_of, load_handler, make_booking


class CreateBookingTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.mod, cls.patches = load_handler("handlers.bookings.create_booking")

    @classmethod
    def tearDownClass(cls):
        for p in cls.patches:
            p.stop()

    def setUp(self):
        self.p_create = patch.object(self.mod.booking_service, "create_booking")
        self.mock_create = self.p_create.start()

    def tearDown(self):
        self.p_create.stop()

    def _event(self, body=None, user_id="u1"):
        body = body if body is not None else {
            "customerName": "Somchai",
            "phone": "0812345678",
            "checkIn": "2024-01-10",
            "checkOut": "2024-01-12",
            "rooms": ["101"],
        }
        return {
            "body": json.dumps(body),
            "requestContext": {"authorizer": {"user_id": user_id} if user_id else {}},
        }

    def test_missing_body_returns_400(self):
        resp = self.mod.create_booking({}, None)
        self.assertEqual(400, resp["statusCode"])

    def test_validation_error_returns_400(self):
        resp = self.mod.create_booking(self._event(body={"rooms": []}), None)
        self.assertEqual(400, resp["statusCode"])
        self.mock_create.assert_not_called()

    def test_missing_user_in_authorizer_returns_401(self):
        resp = self.mod.create_booking(self._event(user_id=None), None)
        self.assertEqual(401, resp["statusCode"])

    def test_unknown_room_returns_400(self):
        self.mock_create.side_effect = BookingValidationError("Unknown room(s): 999")
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(400, resp["statusCode"])
        self.assertIn("999", body_of(resp)["message"])

    def test_unknown_guest_returns_404(self):
        self.mock_create.side_effect = NotFoundException("guest", "g1", 404)
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(404, resp["statusCode"])

    def test_conflict_returns_409_with_rooms(self):
        self.mock_create.side_effect = RoomConflict(["101"])
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(409, resp["statusCode"])
        self.assertEqual(["101"], body_of(resp)["data"]["conflicting_rooms"])

    def test_concurrent_guest_write_returns_409(self):
        self.mock_create.side_effect = BookingWriteConflict("b1")
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(409, resp["statusCode"])

    def test_generic_error_returns_500(self):
        self.mock_create.side_effect = RuntimeError("boom")
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(500, resp["statusCode"])

    def test_success_returns_201(self):
        self.mock_create.return_value = make_booking(
            "b1", ["101"], "2024-01-10", "2024-01-12", total_price=1600
        )
        resp = self.mod.create_booking(self._event(), None)

        self.assertEqual(201, resp["statusCode"])
        data = body_of(resp)["data"]
        self.assertEqual("b1", data["booking_id"])
        self.assertEqual(2, data["nights"])
        self.assertEqual(1600, data["total_price"])
        self.mock_create.assert_called_once()


if __name__ == "__main__":
    unittest.main()
