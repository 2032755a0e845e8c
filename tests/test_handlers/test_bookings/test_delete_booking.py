import unittest
from unittest.mock import patch

from common.utils.custom_exceptions import BookingWriteConflict, NotFoundException
from helpers import load_handler


class DeleteBookingTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.mod, cls.patches = load_handler("handlers.bookings.delete_booking")

    @classmethod
    def tearDownClass(cls):
        for p in cls.patches:
            p.stop()

    def setUp(self):
        self.p_delete = patch.object(self.mod.booking_service, "delete_booking")
        self.mock_delete = self.p_delete.start()

    def tearDown(self):
        self.p_delete.stop()

    def _event(self, booking_id="b1", user_id="u1"):
        return {
            "pathParameters": {"booking_id": booking_id},
            "requestContext": {"authorizer": {"user_id": user_id} if user_id else {}},
        }

    def test_success(self):
        resp = self.mod.delete_booking(self._event(), None)
        self.assertEqual(200, resp["statusCode"])
        self.mock_delete.assert_called_once_with("b1")

    def test_unauthenticated(self):
        resp = self.mod.delete_booking(self._event(user_id=None), None)
        self.assertEqual(401, resp["statusCode"])
        self.mock_delete.assert_not_called()

    def test_not_found(self):
        self.mock_delete.side_effect = NotFoundException("booking", "b1", 404)
        resp = self.mod.delete_booking(self._event(), None)
        self.assertEqual(404, resp["statusCode"])

    def test_concurrent_write_is_conflict(self):
        self.mock_delete.side_effect = BookingWriteConflict("b1")
        resp = self.mod.delete_booking(self._event(), None)
        self.assertEqual(409, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
