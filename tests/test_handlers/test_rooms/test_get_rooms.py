import unittest
from datetime import date
from unittest.mock import patch

from common.models.rooms import RoomSortKey
from common.services.room_service import RoomDayStatus
from helpers import body_of, load_handler, make_booking, make_room


class GetRoomsTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.mod, cls.patches = load_handler("handlers.rooms.get_rooms")

    @classmethod
    def tearDownClass(cls):
        for p in cls.patches:
            p.stop()

    def setUp(self):
        self.p_list = patch.object(self.mod.room_service, "list_rooms")
        self.p_board = patch.object(self.mod.room_service, "status_board")
        self.mock_list = self.p_list.start()
        self.mock_board = self.p_board.start()

    def tearDown(self):
        self.p_list.stop()
        self.p_board.stop()

    def test_catalog(self):
        self.mock_list.return_value = [make_room("101"), make_room("102")]

        resp = self.mod.get_rooms({}, None)

        data = body_of(resp)["data"]
        self.assertEqual(2, data["count"])
        self.assertEqual("101", data["rooms"][0]["number"])

    def test_status_board(self):
        booking = make_booking("b1", ["102"], "2024-01-10", "2024-01-12")
        self.mock_board.return_value = [
            RoomDayStatus(make_room("101")),
            RoomDayStatus(make_room("102"), booking),
        ]

        resp = self.mod.get_rooms(
            {"queryStringParameters": {"date": "2024-01-11", "sort": "bed_type"}}, None
        )

        self.assertEqual(200, resp["statusCode"])
        self.mock_board.assert_called_once_with(date(2024, 1, 11), RoomSortKey.BED_TYPE)
        data = body_of(resp)["data"]
        self.assertEqual(1, data["booked"])
        self.assertIsNone(data["rooms"][0]["booking"])
        self.assertEqual("b1", data["rooms"][1]["booking"]["booking_id"])

    def test_invalid_sort(self):
        resp = self.mod.get_rooms({"queryStringParameters": {"date": "2024-01-11", "sort": "price"}}, None)
        self.assertEqual(400, resp["statusCode"])

    def test_invalid_date(self):
        resp = self.mod.get_rooms({"queryStringParameters": {"date": "tomorrow"}}, None)
        self.assertEqual(400, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
