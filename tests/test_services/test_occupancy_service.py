import unittest
from datetime import date

from common.models.cleaning import Occupancy
from common.services.occupancy_service import classify_occupancy, day_overview, occupancy_board
from helpers import make_booking, make_room


class TestOccupancy(unittest.TestCase):
    def setUp(self):
        self.bookings = [
            make_booking("b1", ["101"], "2024-01-10", "2024-01-12"),
            make_booking("b2", ["101"], "2024-01-12", "2024-01-14"),
            make_booking("b3", ["102"], "2024-01-11", "2024-01-13"),
        ]

    def test_vacant_when_no_booking_touches_day(self):
        self.assertEqual(
            classify_occupancy("103", date(2024, 1, 11), self.bookings), frozenset({Occupancy.VACANT})
        )

    def test_check_in_day_is_also_in_house(self):
        self.assertEqual(
            classify_occupancy("101", date(2024, 1, 10), self.bookings),
            frozenset({Occupancy.CHECK_IN, Occupancy.IN_HOUSE}),
        )

    def test_turnover_day(self):
        self.assertEqual(
            classify_occupancy("101", "2024-01-12", self.bookings),
            frozenset({Occupancy.CHECK_OUT, Occupancy.CHECK_IN, Occupancy.IN_HOUSE}),
        )

    def test_middle_night(self):
        self.assertEqual(
            classify_occupancy("102", date(2024, 1, 12), self.bookings),
            frozenset({Occupancy.IN_HOUSE}),
        )

    def test_checkout_only(self):
        self.assertEqual(
            classify_occupancy("102", date(2024, 1, 13), self.bookings),
            frozenset({Occupancy.CHECK_OUT}),
        )

    def test_board_covers_every_room(self):
        board = occupancy_board([make_room("101"), make_room("103")], date(2024, 1, 11), self.bookings)
        self.assertEqual(set(board), {"101", "103"})
        self.assertEqual(board["103"], frozenset({Occupancy.VACANT}))

    def test_day_overview(self):
        overview = day_overview(date(2024, 1, 12), self.bookings)
        self.assertEqual([b.booking_id for b in overview.check_ins], ["b2"])
        self.assertEqual([b.booking_id for b in overview.check_outs], ["b1"])
        self.assertEqual({b.booking_id for b in overview.in_house}, {"b2", "b3"})


if __name__ == "__main__":
    unittest.main()
