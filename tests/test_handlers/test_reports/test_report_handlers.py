import unittest
from datetime import date
from unittest.mock import patch

from common.services.occupancy_service import DayOverview
from common.services.report_service import CalendarDay, MonthOccupancy
from helpers import body_of, load_handler, make_booking


class GetCalendarTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.mod, cls.patches = load_handler("handlers.reports.get_calendar")

    @classmethod
    def tearDownClass(cls):
        for p in cls.patches:
            p.stop()

    @patch("handlers.reports.get_calendar.report_service")
    def test_calendar(self, mock_service):
        booking = make_booking("b1", ["101"], "2024-02-01", "2024-02-03")
        mock_service.calendar.return_value = (
            [CalendarDay(date(2024, 2, 1), booked=3, vacant=0)],
            DayOverview(date(2024, 2, 1), check_ins=[booking]),
        )

        resp = self.mod.get_calendar(
            {"queryStringParameters": {"year": "2024", "month": "2", "date": "2024-02-01"}}, None
        )

        self.assertEqual(200, resp["statusCode"])
        mock_service.calendar.assert_called_once_with(2024, 2, date(2024, 2, 1))
        data = body_of(resp)["data"]
        self.assertTrue(data["days"][0]["full"])
        self.assertEqual("b1", data["overview"]["check_ins"][0]["booking_id"])

    def test_bad_month(self):
        resp = self.mod.get_calendar({"queryStringParameters": {"year": "2024", "month": "13"}}, None)
        self.assertEqual(400, resp["statusCode"])

    def test_non_numeric_year(self):
        resp = self.mod.get_calendar({"queryStringParameters": {"year": "twenty"}}, None)
        self.assertEqual(400, resp["statusCode"])

    def test_year_out_of_range(self):
        for year in ("0", "10000", "9999"):
            resp = self.mod.get_calendar(
                {"queryStringParameters": {"year": year, "month": "12", "date": "2024-02-01"}}, None
            )
            self.assertEqual(400, resp["statusCode"], year)


class GetDashboardTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.mod, cls.patches = load_handler("handlers.reports.get_dashboard")

    @classmethod
    def tearDownClass(cls):
        for p in cls.patches:
            p.stop()

    @patch("handlers.reports.get_dashboard.report_service")
    def test_dashboard(self, mock_service):
        mock_service.dashboard.return_value = {
            "monthly_occupancy": [MonthOccupancy("Jan 2024", 12)],
            "room_popularity": [("101", 4)],
        }

        resp = self.mod.get_dashboard({}, None)

        data = body_of(resp)["data"]
        self.assertEqual([{"month": "Jan 2024", "room_nights": 12}], data["monthly_occupancy"])
        self.assertEqual([{"room_number": "101", "bookings": 4}], data["room_popularity"])


if __name__ == "__main__":
    unittest.main()
