import unittest
from datetime import date

from common.services.pricing_service import (
    compute_total_price,
    compute_unit_price_for_receipt,
    price_for_stay,
    resolve_total_price,
    stay_changed,
)
from helpers import make_booking


class TestPricing(unittest.TestCase):
    def test_compute_total_price(self):
        self.assertEqual(compute_total_price(3, 2, 800), 4800)

    def test_compute_total_price_rejects_zero(self):
        with self.assertRaises(ValueError):
            compute_total_price(0, 1, 800)
        with self.assertRaises(ValueError):
            compute_total_price(1, 0, 800)

    def test_unit_price_for_receipt(self):
        self.assertEqual(compute_unit_price_for_receipt(4800, 2, 3), 800)

    def test_price_for_stay(self):
        self.assertEqual(price_for_stay(date(2024, 1, 10), date(2024, 1, 12), 2, 800), 3200)


class TestResolveTotalPrice(unittest.TestCase):
    def setUp(self):
        self.check_in = date(2024, 1, 10)
        self.check_out = date(2024, 1, 12)
        self.existing = make_booking(
            "b1", ["101", "102"], self.check_in, self.check_out, total_price=3200
        )

    def test_create_computes_from_rate(self):
        total = resolve_total_price(["101", "102"], self.check_in, self.check_out, 800)
        self.assertEqual(total, 3200)

    def test_create_keeps_operator_total(self):
        total = resolve_total_price(["101"], self.check_in, self.check_out, 800, requested_total=1000)
        self.assertEqual(total, 1000)

    def test_removing_a_room_recomputes(self):
        total = resolve_total_price(
            ["101"], self.check_in, self.check_out, 800, requested_total=3200, existing=self.existing
        )
        self.assertEqual(total, 1600)

    def test_changed_stay_with_new_override_keeps_it(self):
        total = resolve_total_price(
            ["101"], self.check_in, self.check_out, 800, requested_total=1500, existing=self.existing
        )
        self.assertEqual(total, 1500)

    def test_status_only_edit_keeps_override(self):
        self.existing.total_price = 2500
        total = resolve_total_price(
            ["102", "101"], self.check_in, self.check_out, 800, existing=self.existing
        )
        self.assertEqual(total, 2500)

    def test_unchanged_stay_with_new_total(self):
        total = resolve_total_price(
            ["101", "102"], self.check_in, self.check_out, 800, requested_total=2000, existing=self.existing
        )
        self.assertEqual(total, 2000)

    def test_stay_changed(self):
        self.assertFalse(stay_changed(self.existing, ["102", "101"], self.check_in, self.check_out))
        self.assertTrue(stay_changed(self.existing, ["101"], self.check_in, self.check_out))
        self.assertTrue(
            stay_changed(self.existing, ["101", "102"], self.check_in, date(2024, 1, 13))
        )


if __name__ == "__main__":
    unittest.main()
