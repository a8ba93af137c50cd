from datetime import datetime, timedelta
from decimal import Decimal
import unittest

from solarflow.core import formatting


class StockClassificationTests(unittest.TestCase):
    def test_low_stock_is_at_or_below_threshold(self):
        self.assertTrue(formatting.is_low_stock(20, 20))
        self.assertTrue(formatting.is_low_stock(3, 20))
        self.assertFalse(formatting.is_low_stock(21, 20))

    def test_critical_stock_uses_fixed_level(self):
        self.assertTrue(formatting.is_critical_stock(5))
        self.assertTrue(formatting.is_critical_stock(0))
        self.assertFalse(formatting.is_critical_stock(6))

    def test_stock_status_labels(self):
        self.assertEqual(formatting.stock_status(5, 20), "Critical")
        self.assertEqual(formatting.stock_status(12, 20), "Low Stock")
        self.assertEqual(formatting.stock_status(50, 20), "In Stock")
        # Critical wins even when the threshold is lower than the fixed level
        self.assertEqual(formatting.stock_status(4, 2), "Critical")


class NumberFormattingTests(unittest.TestCase):
    def test_round_half_up(self):
        self.assertEqual(formatting.round_half_up(2.5), 3)
        self.assertEqual(formatting.round_half_up(0.5), 1)
        self.assertEqual(formatting.round_half_up(66.666), 67)
        self.assertEqual(formatting.round_half_up(33.3333), 33)

    def test_format_lakhs(self):
        self.assertEqual(formatting.format_lakhs(Decimal("0")), "₹0.0L")
        self.assertEqual(formatting.format_lakhs(Decimal("250000.00")), "₹2.5L")
        self.assertEqual(formatting.format_lakhs(Decimal("1234567.89")), "₹12.3L")
        self.assertEqual(formatting.format_lakhs(Decimal("15000")), "₹0.2L")

    def test_format_lakhs_rounds_half_up(self):
        self.assertEqual(formatting.format_lakhs(Decimal("25000")), "₹0.3L")


class DueDateTests(unittest.TestCase):
    def setUp(self):
        self.now = datetime(2026, 10, 19, 12, 0, 0)

    def test_no_due_date(self):
        self.assertFalse(formatting.is_overdue(None, self.now))
        self.assertEqual(formatting.due_date_text(None, self.now), "No due date")

    def test_past_due_date_is_overdue(self):
        due = self.now - timedelta(days=3)
        self.assertTrue(formatting.is_overdue(due, self.now))
        self.assertEqual(formatting.due_date_text(due, self.now), "Overdue by 3 days")

    def test_future_due_date(self):
        due = self.now + timedelta(hours=5)
        self.assertFalse(formatting.is_overdue(due, self.now))
        self.assertEqual(formatting.due_date_text(due, self.now), "Due in 5 hours")

    def test_distance_units(self):
        self.assertEqual(formatting.due_date_text(self.now + timedelta(seconds=30), self.now), "Due in less than a minute")
        self.assertEqual(formatting.due_date_text(self.now + timedelta(minutes=1), self.now), "Due in 1 minute")
        self.assertEqual(formatting.due_date_text(self.now - timedelta(days=65), self.now), "Overdue by 2 months")
        self.assertEqual(formatting.due_date_text(self.now + timedelta(days=800), self.now), "Due in 2 years")


if __name__ == "__main__":
    unittest.main()
