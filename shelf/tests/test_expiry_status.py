from datetime import date, datetime
import unittest

from shelf.logic.expiry.status import (
    expiry_status, days_until, is_expired, border_color, freshness, warning_date,
)


class TestExpiryStatus(unittest.TestCase):

    def setUp(self):
        self.today = date(2024, 1, 10)

    def test_expired_three_days_ago(self):
        status = expiry_status(date(2024, 1, 7), self.today)
        self.assertEqual(status.message, "Expired 3 days ago")
        self.assertEqual(status.color, "red")
        self.assertEqual(status.level, "expired")
        self.assertEqual(status.days, -3)

    def test_expired_one_day_ago_is_singular(self):
        status = expiry_status(date(2024, 1, 9), self.today)
        self.assertEqual(status.message, "Expired 1 day ago")

    def test_expires_today(self):
        status = expiry_status(date(2024, 1, 10), self.today)
        self.assertEqual(status.message, "Expires today")
        self.assertEqual(status.color, "orange")

    def test_warning_window(self):
        one = expiry_status(date(2024, 1, 11), self.today)
        self.assertEqual(one.message, "Expires in 1 day")
        self.assertEqual(one.color, "yellow")
        three = expiry_status(date(2024, 1, 13), self.today)
        self.assertEqual(three.message, "Expires in 3 days")
        self.assertEqual(three.color, "yellow")

    def test_normal_after_three_days(self):
        status = expiry_status(date(2024, 1, 14), self.today)
        self.assertEqual(status.message, "Expires in 4 days")
        self.assertEqual(status.color, "green")
        self.assertEqual(status.level, "normal")

    def test_time_of_day_is_ignored(self):
        morning = datetime(2024, 1, 10, 0, 5)
        evening = datetime(2024, 1, 12, 23, 59)
        self.assertEqual(days_until(evening, morning), 2)

    def test_is_expired(self):
        self.assertTrue(is_expired(date(2024, 1, 9), self.today))
        self.assertFalse(is_expired(self.today, self.today))

    def test_border_color(self):
        self.assertEqual(border_color(-1), "red")
        self.assertEqual(border_color(0), "yellow")
        self.assertEqual(border_color(6), "yellow")
        self.assertEqual(border_color(7), "green")

    def test_freshness(self):
        self.assertEqual(freshness(-2), "expired")
        self.assertEqual(freshness(0), "expiring_soon")
        self.assertEqual(freshness(6), "expiring_soon")
        self.assertEqual(freshness(7), "fresh")

    def test_warning_date_is_one_week_before(self):
        self.assertEqual(warning_date(date(2024, 1, 20)), date(2024, 1, 13))


if __name__ == '__main__':
    unittest.main()
