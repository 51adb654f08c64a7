from datetime import date
import unittest

from shelf.domain.Product import Product
from shelf.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS, EXPIRY_SNAPSHOT
from shelf.events import web_observers
from shelf.logic.expiry.analysis import compute_expiring_soon, notify_if_expiring, scan_and_notify


class TestEventBus(unittest.TestCase):

    def test_failing_listener_does_not_block_others(self):
        bus = EventBus()
        received = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe("x", broken)
        bus.subscribe("x", lambda name, payload: received.append(payload))
        bus.publish("x", 1)
        self.assertEqual(received, [1])

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        listener = lambda name, payload: received.append(payload)
        bus.subscribe("x", listener)
        bus.unsubscribe("x", listener)
        bus.publish("x", 1)
        self.assertEqual(received, [])


class TestExpiryAnalysis(unittest.TestCase):

    def setUp(self):
        self.today = date(2024, 1, 10)
        self.products = [
            Product(title="Yogurt", expiration_date=date(2024, 1, 12), user_id="u1"),
            Product(title="Milk", expiration_date=date(2024, 1, 8), user_id="u1"),
            Product(title="Rice", expiration_date=date(2024, 3, 1), user_id="u1"),
            Product(title="Eggs", expiration_date=date(2024, 1, 9), user_id="u1", is_used=True),
        ]
        web_observers.reset()

    def test_compute_expiring_soon(self):
        items = compute_expiring_soon(self.products, today=self.today)
        self.assertEqual([i["title"] for i in items], ["Milk", "Yogurt"])
        self.assertEqual(items[0]["message"], "Expired 2 days ago")
        self.assertEqual(items[1]["days_left"], 2)

    def test_wider_window(self):
        items = compute_expiring_soon(self.products, window=60, today=self.today)
        self.assertEqual([i["title"] for i in items], ["Milk", "Yogurt", "Rice"])

    def test_scan_records_alerts(self):
        web_observers.start()
        snapshots = []
        listener = lambda name, payload: snapshots.append(payload)
        GLOBAL_EVENT_BUS.subscribe(EXPIRY_SNAPSHOT, listener)
        try:
            scan_and_notify(self.products, today=self.today, user_id="u1")
        finally:
            GLOBAL_EVENT_BUS.unsubscribe(EXPIRY_SNAPSHOT, listener)
        self.assertEqual(snapshots[0]["count"], 2)
        self.assertEqual(snapshots[0]["user_id"], "u1")
        events = web_observers.get_events(None, "u1")["events"]
        self.assertEqual([(e["type"], e["title"]) for e in events],
                         [("expiry.expired", "Milk"), ("expiry.near", "Yogurt")])
        self.assertEqual(web_observers.get_events(None, "u2")["events"], [])

    def test_latest_snapshot_is_kept_per_user(self):
        web_observers.start()
        scan_and_notify(self.products, today=self.today, user_id="u1")
        expiring = web_observers.get_events(None, "u1")["expiring"]
        self.assertEqual(expiring["count"], 2)
        self.assertEqual([i["title"] for i in expiring["items"]], ["Milk", "Yogurt"])
        self.assertEqual(expiring["items"][0]["user_id"], "u1")
        self.assertIsNone(web_observers.get_events(None, "u2")["expiring"])

    def test_rescan_keeps_one_alert_per_product(self):
        web_observers.start()
        scan_and_notify(self.products, today=self.today)
        first = web_observers.get_events(None, "u1")
        scan_and_notify(self.products, today=date(2024, 1, 11))
        second = web_observers.get_events(None, "u1")
        self.assertEqual(len(second["events"]), 2)
        self.assertGreater(second["next_cursor"], first["next_cursor"])
        yogurt = [e for e in second["events"] if e["title"] == "Yogurt"][0]
        self.assertEqual(yogurt["days_left"], 1)

    def test_notify_single_product(self):
        web_observers.start()
        rice, milk = self.products[2], self.products[1]
        self.assertIsNone(notify_if_expiring(rice, today=self.today))
        item = notify_if_expiring(milk, today=self.today)
        self.assertEqual(item["days_left"], -2)
        events = web_observers.get_events(None, "u1")["events"]
        self.assertEqual([(e["type"], e["product_id"]) for e in events], [("expiry.expired", milk.id)])


if __name__ == '__main__':
    unittest.main()
