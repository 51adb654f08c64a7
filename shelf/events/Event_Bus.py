"""Simple Event Bus / Observer implementation for expiry alerts.

Event names:
  expiry.near    -> payload {"product": Product, "days_left": int, "status": ExpiryStatus}
  expiry.expired -> payload {"product": Product, "days_left": int, "status": ExpiryStatus}
  expiry.snapshot -> payload {"count": int, "items": [dict, ...]}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

EXPIRY_NEAR = "expiry.near"
EXPIRY_EXPIRED = "expiry.expired"
EXPIRY_SNAPSHOT = "expiry.snapshot"


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                # one broken listener must not stop delivery to the others
                logger.exception("Error delivering %s to %s", event_name, cb)


GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
    """Publish an event on the global bus."""
    GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = ['EventBus', 'GLOBAL_EVENT_BUS', 'publish', 'EXPIRY_NEAR', 'EXPIRY_EXPIRED', 'EXPIRY_SNAPSHOT']
