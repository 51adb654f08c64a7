"""Event helper utilities for publishing expiry events on the global bus."""
from __future__ import annotations
from typing import Iterable, Any, Optional
from .Event_Bus import publish, EXPIRY_NEAR, EXPIRY_EXPIRED, EXPIRY_SNAPSHOT

__all__ = ['publish_near_expiry', 'publish_expired', 'publish_expiring_snapshot']


def publish_near_expiry(product: Any, days_left: int, status: Any):
    publish(EXPIRY_NEAR, {'product': product, 'days_left': days_left, 'status': status})


def publish_expired(product: Any, days_left: int, status: Any):
    publish(EXPIRY_EXPIRED, {'product': product, 'days_left': days_left, 'status': status})


def publish_expiring_snapshot(items: Iterable[dict], user_id: Optional[str] = None):
    """Publish the list of products that expire soon.

    Payload structure:
        {'user_id': <str|None>, 'count': <int>,
         'items': [{id, user_id, title, expiration_date, days_left, message, color}, ...]}
    """
    items_list = list(items)
    publish(EXPIRY_SNAPSHOT, {'user_id': user_id, 'count': len(items_list), 'items': items_list})
