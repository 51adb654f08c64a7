"""Inventory expiry analysis: which products expire soon, and alert publishing."""
from __future__ import annotations
from datetime import date
from typing import List, Dict, Any, Iterable, Optional

from shelf.logic.expiry.status import expiry_status
from shelf.utilities.constants import WARNING_WINDOW_DAYS, DATE_FORMAT
from shelf.events.event_helpers import publish_near_expiry, publish_expired, publish_expiring_snapshot

__all__ = ["compute_expiring_soon", "notify_if_expiring", "scan_and_notify"]


def _expiring_item(product, window: Optional[int], today: Optional[date]) -> Optional[Dict[str, Any]]:
    if product.is_used:
        return None
    expiring_window = window if window is not None else WARNING_WINDOW_DAYS
    status = expiry_status(product.expiration_date, today)
    if status.days > expiring_window:
        return None
    return {
        'id': product.id,
        'user_id': product.user_id,
        'title': product.title,
        'expiration_date': product.expiration_date.strftime(DATE_FORMAT),
        'days_left': status.days,
        'message': status.message,
        'color': status.color,
    }


def compute_expiring_soon(products: Iterable, *, window: Optional[int] = None,
                          today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Return unused products expiring in <= window days (including already expired)."""
    result: List[Dict[str, Any]] = []
    for product in products:
        item = _expiring_item(product, window, today)
        if item is not None:
            result.append(item)
    result.sort(key=lambda x: (x['days_left'], x['title']))
    return result


def notify_if_expiring(product, *, window: Optional[int] = None,
                       today: Optional[date] = None) -> Optional[Dict[str, Any]]:
    """Publish expired or near-expiry for one product when it falls in the window."""
    item = _expiring_item(product, window, today)
    if item is None:
        return None
    status = expiry_status(product.expiration_date, today)
    if status.days < 0:
        publish_expired(product, status.days, status)
    else:
        publish_near_expiry(product, status.days, status)
    return item


def scan_and_notify(products: Iterable, *, window: Optional[int] = None,
                    today: Optional[date] = None, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Publish one alert per expiring product plus a snapshot; returns the snapshot items.

    user_id tags the snapshot with the owner the scan was limited to (None for all users).
    """
    items = []
    for product in products:
        item = notify_if_expiring(product, window=window, today=today)
        if item is not None:
            items.append(item)
    items.sort(key=lambda x: (x['days_left'], x['title']))
    publish_expiring_snapshot(items, user_id)
    return items
