"""Expiry notification schedule.

A product gets at most two notifications, both at the configured time of day:
  * warning: one week before expiry (only when the product has >= 7 days left)
  * expiration: on the expiration day
Fire times that are not in the future are skipped.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from threading import Lock
from typing import Dict, List, Optional
import logging

from shelf.logic.expiry.status import days_until, warning_date
from shelf.utilities.config import NOTIFICATION_HOUR, NOTIFICATION_MINUTE, WARNING_DAYS_BEFORE_EXPIRY
from shelf.utilities.constants import WARNING_NOTIFICATION_TITLE, EXPIRATION_NOTIFICATION_TITLE

logger = logging.getLogger(__name__)

__all__ = ["ScheduledNotification", "compute_notification_schedule", "NotificationScheduler"]


@dataclass(frozen=True)
class ScheduledNotification:
    id: str
    product_id: str
    user_id: str
    kind: str
    title: str
    body: str
    fire_at: datetime

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "user_id": self.user_id,
            "kind": self.kind,
            "title": self.title,
            "body": self.body,
            "fire_at": self.fire_at.isoformat(),
        }


def _at_notification_time(day) -> datetime:
    return datetime.combine(day, time(NOTIFICATION_HOUR, NOTIFICATION_MINUTE))


def compute_notification_schedule(product, now: Optional[datetime] = None) -> List[ScheduledNotification]:
    now = now or datetime.now()
    days_left = days_until(product.expiration_date, now)
    schedule: List[ScheduledNotification] = []

    if days_left >= WARNING_DAYS_BEFORE_EXPIRY:
        fire_at = _at_notification_time(warning_date(product.expiration_date))
        if fire_at > now:
            schedule.append(ScheduledNotification(
                id=product.warning_notification_id,
                product_id=product.id,
                user_id=product.user_id,
                kind="warning",
                title=WARNING_NOTIFICATION_TITLE,
                body=f"{product.title} is expiring in a week",
                fire_at=fire_at,
            ))
        else:
            logger.debug("Skipping warning notification for %s: %s is in the past", product.id, fire_at)

    fire_at = _at_notification_time(product.expiration_date)
    if fire_at > now:
        schedule.append(ScheduledNotification(
            id=product.expiration_notification_id,
            product_id=product.id,
            user_id=product.user_id,
            kind="expiration",
            title=EXPIRATION_NOTIFICATION_TITLE,
            body=f"{product.title} is expired",
            fire_at=fire_at,
        ))
    else:
        logger.debug("Skipping expiration notification for %s: %s is in the past", product.id, fire_at)
    return schedule


class NotificationScheduler:
    """In-process registry of pending notifications, keyed by notification id."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._pending: Dict[str, ScheduledNotification] = {}
        self._lock = Lock()

    def schedule_for(self, product, now: Optional[datetime] = None) -> List[ScheduledNotification]:
        if not self.enabled:
            logger.warning("Cannot schedule notifications for %s - scheduler disabled", product.id)
            return []
        # replace, never duplicate
        self.cancel_for(product)
        schedule = compute_notification_schedule(product, now)
        with self._lock:
            for n in schedule:
                self._pending[n.id] = n
        logger.info("Scheduled %d notification(s) for '%s'", len(schedule), product.title)
        return schedule

    def cancel_for(self, product) -> int:
        with self._lock:
            removed = 0
            for nid in (product.warning_notification_id, product.expiration_notification_id):
                if self._pending.pop(nid, None) is not None:
                    removed += 1
        return removed

    def cancel_user(self, user_id: str) -> int:
        with self._lock:
            ids = [nid for nid, n in self._pending.items() if n.user_id == user_id]
            for nid in ids:
                del self._pending[nid]
        return len(ids)

    def pending(self, user_id: Optional[str] = None) -> List[ScheduledNotification]:
        with self._lock:
            items = list(self._pending.values())
        if user_id is not None:
            items = [n for n in items if n.user_id == user_id]
        return sorted(items, key=lambda n: (n.fire_at, n.id))

    def due(self, now: Optional[datetime] = None) -> List[ScheduledNotification]:
        '''Pop notifications whose fire time has passed.'''
        now = now or datetime.now()
        with self._lock:
            fired = [n for n in self._pending.values() if n.fire_at <= now]
            for n in fired:
                del self._pending[n.id]
        return sorted(fired, key=lambda n: n.fire_at)
