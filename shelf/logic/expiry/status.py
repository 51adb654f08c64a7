"""Expiration status helpers.

Everything here is a pure function of an expiration date and "today"; callers
pass ``today`` explicitly in tests and let it default to ``date.today()``
everywhere else.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from shelf.utilities.constants import (
    EXPIRED, EXPIRES_TODAY, WARNING, NORMAL,
    STATUS_COLORS, STATUS_ICONS, WARNING_WINDOW_DAYS, FRESH_THRESHOLD_DAYS,
)
from shelf.utilities.config import WARNING_DAYS_BEFORE_EXPIRY

__all__ = [
    "ExpiryStatus", "as_date", "days_until", "is_expired", "expiry_status",
    "border_color", "freshness", "warning_date",
]

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class ExpiryStatus:
    message: str
    color: str
    icon: str
    level: str
    days: int

    def to_dict(self):
        return {
            "message": self.message,
            "color": self.color,
            "icon": self.icon,
            "level": self.level,
            "days": self.days,
        }


def as_date(value: DateLike) -> date:
    """Normalise a datetime to its calendar day (start of day)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until(expiration: DateLike, today: Optional[DateLike] = None) -> int:
    """Signed number of whole days from today to the expiration day."""
    today_d = as_date(today) if today is not None else date.today()
    return (as_date(expiration) - today_d).days


def is_expired(expiration: DateLike, today: Optional[DateLike] = None) -> bool:
    return days_until(expiration, today) < 0


def _plural(n: int) -> str:
    return "day" if n == 1 else "days"


def expiry_status(expiration: DateLike, today: Optional[DateLike] = None) -> ExpiryStatus:
    """Classify an expiration date relative to today.

    < 0 days   -> "Expired N days ago"   (red)
    0 days     -> "Expires today"        (orange)
    1..3 days  -> "Expires in N days"    (yellow, warning)
    > 3 days   -> "Expires in N days"    (green)
    """
    days = days_until(expiration, today)
    if days < 0:
        n = abs(days)
        level, message = EXPIRED, f"Expired {n} {_plural(n)} ago"
    elif days == 0:
        level, message = EXPIRES_TODAY, "Expires today"
    elif days <= WARNING_WINDOW_DAYS:
        level, message = WARNING, f"Expires in {days} {_plural(days)}"
    else:
        level, message = NORMAL, f"Expires in {days} {_plural(days)}"
    return ExpiryStatus(message, STATUS_COLORS[level], STATUS_ICONS[level], level, days)


def border_color(days: int) -> str:
    """Card border for an expiration group: red expired, green a week or more out, yellow otherwise."""
    if days < 0:
        return "red"
    if days >= FRESH_THRESHOLD_DAYS:
        return "green"
    return "yellow"


def freshness(days: int) -> str:
    if days < 0:
        return "expired"
    if days < FRESH_THRESHOLD_DAYS:
        return "expiring_soon"
    return "fresh"


def warning_date(expiration: DateLike) -> date:
    """Day on which the "expiring in a week" warning is due."""
    return as_date(expiration) - timedelta(days=WARNING_DAYS_BEFORE_EXPIRY)
