"""Web-facing observers for expiry events.

Subscribes to the GLOBAL_EVENT_BUS for expiry.near and expiry.expired and
keeps a bounded in-memory buffer of recent alerts that clients poll through
/api/alerts?since=<cursor>. Each alert gets an auto-increment id used as the
cursor; a newer alert for a product replaces the older one. The latest
expiry.snapshot per scanned owner is kept alongside. The buffer is per process.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone
import logging

from .Event_Bus import GLOBAL_EVENT_BUS, EXPIRY_NEAR, EXPIRY_EXPIRED, EXPIRY_SNAPSHOT

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_snapshots: Dict[Optional[str], Dict[str, Any]] = {}
_next_id = 1
MAX_EVENTS = 300
_started = False


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _record(event_name: str, payload: Any):
    global _next_id
    with _lock:
        evt: Dict[str, Any] = {
            'id': _next_id,
            'type': event_name,
            'ts': _now(),
        }
        if isinstance(payload, dict):
            product = payload.get('product')
            if product is not None:
                evt['product_id'] = getattr(product, 'id', None)
                evt['title'] = getattr(product, 'title', '')
                evt['user_id'] = getattr(product, 'user_id', '')
            if 'days_left' in payload:
                evt['days_left'] = payload['days_left']
            status = payload.get('status')
            if status is not None:
                evt['message'] = status.message
                evt['color'] = status.color
        if evt.get('product_id') is not None:
            _events[:] = [e for e in _events if e.get('product_id') != evt['product_id']]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def _record_snapshot(event_name: str, payload: Any):
    if not isinstance(payload, dict):
        return
    with _lock:
        _snapshots[payload.get('user_id')] = {
            'ts': _now(),
            'count': payload.get('count', 0),
            'items': list(payload.get('items', [])),
        }


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(EXPIRY_NEAR, _record)
    GLOBAL_EVENT_BUS.subscribe(EXPIRY_EXPIRED, _record)
    GLOBAL_EVENT_BUS.subscribe(EXPIRY_SNAPSHOT, _record_snapshot)
    _started = True
    logger.info("Expiry alert observers started")


def get_events(since: Optional[int] = None, user_id: Optional[str] = None) -> Dict[str, Any]:
    """Return alerts newer than 'since' (exclusive), optionally for one user.

    next_cursor is the largest id handed out so clients can poll with since=next_cursor.
    'expiring' is the latest snapshot taken for user_id (None when no scan ran yet).
    """
    with _lock:
        data = list(_events) if since is None else [e for e in _events if e['id'] > since]
        next_cursor = max(_next_id - 1, since or 0)
        expiring = _snapshots.get(user_id)
    if user_id is not None:
        data = [e for e in data if e.get('user_id') == user_id]
    return {'events': data, 'next_cursor': next_cursor, 'expiring': expiring}


def reset():
    """Drop buffered alerts and snapshots (used by tests)."""
    global _next_id
    with _lock:
        _events.clear()
        _snapshots.clear()
        _next_id = 1


__all__ = ['start', 'get_events', 'reset']
