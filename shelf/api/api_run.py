from fastapi import FastAPI, Query, Depends
from datetime import date as _date
from typing import Optional
import logging

from shelf.api.dependencies import get_product_repo, get_scheduler
from shelf.api.routes import products, recipes, users
from shelf.domain.Tags import vocabulary
from shelf.events.web_observers import start as start_event_observers, get_events as get_web_events
from shelf.logic.expiry.analysis import scan_and_notify
from shelf.utilities.constants import WARNING_WINDOW_DAYS

# Logging
logger = logging.getLogger("shelf_app")

# Initialize FastAPI app
app = FastAPI(title="ShelfSmart Pantry & Recipe API")

# Include routers
app.include_router(products.router)
app.include_router(recipes.router)
app.include_router(users.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for expiry events started")


# -------------------- API: Tag vocabularies --------------------
@app.get('/api/tags')
def api_tags():
    """Diets, cuisines, intolerances and meal types with their display names."""
    return vocabulary()


# -------------------- API: Expiry Alerts (polled by clients) --------------------
@app.get('/api/alerts')
def api_alerts(
    user_id: Optional[str] = Query(default=None),
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
    window: int = Query(default=WARNING_WINDOW_DAYS, ge=0),
    repo=Depends(get_product_repo),
):
    """
    Return recent expiry alert events (expiring soon, expired).

    Client polling strategy:
        1. First call without 'since': the inventory is rescanned so days_left
           is current, and the backlog plus the expiring snapshot are returned.
        2. Store 'next_cursor' from the response.
        3. Subsequent polls: /api/alerts?since=<next_cursor>; products added in
           the meantime publish their own alert.
    """
    if since is None:
        products_all = repo.load_products().values()
        if user_id is not None:
            products_all = [p for p in products_all if p.user_id == user_id]
        scan_and_notify(products_all, window=window, today=_date.today(), user_id=user_id)
    return get_web_events(since, user_id)


# -------------------- API: Scheduled notifications --------------------
@app.get('/api/notifications')
def api_notifications(user_id: Optional[str] = Query(default=None), scheduler=Depends(get_scheduler)):
    """Pending expiry notifications, earliest first."""
    return {"notifications": [n.to_dict() for n in scheduler.pending(user_id)]}
