"""Product domain entity: a grocery item with barcode metadata and an expiration date."""
from datetime import date, datetime
from typing import List, Optional
from uuid import uuid4

from shelf.logic.expiry.status import as_date, days_until, expiry_status, freshness, is_expired, border_color
from shelf.utilities.constants import DATE_FORMAT, SOURCE_MANUAL, PRODUCT_SOURCES


def _parse_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.strptime(value[:10], DATE_FORMAT).date()
        except ValueError:
            return None
    return None


class Product:
    def __init__(self, title: str = "", expiration_date: Optional[date] = None, barcode: str = "",
                 brand: Optional[str] = None, description: Optional[str] = None,
                 image_link: Optional[str] = None, more_image_links: Optional[List[str]] = None,
                 breadcrumbs: Optional[List[str]] = None, badges: Optional[List[str]] = None,
                 nutriscore_grade: Optional[str] = None, allergens: Optional[List[str]] = None,
                 recipe_ids: Optional[List[int]] = None, source: str = SOURCE_MANUAL,
                 external_id: Optional[str] = None, user_id: str = "", id: Optional[str] = None,
                 date_added: Optional[datetime] = None, is_used: bool = False, is_liked: bool = False,
                 group_id: Optional[str] = None):
        if source not in PRODUCT_SOURCES:
            raise ValueError(f"Unknown product source: {source}")
        self.id = id or str(uuid4())
        self.source = source
        self.external_id = external_id
        self.barcode = barcode
        self.title = title
        self.brand = brand
        self.description = description
        self.image_link = image_link
        self.more_image_links = more_image_links[:] if more_image_links else []
        self.breadcrumbs = breadcrumbs[:] if breadcrumbs else []
        self.badges = badges[:] if badges else []
        self.nutriscore_grade = nutriscore_grade
        self.allergens = allergens[:] if allergens else []
        self.recipe_ids = recipe_ids[:] if recipe_ids else []
        self.date_added = date_added or datetime.now()
        self.expiration_date = as_date(expiration_date) if expiration_date else date.today()
        self.is_used = is_used
        self.is_liked = is_liked
        self.user_id = user_id
        self.group_id = group_id

    # --- Notification ids ------------------------------------------------
    @property
    def warning_notification_id(self) -> str:
        return f"{self.id}_warning_notification_id"

    @property
    def expiration_notification_id(self) -> str:
        return f"{self.id}_expiration_notification_id"

    # --- Expiration helpers ----------------------------------------------
    def days_till_expiry(self, today: Optional[date] = None) -> int:
        return days_until(self.expiration_date, today)

    def is_expired(self, today: Optional[date] = None) -> bool:
        return is_expired(self.expiration_date, today)

    def status(self, today: Optional[date] = None):
        return expiry_status(self.expiration_date, today)

    def freshness(self, today: Optional[date] = None) -> str:
        return freshness(self.days_till_expiry(today))

    def border_color(self, today: Optional[date] = None) -> str:
        return border_color(self.days_till_expiry(today))

    # --- State changes ---------------------------------------------------
    def toggle_like(self):
        self.is_liked = not self.is_liked

    def mark_used(self):
        self.is_used = True

    @property
    def is_standalone(self) -> bool:
        return self.group_id is None

    def __str__(self) -> str:
        parts = [self.title or "(untitled)"]
        if self.brand:
            parts.append(self.brand)
        parts.append(f"Exp: {self.expiration_date.strftime(DATE_FORMAT)}")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Product from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "source", "external_id", "barcode", "title", "brand", "description",
                   "image_link", "more_image_links", "breadcrumbs", "badges", "nutriscore_grade",
                   "allergens", "recipe_ids", "date_added", "expiration_date", "is_used",
                   "is_liked", "user_id", "group_id"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        filtered["expiration_date"] = _parse_date(filtered.get("expiration_date"))
        added = filtered.get("date_added")
        if isinstance(added, str):
            try:
                filtered["date_added"] = datetime.fromisoformat(added)
            except ValueError:
                filtered["date_added"] = None
        if filtered.get("external_id") is not None:
            filtered["external_id"] = str(filtered["external_id"])
        filtered.setdefault("source", SOURCE_MANUAL)
        return Product(**filtered)

    def to_dict(self):
        '''Converts the Product to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "source": self.source,
            "external_id": self.external_id,
            "barcode": self.barcode,
            "title": self.title,
            "brand": self.brand,
            "description": self.description,
            "image_link": self.image_link,
            "more_image_links": self.more_image_links,
            "breadcrumbs": self.breadcrumbs,
            "badges": self.badges,
            "nutriscore_grade": self.nutriscore_grade,
            "allergens": self.allergens,
            "recipe_ids": self.recipe_ids,
            "date_added": self.date_added.isoformat(),
            "expiration_date": self.expiration_date.strftime(DATE_FORMAT),
            "is_used": self.is_used,
            "is_liked": self.is_liked,
            "user_id": self.user_id,
            "group_id": self.group_id,
        }
