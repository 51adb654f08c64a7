"""GroupedProducts: products of one user sharing the same expiration day."""
from datetime import date
from typing import List, Optional
from uuid import uuid4

from shelf.logic.expiry.status import as_date, days_until, expiry_status, border_color
from shelf.utilities.constants import DATE_FORMAT
from shelf.domain.Product import _parse_date


class GroupedProducts:
    def __init__(self, expiration_date: date, user_id: str = "", product_ids: Optional[List[str]] = None,
                 id: Optional[str] = None):
        self.id = id or str(uuid4())
        self.user_id = user_id
        self.expiration_date = as_date(expiration_date)
        self.product_ids = product_ids[:] if product_ids else []

    def add(self, product):
        if product.id not in self.product_ids:
            self.product_ids.append(product.id)
        product.group_id = self.id
        product.expiration_date = self.expiration_date

    def remove(self, product):
        '''Detach a product; returns True if the group is now empty.'''
        if product.id in self.product_ids:
            self.product_ids.remove(product.id)
        if product.group_id == self.id:
            product.group_id = None
        return self.is_empty

    @property
    def is_empty(self) -> bool:
        return not self.product_ids

    def days_till_expiry(self, today: Optional[date] = None) -> int:
        return days_until(self.expiration_date, today)

    def is_expired(self, today: Optional[date] = None) -> bool:
        return self.days_till_expiry(today) < 0

    def status(self, today: Optional[date] = None):
        return expiry_status(self.expiration_date, today)

    def border_color(self, today: Optional[date] = None) -> str:
        return border_color(self.days_till_expiry(today))

    def __str__(self) -> str:
        return f"Group {self.expiration_date.strftime(DATE_FORMAT)} ({len(self.product_ids)} products)"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return GroupedProducts(
            expiration_date=_parse_date(d.get("expiration_date")) or date.today(),
            user_id=d.get("user_id", ""),
            product_ids=d.get("product_ids") or [],
            id=d.get("id"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "expiration_date": self.expiration_date.strftime(DATE_FORMAT),
            "product_ids": self.product_ids,
        }
