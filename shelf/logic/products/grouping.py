"""Grouping products by expiration day.

Groups are scoped to a user: two users adding products that expire on the same
day get separate groups.
"""
from __future__ import annotations
from collections import defaultdict
from datetime import date
from typing import Dict, List, Iterable, Optional

from shelf.domain.GroupedProducts import GroupedProducts
from shelf.logic.expiry.status import as_date

__all__ = ["find_group", "add_to_group", "group_products", "cleanup_orphaned_groups", "grouped_view"]


def find_group(groups: Iterable[GroupedProducts], user_id: str, day: date) -> Optional[GroupedProducts]:
    day = as_date(day)
    for group in groups:
        if group.user_id == user_id and group.expiration_date == day:
            return group
    return None


def add_to_group(groups: List[GroupedProducts], product) -> GroupedProducts:
    """Put the product into the group for its (user, expiration day), creating it if needed."""
    product.expiration_date = as_date(product.expiration_date)
    group = find_group(groups, product.user_id, product.expiration_date)
    if group is None:
        group = GroupedProducts(product.expiration_date, user_id=product.user_id)
        groups.append(group)
    group.add(product)
    return group


def group_products(products: Iterable, user_id: str) -> List[GroupedProducts]:
    """Bucket a user's unused products by expiration day, earliest first."""
    buckets: Dict[date, List] = defaultdict(list)
    for product in products:
        if product.user_id != user_id or product.is_used:
            continue
        buckets[as_date(product.expiration_date)].append(product)
    result = []
    for day in sorted(buckets):
        group = GroupedProducts(day, user_id=user_id)
        for product in sorted(buckets[day], key=lambda p: p.date_added):
            group.product_ids.append(product.id)
        result.append(group)
    return result


def cleanup_orphaned_groups(groups: List[GroupedProducts], user_id: str,
                            known_product_ids: Optional[Iterable[str]] = None) -> int:
    """Remove the user's groups that no longer hold products; returns how many were dropped.

    When known_product_ids is given, dangling ids (products deleted elsewhere) are pruned first.
    """
    known = set(known_product_ids) if known_product_ids is not None else None
    removed = 0
    for group in list(groups):
        if group.user_id != user_id:
            continue
        if known is not None:
            group.product_ids = [pid for pid in group.product_ids if pid in known]
        if group.is_empty:
            groups.remove(group)
            removed += 1
    return removed


def grouped_view(groups: Iterable[GroupedProducts], products: Dict[str, object], user_id: str,
                 today: Optional[date] = None) -> List[dict]:
    """Serializable grouped inventory: groups sorted by day, each with status and products."""
    view = []
    for group in sorted((g for g in groups if g.user_id == user_id), key=lambda g: g.expiration_date):
        members = [products[pid] for pid in group.product_ids if pid in products]
        if not members:
            continue
        status = group.status(today)
        view.append({
            "id": group.id,
            "expiration_date": group.to_dict()["expiration_date"],
            "status": status.to_dict(),
            "border_color": group.border_color(today),
            "is_expired": group.is_expired(today),
            "products": [p.to_dict() for p in members],
        })
    return view
