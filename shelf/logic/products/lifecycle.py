"""Product and recipe lifecycle: mark used, like/unlike, delete.

All functions mutate the in-memory collections they are given (products and
recipes keyed by id, groups as a list); persisting them is the caller's job.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from shelf.domain.GroupedProducts import GroupedProducts

logger = logging.getLogger(__name__)

__all__ = [
    "detach_from_group", "mark_used", "unlike_product", "delete_product",
    "unlike_recipe", "liked_products", "used_products", "liked_recipes",
]


def detach_from_group(product, groups: List[GroupedProducts]) -> bool:
    """Remove the product from its group; drops the group when it becomes empty.

    Returns True if a group was deleted.
    """
    if product.group_id is None:
        return False
    for group in groups:
        if group.id == product.group_id:
            if group.remove(product):
                groups.remove(group)
                return True
            return False
    # group already gone
    product.group_id = None
    return False


def mark_used(product, groups: List[GroupedProducts], scheduler=None):
    """Used products leave their group but are kept for the "used" listing."""
    product.mark_used()
    if scheduler is not None:
        scheduler.cancel_for(product)
    detach_from_group(product, groups)
    logger.info("Product '%s' marked as used", product.title)


def unlike_product(product, products: Dict[str, object]) -> bool:
    """Toggle like; a liked standalone unused product is deleted instead.

    Returns True if the product was deleted.
    """
    if product.is_liked and product.is_standalone and not product.is_used:
        products.pop(product.id, None)
        logger.info("Product '%s' unliked and deleted", product.title)
        return True
    product.toggle_like()
    return False


def delete_product(product, products: Dict[str, object], groups: List[GroupedProducts],
                   recipes: Optional[Dict[str, object]] = None, scheduler=None):
    """Delete a product, its group membership and its non-liked recipes.

    Liked recipes survive as standalone recipes (product_id cleared).
    """
    if scheduler is not None:
        scheduler.cancel_for(product)
    detach_from_group(product, groups)
    if recipes is not None:
        for recipe in list(recipes.values()):
            if recipe.product_id != product.id:
                continue
            if recipe.is_liked:
                recipe.product_id = None
            else:
                del recipes[recipe.id]
    products.pop(product.id, None)
    logger.info("Product '%s' deleted", product.title)


def unlike_recipe(recipe, recipes: Dict[str, object], user_id: str) -> bool:
    """Toggle like on a recipe; a liked standalone recipe is deleted instead."""
    if recipe.is_liked and recipe.is_standalone:
        recipes.pop(recipe.id, None)
        logger.info("Recipe '%s' unliked and deleted", recipe.title)
        return True
    recipe.like(user_id)
    return False


def liked_products(products: Dict[str, object], user_id: str) -> List:
    return sorted((p for p in products.values() if p.user_id == user_id and p.is_liked),
                  key=lambda p: p.date_added, reverse=True)


def used_products(products: Dict[str, object], user_id: str) -> List:
    return sorted((p for p in products.values() if p.user_id == user_id and p.is_used),
                  key=lambda p: p.date_added, reverse=True)


def liked_recipes(recipes: Dict[str, object], user_id: str) -> List:
    return sorted((r for r in recipes.values() if r.user_id == user_id and r.is_liked),
                  key=lambda r: r.title.lower())
