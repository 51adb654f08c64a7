"""Core business logic layer.

Subpackages:
- expiry: expiration status classification and notification schedules
- products: grouping by expiration date and product lifecycle
- recipes: ingredient extraction for recipe lookups
"""
__all__ = ["expiry", "products", "recipes"]
