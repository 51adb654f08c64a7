"""Ingredient terms used to look up recipes for products."""
from typing import List


def recipe_search_terms(product) -> List[str]:
    """Breadcrumbs when present, otherwise the title; blanks removed, order-preserving dedup."""
    raw = product.breadcrumbs if product.breadcrumbs else [product.title]
    seen = set()
    terms = []
    for term in raw:
        t = (term or "").strip()
        if t and t.lower() not in seen:
            seen.add(t.lower())
            terms.append(t)
    return terms

