from datetime import date, timedelta
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from shelf.api.dependencies import (
    get_product_repo, get_recipe_repo, get_spoonacular, get_offa, get_scheduler,
    get_user_service, catalogue_http_error,
)
from shelf.domain.Product import Product
from shelf.domain.Recipe import Recipe
from shelf.infra.exceptions import CatalogueError, UserServiceError
from shelf.infra.pdf_utils import generate_inventory_pdf
from shelf.logic.products.grouping import add_to_group, cleanup_orphaned_groups, grouped_view
from shelf.logic.products.lifecycle import (
    mark_used, unlike_product, delete_product, liked_products, used_products,
)
from shelf.logic.expiry.analysis import notify_if_expiring
from shelf.logic.recipes.ingredients import recipe_search_terms
from shelf.utilities.config import DEFAULT_EXPIRY_DAYS
from shelf.utilities.constants import SOURCE_SPOONACULAR, RECIPES_PER_PRODUCT
from shelf.utilities.validators import ProductInput, BarcodeLookupInput

router = APIRouter(prefix="/api/products", tags=["products"])
logger = logging.getLogger("shelf_app")


def _load_product(repo, product_id: str):
    products = repo.load_products()
    product = products.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return products, product


# -------------------- Inventory --------------------
@router.get("")
def list_products(user_id: str, today: Optional[date] = Query(default=None), repo=Depends(get_product_repo)):
    """Grouped inventory of a user, earliest expiration first."""
    with repo.lock:
        products = repo.load_products()
        groups = repo.load_groups()
        removed = cleanup_orphaned_groups(groups, user_id, products.keys())
        if removed:
            repo.save(products, groups)
            logger.info("Removed %d orphaned group(s) for %s", removed, user_id)
    return {"groups": grouped_view(groups, products, user_id, today)}


@router.post("", status_code=201)
def add_product(payload: ProductInput, repo=Depends(get_product_repo), scheduler=Depends(get_scheduler)):
    product = Product(**payload.model_dump())
    with repo.lock:
        products = repo.load_products()
        groups = repo.load_groups()
        group = add_to_group(groups, product)
        products[product.id] = product
        repo.save(products, groups)
    notifications = scheduler.schedule_for(product)
    notify_if_expiring(product)
    logger.info("Product '%s' added to group %s", product.title, group.id)
    return {
        "product": product.to_dict(),
        "group_id": group.id,
        "notifications": [n.to_dict() for n in notifications],
    }


@router.post("/lookup")
async def lookup_product(payload: BarcodeLookupInput, offa=Depends(get_offa),
                         spoonacular=Depends(get_spoonacular)):
    """Look a barcode up and return an unsaved draft for the user to confirm."""
    expiration = payload.expiration_date or date.today() + timedelta(days=DEFAULT_EXPIRY_DAYS)
    try:
        if payload.source == SOURCE_SPOONACULAR:
            draft = await spoonacular.product_by_upc(payload.barcode, expiration, payload.user_id)
        else:
            draft = await offa.product_by_barcode(payload.barcode, expiration, payload.user_id)
    except CatalogueError as e:
        raise catalogue_http_error(e)
    return {"product": draft.to_dict()}


# -------------------- Profile listings --------------------
@router.get("/liked")
def list_liked(user_id: str, repo=Depends(get_product_repo)):
    return {"products": [p.to_dict() for p in liked_products(repo.load_products(), user_id)]}


@router.get("/used")
def list_used(user_id: str, repo=Depends(get_product_repo)):
    return {"products": [p.to_dict() for p in used_products(repo.load_products(), user_id)]}


@router.get("/export.pdf")
def export_pdf(user_id: str, repo=Depends(get_product_repo), users=Depends(get_user_service)):
    try:
        user_name = users.fetch_user(user_id).name
    except UserServiceError:
        user_name = ""
    groups = grouped_view(repo.load_groups(), repo.load_products(), user_id)
    pdf_bytes = generate_inventory_pdf(groups, user_name)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=shelf_{user_id}.pdf"
        }
    )


# -------------------- Single product --------------------
@router.get("/{product_id}/status")
def product_status(product_id: str, today: Optional[date] = Query(default=None), repo=Depends(get_product_repo)):
    product = repo.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    status = product.status(today)
    return {
        "id": product.id,
        "days_left": status.days,
        "status": status.to_dict(),
        "freshness": product.freshness(today),
        "border_color": product.border_color(today),
        "is_expired": product.is_expired(today),
    }


@router.post("/{product_id}/used")
def use_product(product_id: str, repo=Depends(get_product_repo), scheduler=Depends(get_scheduler)):
    with repo.lock:
        products, product = _load_product(repo, product_id)
        groups = repo.load_groups()
        mark_used(product, groups, scheduler)
        repo.save(products, groups)
    return {"product": product.to_dict()}


@router.post("/{product_id}/like")
def like_product(product_id: str, repo=Depends(get_product_repo), scheduler=Depends(get_scheduler)):
    with repo.lock:
        products, product = _load_product(repo, product_id)
        deleted = unlike_product(product, products)
        if deleted:
            scheduler.cancel_for(product)
        repo.save(products, repo.load_groups())
    return {"deleted": deleted, "product": None if deleted else product.to_dict()}


@router.delete("/{product_id}")
def remove_product(product_id: str, repo=Depends(get_product_repo), recipe_repo=Depends(get_recipe_repo),
                   scheduler=Depends(get_scheduler)):
    with repo.lock, recipe_repo.lock:
        products, product = _load_product(repo, product_id)
        groups = repo.load_groups()
        recipes = recipe_repo.load()
        delete_product(product, products, groups, recipes, scheduler)
        repo.save(products, groups)
        recipe_repo.save(recipes)
    return {"success": True}


# -------------------- Recipes for a product --------------------
@router.get("/{product_id}/recipes")
def product_recipes(product_id: str, repo=Depends(get_product_repo), recipe_repo=Depends(get_recipe_repo)):
    if repo.get(product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    recipes = [r for r in recipe_repo.load().values() if r.product_id == product_id]
    return {"recipes": [r.to_dict() for r in recipes]}


@router.post("/{product_id}/recipes")
async def fetch_product_recipes(product_id: str, repo=Depends(get_product_repo),
                                recipe_repo=Depends(get_recipe_repo), spoonacular=Depends(get_spoonacular)):
    """Find recipes using the product's ingredients and attach them to the product."""
    product = repo.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    terms = recipe_search_terms(product)
    try:
        matches = await spoonacular.find_by_ingredients(terms, RECIPES_PER_PRODUCT)
        payloads = [await spoonacular.recipe_information(m["id"]) for m in matches if m.get("id") is not None]
    except CatalogueError as e:
        raise catalogue_http_error(e)

    with repo.lock, recipe_repo.lock:
        products = repo.load_products()
        product = products.get(product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")
        recipes = recipe_repo.load()
        existing = {r.spoonacular_id for r in recipes.values() if r.product_id == product_id}
        added = []
        for payload in payloads:
            if payload.get("id") in existing:
                continue
            recipe = Recipe.from_spoonacular(payload, user_id=product.user_id, product_id=product_id)
            recipes[recipe.id] = recipe
            existing.add(recipe.spoonacular_id)
            added.append(recipe)
            if recipe.spoonacular_id is not None and recipe.spoonacular_id not in product.recipe_ids:
                product.recipe_ids.append(recipe.spoonacular_id)
        recipe_repo.save(recipes)
        repo.save(products, repo.load_groups())
    logger.info("Attached %d recipe(s) to '%s' using %s", len(added), product.title, ", ".join(terms))
    return {"terms": terms, "recipes": [r.to_dict() for r in added]}
