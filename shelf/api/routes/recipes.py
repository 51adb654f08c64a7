import logging

from fastapi import APIRouter, Depends, HTTPException

from shelf.api.dependencies import get_recipe_repo, get_spoonacular, catalogue_http_error
from shelf.domain.Recipe import Recipe
from shelf.domain.RecipeFilter import RecipeFilter
from shelf.infra.exceptions import CatalogueError
from shelf.logic.products.lifecycle import unlike_recipe, liked_recipes
from shelf.utilities.validators import RecipeFilterInput, RecipeInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])
logger = logging.getLogger("shelf_app")


def _filter_from(payload: RecipeFilterInput) -> RecipeFilter:
    return RecipeFilter(
        meal_types=payload.meal_types,
        cuisines=payload.cuisines,
        diets=payload.diets,
        intolerances=payload.intolerances,
    )


@router.post("/search")
async def search_recipe(payload: RecipeFilterInput, spoonacular=Depends(get_spoonacular)):
    """Pick one random recipe matching the filter and return its full information."""
    recipe_filter = _filter_from(payload)
    try:
        data = await spoonacular.search_recipe(recipe_filter.complex_search_params())
    except CatalogueError as e:
        raise catalogue_http_error(e)
    recipe = Recipe.from_spoonacular(data, user_id=payload.user_id or "", product_id=payload.product_id)
    return {"filter": recipe_filter.to_dict(), "recipe": recipe.to_dict()}


@router.post("/random")
async def random_recipe(payload: RecipeFilterInput, spoonacular=Depends(get_spoonacular)):
    recipe_filter = _filter_from(payload)
    try:
        data = await spoonacular.random_recipe(recipe_filter.random_params())
    except CatalogueError as e:
        raise catalogue_http_error(e)
    recipe = Recipe.from_spoonacular(data, user_id=payload.user_id or "", product_id=payload.product_id)
    return {"filter": recipe_filter.to_dict(), "recipe": recipe.to_dict()}


@router.post("", status_code=201)
def save_recipe(payload: RecipeInput, repo=Depends(get_recipe_repo)):
    recipe = Recipe.from_spoonacular(payload.recipe, user_id=payload.user_id, product_id=payload.product_id)
    recipe.is_liked = payload.is_liked
    with repo.lock:
        recipes = repo.load()
        recipes[recipe.id] = recipe
        repo.save(recipes)
    logger.info("Recipe '%s' saved for %s", recipe.title, payload.user_id)
    return {"recipe": recipe.to_dict()}


@router.get("/liked")
def list_liked(user_id: str, repo=Depends(get_recipe_repo)):
    return {"recipes": [r.to_dict() for r in liked_recipes(repo.load(), user_id)]}


@router.post("/{recipe_id}/like")
def like_recipe(recipe_id: str, user_id: str, repo=Depends(get_recipe_repo)):
    with repo.lock:
        recipes = repo.load()
        recipe = recipes.get(recipe_id)
        if recipe is None:
            raise HTTPException(status_code=404, detail="Recipe not found")
        deleted = unlike_recipe(recipe, recipes, user_id)
        repo.save(recipes)
    return {"deleted": deleted, "recipe": None if deleted else recipe.to_dict()}
