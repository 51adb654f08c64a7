"""Async client for the Spoonacular food API (barcode products and recipes)."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from shelf.domain.Product import Product
from shelf.infra.exceptions import CatalogueError, ProductNotFoundError, RecipeNotFoundError
from shelf.utilities.config import SPOONACULAR_API_KEY, SPOONACULAR_BASE_URL, HTTP_TIMEOUT
from shelf.utilities.constants import SOURCE_SPOONACULAR, RECIPES_PER_PRODUCT
from shelf.utilities.text import clean_html_text, clean_optional

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API key not configured. Please check your configuration."


def status_message(status_code: int, not_found: str = "The requested resource was not found.") -> str:
    """User-facing message for a failed Spoonacular response."""
    if status_code == 401:
        return "Invalid API key. Please check your configuration."
    if status_code == 402:
        return "API quota exceeded. Please try again later."
    if status_code == 403:
        return "Access denied. Please check your API permissions."
    if status_code == 404:
        return not_found
    if status_code == 429:
        return "Rate limit exceeded. Please wait before trying again."
    if 500 <= status_code <= 599:
        return "Server error. Please try again later."
    return "An unexpected error occurred. Please try again."


def product_from_spoonacular(data: Dict[str, Any], expiration_date=None, user_id: str = "") -> Product:
    """Map a /food/products/upc response into an unsaved Product draft."""
    images = [img for img in data.get("images") or [] if img]
    image = data.get("image") or (images[0] if images else None)
    return Product(
        title=clean_html_text(data.get("title")),
        expiration_date=expiration_date,
        barcode=str(data.get("upc") or ""),
        brand=clean_optional(data.get("brand")),
        description=clean_optional(data.get("description")) or clean_optional(data.get("generatedText")),
        image_link=image,
        more_image_links=[img for img in images if img != image],
        breadcrumbs=[b for b in data.get("breadcrumbs") or [] if b],
        badges=list(data.get("importantBadges") or data.get("badges") or []),
        source=SOURCE_SPOONACULAR,
        external_id=str(data["id"]) if data.get("id") is not None else None,
        user_id=user_id,
    )


class SpoonacularClient:
    def __init__(self, api_key: Optional[str] = None, base_url: str = SPOONACULAR_BASE_URL,
                 transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = HTTP_TIMEOUT):
        self.api_key = SPOONACULAR_API_KEY if api_key is None else api_key
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None,
                   not_found: str = "The requested resource was not found."):
        if not self.api_key:
            raise CatalogueError(MISSING_KEY_MESSAGE)
        query = dict(params or {})
        query["apiKey"] = self.api_key
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport,
                                         timeout=self.timeout) as client:
                response = await client.get(path, params=query)
        except httpx.HTTPError as e:
            logger.error(f"Spoonacular request to {path} failed: {e}")
            raise CatalogueError(f"Network error: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Spoonacular {path} returned HTTP {response.status_code}")
            raise CatalogueError(status_message(response.status_code, not_found),
                                 status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Spoonacular {path} returned invalid JSON: {e}")
            raise CatalogueError("Failed to process product data. Please try again.") from e

    # --- products ------------------------------------------------------------
    async def product_by_upc(self, upc: str, expiration_date=None, user_id: str = "") -> Product:
        try:
            data = await self._get(f"/food/products/upc/{upc}",
                                   not_found="Product not found for this barcode.")
        except CatalogueError as e:
            if e.status_code == 404:
                raise ProductNotFoundError(upc, e.message) from e
            raise
        logger.info(f"Spoonacular product found for UPC {upc}: {data.get('title')}")
        return product_from_spoonacular(data, expiration_date, user_id)

    # --- recipes -------------------------------------------------------------
    async def complex_search(self, params: Dict[str, str]) -> List[Dict[str, Any]]:
        data = await self._get("/recipes/complexSearch", params)
        return data.get("results") or []

    async def recipe_information(self, recipe_id: int) -> Dict[str, Any]:
        return await self._get(f"/recipes/{recipe_id}/information", {"includeNutrition": "false"},
                               not_found="Recipe not found.")

    async def random_recipe(self, params: Dict[str, str]) -> Dict[str, Any]:
        data = await self._get("/recipes/random", params)
        recipes = data.get("recipes") or []
        if not recipes:
            raise RecipeNotFoundError()
        return recipes[0]

    async def search_recipe(self, params: Dict[str, str]) -> Dict[str, Any]:
        """complexSearch for one random match, then fetch its full information."""
        results = await self.complex_search(params)
        if not results:
            raise RecipeNotFoundError()
        return await self.recipe_information(results[0]["id"])

    async def find_by_ingredients(self, ingredients: List[str],
                                  number: int = RECIPES_PER_PRODUCT) -> List[Dict[str, Any]]:
        if not ingredients:
            return []
        params = {"ingredients": ",".join(ingredients), "number": str(number), "ignorePantry": "true"}
        data = await self._get("/recipes/findByIngredients", params)
        return data if isinstance(data, list) else []
