"""Async client for the Open Food Facts product database (no API key needed)."""
import logging
from typing import Any, Dict, Optional

import httpx

from shelf.domain.Product import Product
from shelf.infra.exceptions import CatalogueError, ProductNotFoundError
from shelf.utilities.config import OFFA_BASE_URL, HTTP_TIMEOUT
from shelf.utilities.constants import SOURCE_OFFA
from shelf.utilities.text import clean_html_text, clean_optional

logger = logging.getLogger(__name__)


def _strip_lang_prefix(tag: str) -> str:
    # allergen tags look like "en:milk"
    return tag.split(":", 1)[-1].replace("-", " ")


def product_from_offa(product: Dict[str, Any], barcode: str, expiration_date=None,
                      user_id: str = "") -> Product:
    """Map the ``product`` object of a v2 product response into an unsaved Product draft."""
    image = product.get("image_url") or product.get("image_front_url")
    more = [img for img in (product.get("image_front_url"),) if img and img != image]
    external = product.get("_id") or product.get("code")
    return Product(
        title=clean_html_text(product.get("product_name")),
        expiration_date=expiration_date,
        barcode=str(product.get("code") or barcode),
        brand=clean_optional(product.get("brands")),
        description=clean_optional(product.get("ingredients_text")),
        image_link=image,
        more_image_links=more,
        nutriscore_grade=(product.get("nutriscore_grade") or None),
        allergens=[_strip_lang_prefix(t) for t in product.get("allergens_tags") or [] if t],
        source=SOURCE_OFFA,
        external_id=str(external) if external else None,
        user_id=user_id,
    )


class OpenFoodFactsClient:
    def __init__(self, base_url: str = OFFA_BASE_URL,
                 transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = HTTP_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def product_by_barcode(self, barcode: str, expiration_date=None, user_id: str = "") -> Product:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport,
                                         timeout=self.timeout) as client:
                response = await client.get(f"/api/v2/product/{barcode}")
        except httpx.HTTPError as e:
            logger.error(f"OFFA request for {barcode} failed: {e}")
            raise CatalogueError(f"Network error: {e}") from e

        if 500 <= response.status_code <= 599:
            logger.warning(f"OFFA returned HTTP {response.status_code} for {barcode}")
            raise CatalogueError("Server error. Please try again.", status_code=response.status_code)
        if response.status_code == 404:
            raise ProductNotFoundError(barcode)
        if response.status_code != 200:
            raise CatalogueError("An unexpected error occurred. Please try again.",
                                 status_code=response.status_code)
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"OFFA returned invalid JSON for {barcode}: {e}")
            raise CatalogueError("Failed to process product data. Please try again.") from e

        product = data.get("product")
        if data.get("status") != 1 or not isinstance(product, dict):
            logger.info(f"OFFA has no product for barcode {barcode}")
            raise ProductNotFoundError(barcode)
        logger.info(f"OFFA product found for {barcode}: {product.get('product_name')}")
        return product_from_offa(product, barcode, expiration_date, user_id)
