from datetime import date

import httpx
import pytest

from shelf.infra.Spoonacular_Client import SpoonacularClient, status_message
from shelf.infra.OpenFoodFacts_Client import OpenFoodFactsClient
from shelf.infra.exceptions import CatalogueError, ProductNotFoundError, RecipeNotFoundError


SPOON_PRODUCT = {
    "id": 22347,
    "title": "Snickers &amp; Friends",
    "upc": "040000001027",
    "brand": "Mars",
    "description": "<p>Chocolate <b>bar</b></p>",
    "image": "https://img/1.jpg",
    "images": ["https://img/1.jpg", "https://img/2.jpg"],
    "breadcrumbs": ["chocolate", "candy"],
    "importantBadges": ["gluten_free"],
}

RECIPE_INFO = {
    "id": 716429,
    "title": "Pasta with Garlic",
    "readyInMinutes": 45,
    "servings": 2,
    "vegetarian": True,
    "summary": "Tasty <b>pasta</b>",
    "extendedIngredients": [{"name": "garlic", "amount": 2, "unit": "cloves", "original": "2 cloves garlic"}],
    "analyzedInstructions": [{"steps": [{"step": "Boil pasta."}, {"step": "Add garlic."}]}],
}


def _client(handler, api_key="test-key"):
    return SpoonacularClient(api_key=api_key, base_url="https://spoon.test",
                             transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_product_by_upc_maps_draft():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("apiKey")
        return httpx.Response(200, json=SPOON_PRODUCT)

    product = await _client(handler).product_by_upc("040000001027", date(2024, 5, 1), "u1")
    assert seen == {"path": "/food/products/upc/040000001027", "key": "test-key"}
    assert product.title == "Snickers & Friends"
    assert product.description == "Chocolate bar"
    assert product.source == "spoonacular"
    assert product.external_id == "22347"
    assert product.more_image_links == ["https://img/2.jpg"]
    assert product.breadcrumbs == ["chocolate", "candy"]
    assert product.expiration_date == date(2024, 5, 1)
    assert product.user_id == "u1"


@pytest.mark.asyncio
async def test_product_by_upc_not_found():
    client = _client(lambda request: httpx.Response(404, json={"status": "failure"}))
    with pytest.raises(ProductNotFoundError) as info:
        await client.product_by_upc("123456")
    assert info.value.message == "Product not found for this barcode."


@pytest.mark.asyncio
async def test_missing_api_key():
    client = _client(lambda request: httpx.Response(200, json={}), api_key="")
    with pytest.raises(CatalogueError) as info:
        await client.product_by_upc("123456")
    assert info.value.message == "API key not configured. Please check your configuration."


@pytest.mark.asyncio
async def test_quota_error_message():
    client = _client(lambda request: httpx.Response(402))
    with pytest.raises(CatalogueError) as info:
        await client.complex_search({"number": "1"})
    assert info.value.status_code == 402
    assert "quota" in info.value.message


@pytest.mark.asyncio
async def test_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogueError) as info:
        await _client(handler).random_recipe({"number": "1"})
    assert info.value.message.startswith("Network error:")


@pytest.mark.asyncio
async def test_search_recipe_fetches_information():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        if request.url.path == "/recipes/complexSearch":
            assert request.url.params["cuisine"] == "italian"
            return httpx.Response(200, json={"results": [{"id": 716429}]})
        assert request.url.params["includeNutrition"] == "false"
        return httpx.Response(200, json=RECIPE_INFO)

    data = await _client(handler).search_recipe({"number": "1", "sort": "random", "cuisine": "italian"})
    assert calls == ["/recipes/complexSearch", "/recipes/716429/information"]
    assert data["title"] == "Pasta with Garlic"


@pytest.mark.asyncio
async def test_search_recipe_without_results():
    client = _client(lambda request: httpx.Response(200, json={"results": []}))
    with pytest.raises(RecipeNotFoundError):
        await client.search_recipe({"number": "1"})


@pytest.mark.asyncio
async def test_find_by_ingredients_params():
    def handler(request):
        assert request.url.params["ingredients"] == "milk,dairy"
        assert request.url.params["number"] == "4"
        assert request.url.params["ignorePantry"] == "true"
        return httpx.Response(200, json=[{"id": 1}, {"id": 2}])

    matches = await _client(handler).find_by_ingredients(["milk", "dairy"])
    assert [m["id"] for m in matches] == [1, 2]


@pytest.mark.asyncio
async def test_find_by_ingredients_empty_terms_skips_call():
    def handler(request):
        raise AssertionError("no request expected")

    assert await _client(handler).find_by_ingredients([]) == []


def test_status_messages():
    assert status_message(401) == "Invalid API key. Please check your configuration."
    assert status_message(429) == "Rate limit exceeded. Please wait before trying again."
    assert status_message(503) == "Server error. Please try again later."
    assert status_message(418) == "An unexpected error occurred. Please try again."


# -------------------- Open Food Facts --------------------
def _offa(handler):
    return OpenFoodFactsClient(base_url="https://offa.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_offa_product_found():
    body = {
        "status": 1,
        "product": {
            "_id": "3017620422003",
            "code": "3017620422003",
            "product_name": "Nutella",
            "brands": "Ferrero",
            "image_url": "https://img/n.jpg",
            "allergens_tags": ["en:milk", "en:nuts"],
            "ingredients_text": "Sugar, palm oil",
            "nutriscore_grade": "e",
        },
    }

    def handler(request):
        assert request.url.path == "/api/v2/product/3017620422003"
        return httpx.Response(200, json=body)

    product = await _offa(handler).product_by_barcode("3017620422003", date(2025, 1, 1), "u1")
    assert product.title == "Nutella"
    assert product.brand == "Ferrero"
    assert product.source == "offa"
    assert product.allergens == ["milk", "nuts"]
    assert product.nutriscore_grade == "e"
    assert product.description == "Sugar, palm oil"


@pytest.mark.asyncio
async def test_offa_status_zero_is_not_found():
    client = _offa(lambda request: httpx.Response(200, json={"status": 0, "status_verbose": "product not found"}))
    with pytest.raises(ProductNotFoundError) as info:
        await client.product_by_barcode("000000")
    assert info.value.message == "Product not found. Please enter details manually."


@pytest.mark.asyncio
async def test_offa_server_error():
    client = _offa(lambda request: httpx.Response(500))
    with pytest.raises(CatalogueError) as info:
        await client.product_by_barcode("000000")
    assert info.value.message == "Server error. Please try again."
