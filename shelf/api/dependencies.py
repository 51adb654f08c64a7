"""FastAPI dependency providers. Tests swap these through app.dependency_overrides."""
import logging

from fastapi import HTTPException

from shelf.infra.Product_Repository import ProductRepository
from shelf.infra.Recipe_Repository import RecipeRepository
from shelf.infra.User_Service import UserService
from shelf.infra.Spoonacular_Client import SpoonacularClient
from shelf.infra.OpenFoodFacts_Client import OpenFoodFactsClient
from shelf.infra.exceptions import (
    CatalogueError, UserServiceError, UserNotFoundError, InvalidUserDataError,
    PermissionDeniedError, StoreUnavailableError,
)
from shelf.logic.expiry.notifications import NotificationScheduler

logger = logging.getLogger("shelf_app")

_scheduler = NotificationScheduler()


def get_product_repo() -> ProductRepository:
    return ProductRepository()


def get_recipe_repo() -> RecipeRepository:
    return RecipeRepository()


def get_user_service() -> UserService:
    return UserService()


def get_spoonacular() -> SpoonacularClient:
    return SpoonacularClient()


def get_offa() -> OpenFoodFactsClient:
    return OpenFoodFactsClient()


def get_scheduler() -> NotificationScheduler:
    return _scheduler


def catalogue_http_error(e: CatalogueError) -> HTTPException:
    """Upstream "not found" stays a 404; every other catalogue failure is a bad gateway."""
    if e.status_code == 404:
        return HTTPException(status_code=404, detail=e.message)
    logger.warning("Catalogue call failed: %s", e.message)
    return HTTPException(status_code=502, detail=e.message)


def user_http_error(e: UserServiceError) -> HTTPException:
    if isinstance(e, UserNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InvalidUserDataError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, StoreUnavailableError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))
