import logging

from fastapi import APIRouter, Depends

from shelf.api.dependencies import (
    get_user_service, get_product_repo, get_recipe_repo, get_scheduler, user_http_error,
)
from shelf.domain.User import User, SignupMethod, AllergySelection
from shelf.infra.exceptions import UserServiceError, UserNotFoundError
from shelf.utilities.validators import UserInput, UserUpdateInput, AllergiesInput, AuthMethodInput

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger("shelf_app")


# -------------------- Auth method lookup --------------------
@router.get("/auth-method")
def get_auth_method(email: str, users=Depends(get_user_service)):
    exists, method = users.check_user_exists(email)
    return {"exists": exists, "signup_method": method}


@router.post("/auth-method")
def store_auth_method(payload: AuthMethodInput, users=Depends(get_user_service)):
    try:
        users.store_auth_method(payload.email, SignupMethod.parse(payload.signup_method))
    except UserServiceError as e:
        raise user_http_error(e)
    return {"success": True}


# -------------------- Profile --------------------
@router.post("", status_code=201)
def create_user(payload: UserInput, users=Depends(get_user_service)):
    user = User(
        id=payload.id,
        name=payload.name,
        email=payload.email,
        signup_method=SignupMethod.parse(payload.signup_method),
        allergies=payload.allergies,
    )
    try:
        users.create_user(user)
        users.store_auth_method(user.email, user.signup_method)
    except UserServiceError as e:
        raise user_http_error(e)
    return {"user": user.to_dict()}


@router.get("/{user_id}")
def get_user(user_id: str, users=Depends(get_user_service)):
    try:
        return {"user": users.fetch_user(user_id).to_dict()}
    except UserServiceError as e:
        raise user_http_error(e)


@router.patch("/{user_id}")
def update_user(user_id: str, payload: UserUpdateInput, users=Depends(get_user_service)):
    fields = payload.model_dump(exclude_none=True)
    try:
        return {"user": users.update_user(user_id, fields).to_dict()}
    except UserServiceError as e:
        raise user_http_error(e)


@router.delete("/{user_id}")
def delete_account_data(user_id: str, users=Depends(get_user_service), product_repo=Depends(get_product_repo),
                        recipe_repo=Depends(get_recipe_repo), scheduler=Depends(get_scheduler)):
    """Remove everything stored for the user: products, groups, recipes, notifications and the profile."""
    try:
        user = users.fetch_user(user_id)
    except UserNotFoundError:
        user = None
    except UserServiceError as e:
        raise user_http_error(e)

    products_removed = product_repo.delete_user_data(user_id)
    recipes_removed = recipe_repo.delete_user_data(user_id)
    notifications_removed = scheduler.cancel_user(user_id)
    try:
        if user is not None:
            users.delete_auth_method(user.email)
            users.delete_user(user_id)
    except UserServiceError as e:
        raise user_http_error(e)
    logger.info("Deleted account data for %s (%d products, %d recipes)",
                user_id, products_removed, recipes_removed)
    return {
        "products_removed": products_removed,
        "recipes_removed": recipes_removed,
        "notifications_removed": notifications_removed,
        "profile_removed": user is not None,
    }


# -------------------- Allergies & onboarding --------------------
@router.get("/{user_id}/allergies")
def get_allergies(user_id: str, users=Depends(get_user_service)):
    selection = AllergySelection(users.fetch_allergies(user_id))
    return {"allergies": selection.to_list()}


@router.put("/{user_id}/allergies")
def put_allergies(user_id: str, payload: AllergiesInput, users=Depends(get_user_service)):
    selection = AllergySelection(payload.allergies)
    try:
        user = users.update_allergies(user_id, selection.to_list())
    except UserServiceError as e:
        raise user_http_error(e)
    return {"allergies": user.allergies}


@router.get("/{user_id}/onboarding")
def get_onboarding(user_id: str, users=Depends(get_user_service)):
    return {"has_completed_onboarding": users.has_completed_onboarding(user_id)}


@router.post("/{user_id}/onboarding")
def complete_onboarding(user_id: str, payload: AllergiesInput, users=Depends(get_user_service)):
    selection = AllergySelection(payload.allergies)
    try:
        user = users.complete_onboarding(user_id, selection.to_list())
    except UserServiceError as e:
        raise user_http_error(e)
    return {"user": user.to_dict()}
