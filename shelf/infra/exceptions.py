"""
Exception classes raised by the infrastructure layer (user store, catalogue clients)
"""
from typing import Optional


class UserServiceError(Exception):
    """Base exception for user profile operations"""
    message = "User data error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class UserNotFoundError(UserServiceError):
    """Raised when a user document does not exist"""
    message = "User data not found"


class InvalidUserDataError(UserServiceError):
    """Raised when a stored user document cannot be decoded"""
    message = "Invalid user data"


class PermissionDeniedError(UserServiceError):
    """Raised when the store refuses the operation"""
    message = "Permission denied"


class StoreUnavailableError(UserServiceError):
    """Raised when the backing store cannot be read or written"""
    message = "Network error. Please check your connection"


class CatalogueError(Exception):
    """Raised when a product/recipe catalogue call fails"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ProductNotFoundError(CatalogueError):
    """Raised when no product matches a barcode"""
    def __init__(self, barcode: str, message: str = "Product not found. Please enter details manually."):
        self.barcode = barcode
        super().__init__(message, status_code=404)


class RecipeNotFoundError(CatalogueError):
    """Raised when a recipe search returns nothing"""
    def __init__(self, message: str = "No recipes found matching your criteria. Please try different filters."):
        super().__init__(message, status_code=404)
