"""
Input validation schemas using Pydantic for the HTTP API.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict, Any
from datetime import date

from shelf.domain.Tags import Diet, Cuisine, Intolerance, MealType
from shelf.utilities.constants import PRODUCT_SOURCES, SOURCE_MANUAL, SOURCE_OFFA, SOURCE_SPOONACULAR


def _strip(v):
    if isinstance(v, str):
        return v.strip()
    return v


def _tags(values, enum_cls):
    return [enum_cls.parse(v).api_value for v in values]


class ProductInput(BaseModel):
    """Schema for adding a product (manual entry or a confirmed lookup draft)."""
    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    expiration_date: date
    barcode: str = Field("", max_length=32)
    brand: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    image_link: Optional[str] = None
    more_image_links: List[str] = Field(default_factory=list)
    breadcrumbs: List[str] = Field(default_factory=list)
    badges: List[str] = Field(default_factory=list)
    nutriscore_grade: Optional[str] = Field(None, max_length=2)
    allergens: List[str] = Field(default_factory=list)
    source: str = SOURCE_MANUAL
    external_id: Optional[str] = None

    @field_validator('title', 'barcode', 'user_id')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return _strip(v)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v:
            raise ValueError('Product title cannot be empty')
        return v

    @field_validator('source')
    @classmethod
    def validate_source(cls, v):
        if v not in PRODUCT_SOURCES:
            raise ValueError(f"source must be one of: {', '.join(PRODUCT_SOURCES)}")
        return v

    @field_validator('breadcrumbs', 'badges', 'allergens', 'more_image_links')
    @classmethod
    def drop_blank(cls, v):
        return [item.strip() for item in v if item and item.strip()]


class BarcodeLookupInput(BaseModel):
    """Schema for a barcode lookup against a product catalogue."""
    user_id: str = Field(..., min_length=1)
    barcode: str = Field(..., pattern=r'^\d{6,14}$')
    expiration_date: Optional[date] = None
    source: str = SOURCE_OFFA

    @field_validator('barcode', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)

    @field_validator('source')
    @classmethod
    def validate_source(cls, v):
        if v not in (SOURCE_OFFA, SOURCE_SPOONACULAR):
            raise ValueError('source must be offa or spoonacular')
        return v


class RecipeFilterInput(BaseModel):
    """Schema for a recipe filter selection; unknown tags are rejected."""
    meal_types: List[str] = Field(default_factory=list)
    cuisines: List[str] = Field(default_factory=list)
    diets: List[str] = Field(default_factory=list)
    intolerances: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None
    product_id: Optional[str] = None

    @field_validator('meal_types')
    @classmethod
    def validate_meal_types(cls, v):
        return _tags(v, MealType)

    @field_validator('cuisines')
    @classmethod
    def validate_cuisines(cls, v):
        return _tags(v, Cuisine)

    @field_validator('diets')
    @classmethod
    def validate_diets(cls, v):
        return _tags(v, Diet)

    @field_validator('intolerances')
    @classmethod
    def validate_intolerances(cls, v):
        return _tags(v, Intolerance)


class RecipeInput(BaseModel):
    """Schema for saving a recipe: a raw recipe information payload plus ownership."""
    user_id: str = Field(..., min_length=1)
    product_id: Optional[str] = None
    recipe: Dict[str, Any]
    is_liked: bool = False

    @field_validator('recipe')
    @classmethod
    def validate_recipe(cls, v):
        if not str(v.get('title') or '').strip():
            raise ValueError('Recipe title cannot be empty')
        return v


class UserInput(BaseModel):
    """Schema for creating a user profile."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
    signup_method: str = "email"
    allergies: List[str] = Field(default_factory=list)

    @field_validator('name', 'email', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)

    @field_validator('allergies')
    @classmethod
    def validate_allergies(cls, v):
        return _tags(v, Intolerance)


class UserUpdateInput(BaseModel):
    """Schema for partial profile updates; only provided fields are written."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, pattern=r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
    is_email_verified: Optional[bool] = None


class AllergiesInput(BaseModel):
    """Schema for replacing a user's allergy list."""
    allergies: List[str] = Field(default_factory=list)

    @field_validator('allergies')
    @classmethod
    def validate_allergies(cls, v):
        return _tags(v, Intolerance)


class AuthMethodInput(BaseModel):
    email: str = Field(..., min_length=3)
    signup_method: str = "email"
