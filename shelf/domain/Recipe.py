"""Recipe domain entity: a saved recipe with ingredients, steps, dietary flags and scores."""
from typing import List, Dict, Optional, Any
from uuid import uuid4

from shelf.utilities.text import clean_html_text, clean_optional

DIETARY_FLAGS = ("vegetarian", "vegan", "gluten_free", "dairy_free", "very_healthy",
                 "cheap", "very_popular", "sustainable", "low_fodmap")

# Spoonacular camelCase keys for the flags above
_FLAG_KEYS = {
    "vegetarian": "vegetarian",
    "vegan": "vegan",
    "gluten_free": "glutenFree",
    "dairy_free": "dairyFree",
    "very_healthy": "veryHealthy",
    "cheap": "cheap",
    "very_popular": "veryPopular",
    "sustainable": "sustainable",
    "low_fodmap": "lowFodmap",
}


class Recipe:
    def __init__(self, title: str = "", spoonacular_id: Optional[int] = None, image: Optional[str] = None,
                 ready_in_minutes: Optional[int] = None, servings: Optional[int] = None,
                 source_url: Optional[str] = None, summary: str = "",
                 ingredients: Optional[List[Dict[str, Any]]] = None, steps: Optional[List[str]] = None,
                 cuisines: Optional[List[str]] = None, dish_types: Optional[List[str]] = None,
                 diets: Optional[List[str]] = None, flags: Optional[Dict[str, bool]] = None,
                 health_score: Optional[float] = None, spoonacular_score: Optional[float] = None,
                 price_per_serving: Optional[float] = None, is_liked: bool = False,
                 user_id: str = "", product_id: Optional[str] = None, id: Optional[str] = None):
        self.id = id or str(uuid4())
        self.spoonacular_id = spoonacular_id
        self.title = title
        self.image = image
        self.ready_in_minutes = ready_in_minutes
        self.servings = servings
        self.source_url = source_url
        self.summary = summary
        self.ingredients = ingredients[:] if ingredients else []
        self.steps = steps[:] if steps else []
        self.cuisines = cuisines[:] if cuisines else []
        self.dish_types = dish_types[:] if dish_types else []
        self.diets = diets[:] if diets else []
        f = flags or {}
        self.flags = {name: bool(f.get(name, False)) for name in DIETARY_FLAGS}
        self.health_score = health_score
        self.spoonacular_score = spoonacular_score
        self.price_per_serving = price_per_serving
        self.is_liked = is_liked
        self.user_id = user_id
        self.product_id = product_id

    def __str__(self) -> str:
        active = [name for name, on in self.flags.items() if on]
        return f"{self.title} - {self.servings or '?'} servings - Flags: {', '.join(active) or 'none'}"

    __repr__ = __str__

    @property
    def is_standalone(self) -> bool:
        return self.product_id is None

    def like(self, user_id: str):
        '''Toggle the liked flag and claim the recipe for the user.'''
        self.is_liked = not self.is_liked
        self.user_id = user_id

    @staticmethod
    def _steps_from(payload: Dict[str, Any]) -> List[str]:
        steps: List[str] = []
        for block in payload.get("analyzedInstructions") or []:
            for step in block.get("steps") or []:
                text = clean_html_text(step.get("step"))
                if text:
                    steps.append(text)
        if not steps and payload.get("instructions"):
            # fall back to the free-text instructions, one step per line
            lines = clean_html_text(payload["instructions"]).split("\n")
            steps = [line.lstrip("•").strip() for line in lines if line.lstrip("•").strip()]
        return steps

    @staticmethod
    def from_spoonacular(payload: Dict[str, Any], user_id: str = "", product_id: Optional[str] = None):
        '''Map a Spoonacular recipe information response.'''
        ingredients = [
            {
                "name": ing.get("name") or ing.get("nameClean") or "",
                "amount": ing.get("amount"),
                "unit": ing.get("unit") or "",
                "original": ing.get("original") or "",
            }
            for ing in payload.get("extendedIngredients") or []
        ]
        return Recipe(
            title=clean_html_text(payload.get("title")),
            spoonacular_id=payload.get("id"),
            image=payload.get("image"),
            ready_in_minutes=payload.get("readyInMinutes"),
            servings=payload.get("servings"),
            source_url=payload.get("sourceUrl") or payload.get("spoonacularSourceUrl"),
            summary=clean_optional(payload.get("summary")) or "",
            ingredients=ingredients,
            steps=Recipe._steps_from(payload),
            cuisines=payload.get("cuisines") or [],
            dish_types=payload.get("dishTypes") or [],
            diets=payload.get("diets") or [],
            flags={name: payload.get(key, False) for name, key in _FLAG_KEYS.items()},
            health_score=payload.get("healthScore"),
            spoonacular_score=payload.get("spoonacularScore"),
            price_per_serving=payload.get("pricePerServing"),
            user_id=user_id,
            product_id=product_id,
        )

    @staticmethod
    def from_dict(data):
        d = dict(data)
        allowed = {"id", "spoonacular_id", "title", "image", "ready_in_minutes", "servings", "source_url",
                   "summary", "ingredients", "steps", "cuisines", "dish_types", "diets", "flags",
                   "health_score", "spoonacular_score", "price_per_serving", "is_liked", "user_id",
                   "product_id"}
        return Recipe(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "spoonacular_id": self.spoonacular_id,
            "title": self.title,
            "image": self.image,
            "ready_in_minutes": self.ready_in_minutes,
            "servings": self.servings,
            "source_url": self.source_url,
            "summary": self.summary,
            "ingredients": self.ingredients,
            "steps": self.steps,
            "cuisines": self.cuisines,
            "dish_types": self.dish_types,
            "diets": self.diets,
            "flags": self.flags,
            "health_score": self.health_score,
            "spoonacular_score": self.spoonacular_score,
            "price_per_serving": self.price_per_serving,
            "is_liked": self.is_liked,
            "user_id": self.user_id,
            "product_id": self.product_id,
        }
