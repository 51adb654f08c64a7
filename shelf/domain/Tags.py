"""Tag vocabularies used as recipe search filters (diets, cuisines, intolerances, meal types).

Values are the API strings sent to the recipe endpoint; ``display_name`` is what
clients show next to the toggle.
"""
from enum import Enum
from typing import Dict, List


class _Tag(str, Enum):
    @property
    def api_value(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_OVERRIDES.get(self.value, self.value.replace("_", " ").title())

    @classmethod
    def parse(cls, value):
        """Return the member for an enum member or API string, ValueError otherwise."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        raise ValueError(f"Unknown {cls.__name__} tag: {value!r}")


class Diet(_Tag):
    GLUTEN_FREE = "gluten_free"
    KETOGENIC = "ketogenic"
    VEGETARIAN = "vegetarian"
    LACTO_VEGETARIAN = "lacto_vegetarian"
    OVO_VEGETARIAN = "ovo_vegetarian"
    VEGAN = "vegan"
    PESCETARIAN = "pescetarian"
    PALEO = "paleo"
    PRIMAL = "primal"
    LOW_FODMAP = "low_fodmap"
    WHOLE30 = "whole30"


class Cuisine(_Tag):
    AFRICAN = "african"
    ASIAN = "asian"
    AMERICAN = "american"
    BRITISH = "british"
    CAJUN = "cajun"
    CARIBBEAN = "caribbean"
    CHINESE = "chinese"
    EASTERN_EUROPEAN = "eastern_european"
    EUROPEAN = "european"
    FRENCH = "french"
    GERMAN = "german"
    GREEK = "greek"
    INDIAN = "indian"
    IRISH = "irish"
    ITALIAN = "italian"
    JAPANESE = "japanese"
    JEWISH = "jewish"
    KOREAN = "korean"
    LATIN_AMERICAN = "latin_american"
    MEDITERRANEAN = "mediterranean"
    MEXICAN = "mexican"
    MIDDLE_EASTERN = "middle_eastern"
    NORDIC = "nordic"
    SOUTHERN = "southern"
    SPANISH = "spanish"
    THAI = "thai"
    VIETNAMESE = "vietnamese"


class Intolerance(_Tag):
    DAIRY = "dairy"
    EGG = "egg"
    GLUTEN = "gluten"
    GRAIN = "grain"
    PEANUT = "peanut"
    SEAFOOD = "seafood"
    SESAME = "sesame"
    SHELLFISH = "shellfish"
    SOY = "soy"
    SULFITE = "sulfite"
    TREE_NUT = "tree_nut"
    WHEAT = "wheat"


class MealType(_Tag):
    MAIN_COURSE = "main_course"
    SIDE_DISH = "side_dish"
    DESSERT = "dessert"
    APPETIZER = "appetizer"
    SALAD = "salad"
    BREAD = "bread"
    BREAKFAST = "breakfast"
    SOUP = "soup"
    BEVERAGE = "beverage"
    SAUCE = "sauce"
    MARINADE = "marinade"
    FINGERFOOD = "fingerfood"
    SNACK = "snack"
    DRINK = "drink"


_DISPLAY_OVERRIDES = {
    "lacto_vegetarian": "Lacto-Vegetarian",
    "ovo_vegetarian": "Ovo-Vegetarian",
    "low_fodmap": "Low FODMAP",
    "whole30": "Whole30",
    "fingerfood": "Finger Food",
}


def vocabulary() -> Dict[str, List[Dict[str, str]]]:
    """All tag vocabularies as {category: [{value, label}]} for clients."""
    return {
        name: [{"value": t.api_value, "label": t.display_name} for t in enum_cls]
        for name, enum_cls in (("diets", Diet), ("cuisines", Cuisine),
                               ("intolerances", Intolerance), ("meal_types", MealType))
    }


__all__ = ["Diet", "Cuisine", "Intolerance", "MealType", "vocabulary"]
