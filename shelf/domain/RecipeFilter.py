"""RecipeFilter: the user's current recipe search selection (meal types, cuisines, diets, intolerances).

Each category behaves as a set that remembers insertion order, so the query
string sent upstream is stable for a given sequence of toggles.
"""
import logging
from typing import Dict, List, Iterable, Optional

from shelf.domain.Tags import Diet, Cuisine, Intolerance, MealType

logger = logging.getLogger(__name__)

CATEGORIES = {
    "meal_types": MealType,
    "cuisines": Cuisine,
    "diets": Diet,
    "intolerances": Intolerance,
}


class RecipeFilter:
    def __init__(self, meal_types: Optional[Iterable] = None, cuisines: Optional[Iterable] = None,
                 diets: Optional[Iterable] = None, intolerances: Optional[Iterable] = None):
        self._selected: Dict[str, List[str]] = {name: [] for name in CATEGORIES}
        for name, values in (("meal_types", meal_types), ("cuisines", cuisines),
                             ("diets", diets), ("intolerances", intolerances)):
            for value in values or []:
                self.add(name, value)

    # --- Generic operations ------------------------------------------------
    def _tag(self, category: str, value) -> str:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown filter category: {category}")
        return CATEGORIES[category].parse(value).api_value

    def add(self, category: str, value):
        tag = self._tag(category, value)
        if tag not in self._selected[category]:
            self._selected[category].append(tag)

    def remove(self, category: str, value):
        tag = self._tag(category, value)
        if tag in self._selected[category]:
            self._selected[category].remove(tag)

    def toggle(self, category: str, value) -> bool:
        '''Flip the tag; returns True if it is selected afterwards.'''
        tag = self._tag(category, value)
        if tag in self._selected[category]:
            self._selected[category].remove(tag)
            return False
        self._selected[category].append(tag)
        return True

    def is_selected(self, category: str, value) -> bool:
        return self._tag(category, value) in self._selected[category]

    def clear(self):
        for values in self._selected.values():
            values.clear()
        logger.debug("All recipe filter selections cleared")

    # --- Per-category sugar -------------------------------------------------
    def add_diet(self, diet): self.add("diets", diet)
    def remove_diet(self, diet): self.remove("diets", diet)
    def toggle_diet(self, diet): return self.toggle("diets", diet)

    def add_cuisine(self, cuisine): self.add("cuisines", cuisine)
    def remove_cuisine(self, cuisine): self.remove("cuisines", cuisine)
    def toggle_cuisine(self, cuisine): return self.toggle("cuisines", cuisine)

    def add_intolerance(self, intolerance): self.add("intolerances", intolerance)
    def remove_intolerance(self, intolerance): self.remove("intolerances", intolerance)
    def toggle_intolerance(self, intolerance): return self.toggle("intolerances", intolerance)

    def add_meal_type(self, meal_type): self.add("meal_types", meal_type)
    def remove_meal_type(self, meal_type): self.remove("meal_types", meal_type)
    def toggle_meal_type(self, meal_type): return self.toggle("meal_types", meal_type)

    # --- Views ----------------------------------------------------------------
    @property
    def meal_types(self) -> List[str]: return list(self._selected["meal_types"])

    @property
    def cuisines(self) -> List[str]: return list(self._selected["cuisines"])

    @property
    def diets(self) -> List[str]: return list(self._selected["diets"])

    @property
    def intolerances(self) -> List[str]: return list(self._selected["intolerances"])

    @property
    def all_tags(self) -> List[str]:
        return self.meal_types + self.cuisines + self.diets + self.intolerances

    @property
    def has_any_selection(self) -> bool:
        return any(self._selected.values())

    @property
    def total_selection_count(self) -> int:
        return sum(len(v) for v in self._selected.values())

    # --- Query building ---------------------------------------------------------
    def complex_search_params(self) -> Dict[str, str]:
        """Query parameters for a filtered random pick via complexSearch."""
        params = {"number": "1", "sort": "random"}
        for category, key in (("meal_types", "type"), ("cuisines", "cuisine"),
                              ("diets", "diet"), ("intolerances", "excludeIngredients")):
            if self._selected[category]:
                params[key] = ",".join(self._selected[category])
        return params

    def random_params(self) -> Dict[str, str]:
        """Query parameters for the random recipe endpoint."""
        params = {"number": "1"}
        if self.has_any_selection:
            params["include-tags"] = ",".join(self.all_tags)
        return params

    def to_dict(self):
        return {name: list(values) for name, values in self._selected.items()}

    @staticmethod
    def from_dict(data):
        d = data or {}
        return RecipeFilter(**{name: d.get(name) or [] for name in CATEGORIES})

    def __str__(self) -> str:
        return f"RecipeFilter({', '.join(self.all_tags) or 'no filters'})"

    __repr__ = __str__
