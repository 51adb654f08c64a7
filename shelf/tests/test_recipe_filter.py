import unittest

from shelf.domain.RecipeFilter import RecipeFilter
from shelf.domain.Tags import Diet, Cuisine, Intolerance, MealType, vocabulary


class TestRecipeFilter(unittest.TestCase):

    def setUp(self):
        self.filter = RecipeFilter()

    def test_empty_filter(self):
        self.assertFalse(self.filter.has_any_selection)
        self.assertEqual(self.filter.total_selection_count, 0)
        self.assertEqual(self.filter.all_tags, [])

    def test_select_then_deselect_vegetarian(self):
        self.filter.add_diet(Diet.VEGETARIAN)
        self.assertIn("vegetarian", self.filter.diets)
        self.filter.remove_diet(Diet.VEGETARIAN)
        self.assertNotIn("vegetarian", self.filter.diets)
        self.assertFalse(self.filter.has_any_selection)

    def test_add_is_idempotent(self):
        self.filter.add_cuisine(Cuisine.ITALIAN)
        self.filter.add_cuisine("italian")
        self.assertEqual(self.filter.cuisines, ["italian"])

    def test_remove_missing_is_noop(self):
        self.filter.remove_intolerance(Intolerance.PEANUT)
        self.assertEqual(self.filter.intolerances, [])

    def test_toggle_twice_restores_state(self):
        self.assertTrue(self.filter.toggle_meal_type(MealType.DESSERT))
        self.assertFalse(self.filter.toggle_meal_type(MealType.DESSERT))
        self.assertEqual(self.filter.meal_types, [])

    def test_counts_and_all_tags_order(self):
        self.filter.add_diet(Diet.VEGAN)
        self.filter.add_cuisine(Cuisine.THAI)
        self.filter.add_meal_type(MealType.SOUP)
        self.filter.add_intolerance(Intolerance.GLUTEN)
        self.assertEqual(self.filter.total_selection_count, 4)
        self.assertEqual(self.filter.all_tags, ["soup", "thai", "vegan", "gluten"])

    def test_clear(self):
        self.filter.add_diet(Diet.PALEO)
        self.filter.add_cuisine(Cuisine.GREEK)
        self.filter.clear()
        self.assertFalse(self.filter.has_any_selection)

    def test_unknown_tag_rejected(self):
        with self.assertRaises(ValueError):
            self.filter.add_diet("carnivore")
        with self.assertRaises(ValueError):
            self.filter.add("colors", "red")

    def test_complex_search_params(self):
        self.filter.add_meal_type(MealType.MAIN_COURSE)
        self.filter.add_cuisine(Cuisine.ITALIAN)
        self.filter.add_cuisine(Cuisine.FRENCH)
        self.filter.add_intolerance(Intolerance.DAIRY)
        params = self.filter.complex_search_params()
        self.assertEqual(params["number"], "1")
        self.assertEqual(params["sort"], "random")
        self.assertEqual(params["type"], "main_course")
        self.assertEqual(params["cuisine"], "italian,french")
        self.assertEqual(params["excludeIngredients"], "dairy")
        self.assertNotIn("diet", params)

    def test_random_params(self):
        self.assertEqual(self.filter.random_params(), {"number": "1"})
        self.filter.add_diet(Diet.KETOGENIC)
        self.assertEqual(self.filter.random_params()["include-tags"], "ketogenic")

    def test_dict_roundtrip_keeps_order(self):
        self.filter.add_cuisine(Cuisine.KOREAN)
        self.filter.add_cuisine(Cuisine.CHINESE)
        restored = RecipeFilter.from_dict(self.filter.to_dict())
        self.assertEqual(restored.cuisines, ["korean", "chinese"])


class TestTags(unittest.TestCase):

    def test_display_names(self):
        self.assertEqual(Diet.GLUTEN_FREE.display_name, "Gluten Free")
        self.assertEqual(Diet.LOW_FODMAP.display_name, "Low FODMAP")
        self.assertEqual(MealType.FINGERFOOD.display_name, "Finger Food")

    def test_vocabulary_covers_all_categories(self):
        vocab = vocabulary()
        self.assertEqual(set(vocab), {"diets", "cuisines", "intolerances", "meal_types"})
        self.assertEqual(len(vocab["intolerances"]), len(Intolerance))
        self.assertIn({"value": "tree_nut", "label": "Tree Nut"}, vocab["intolerances"])


if __name__ == '__main__':
    unittest.main()
