from datetime import date, datetime
import unittest

from shelf.domain.Product import Product
from shelf.domain.Recipe import Recipe
from shelf.domain.GroupedProducts import GroupedProducts
from shelf.logic.products.grouping import add_to_group, group_products, cleanup_orphaned_groups, grouped_view
from shelf.logic.products.lifecycle import (
    mark_used, unlike_product, delete_product, unlike_recipe, liked_products, used_products,
)
from shelf.logic.recipes.ingredients import recipe_search_terms


def _product(title, day, user_id="u1", **kwargs):
    return Product(title=title, expiration_date=day, user_id=user_id, **kwargs)


class TestProduct(unittest.TestCase):

    def test_notification_ids(self):
        p = _product("Milk", date(2024, 1, 10), id="abc")
        self.assertEqual(p.warning_notification_id, "abc_warning_notification_id")
        self.assertEqual(p.expiration_notification_id, "abc_expiration_notification_id")

    def test_status_helpers(self):
        p = _product("Milk", date(2024, 1, 7))
        today = date(2024, 1, 10)
        self.assertTrue(p.is_expired(today))
        self.assertEqual(p.status(today).message, "Expired 3 days ago")
        self.assertEqual(p.freshness(today), "expired")

    def test_unknown_source_rejected(self):
        with self.assertRaises(ValueError):
            Product(title="x", source="shop")

    def test_dict_roundtrip(self):
        p = _product("Yogurt", date(2024, 2, 1), brand="Acme", breadcrumbs=["yogurt"], recipe_ids=[1, 2])
        restored = Product.from_dict(p.to_dict())
        self.assertEqual(restored.id, p.id)
        self.assertEqual(restored.expiration_date, date(2024, 2, 1))
        self.assertEqual(restored.recipe_ids, [1, 2])
        self.assertEqual(restored.brand, "Acme")


class TestGrouping(unittest.TestCase):

    def test_same_day_products_share_group(self):
        groups = []
        a = _product("Milk", date(2024, 1, 10))
        b = _product("Bread", date(2024, 1, 10))
        g1 = add_to_group(groups, a)
        g2 = add_to_group(groups, b)
        self.assertIs(g1, g2)
        self.assertEqual(g1.product_ids, [a.id, b.id])
        self.assertEqual(a.group_id, g1.id)

    def test_groups_are_per_user(self):
        groups = []
        add_to_group(groups, _product("Milk", date(2024, 1, 10), user_id="u1"))
        add_to_group(groups, _product("Milk", date(2024, 1, 10), user_id="u2"))
        self.assertEqual(len(groups), 2)

    def test_group_products_skips_used_and_sorts(self):
        later = _product("Cheese", date(2024, 1, 20))
        sooner = _product("Milk", date(2024, 1, 10))
        used = _product("Eggs", date(2024, 1, 5), is_used=True)
        other = _product("Ham", date(2024, 1, 10), user_id="u2")
        groups = group_products([later, sooner, used, other], "u1")
        self.assertEqual([g.expiration_date for g in groups], [date(2024, 1, 10), date(2024, 1, 20)])
        self.assertEqual(groups[0].product_ids, [sooner.id])

    def test_cleanup_orphaned_groups(self):
        empty = GroupedProducts(date(2024, 1, 1), user_id="u1")
        dangling = GroupedProducts(date(2024, 1, 2), user_id="u1", product_ids=["gone"])
        other_user = GroupedProducts(date(2024, 1, 3), user_id="u2")
        groups = [empty, dangling, other_user]
        removed = cleanup_orphaned_groups(groups, "u1", known_product_ids=[])
        self.assertEqual(removed, 2)
        self.assertEqual(groups, [other_user])

    def test_grouped_view(self):
        groups = []
        a = _product("Milk", date(2024, 1, 12))
        b = _product("Bread", date(2024, 1, 8))
        add_to_group(groups, a)
        add_to_group(groups, b)
        view = grouped_view(groups, {a.id: a, b.id: b}, "u1", today=date(2024, 1, 10))
        self.assertEqual([g["expiration_date"] for g in view], ["2024-01-08", "2024-01-12"])
        self.assertEqual(view[0]["status"]["color"], "red")
        self.assertTrue(view[0]["is_expired"])
        self.assertEqual(view[1]["border_color"], "yellow")


class TestLifecycle(unittest.TestCase):

    def setUp(self):
        self.groups = []
        self.milk = _product("Milk", date(2024, 1, 10))
        self.bread = _product("Bread", date(2024, 1, 10))
        self.products = {self.milk.id: self.milk, self.bread.id: self.bread}
        add_to_group(self.groups, self.milk)
        add_to_group(self.groups, self.bread)

    def test_mark_used_leaves_group(self):
        mark_used(self.milk, self.groups)
        self.assertTrue(self.milk.is_used)
        self.assertIsNone(self.milk.group_id)
        self.assertEqual(self.groups[0].product_ids, [self.bread.id])

    def test_last_product_removes_group(self):
        mark_used(self.milk, self.groups)
        mark_used(self.bread, self.groups)
        self.assertEqual(self.groups, [])
        self.assertEqual(len(used_products(self.products, "u1")), 2)

    def test_like_toggle_on_grouped_product(self):
        self.assertFalse(unlike_product(self.milk, self.products))
        self.assertTrue(self.milk.is_liked)
        self.assertFalse(unlike_product(self.milk, self.products))
        self.assertFalse(self.milk.is_liked)
        self.assertIn(self.milk.id, self.products)

    def test_unlike_standalone_product_deletes_it(self):
        loose = _product("Jam", date(2024, 3, 1), is_liked=True)
        self.products[loose.id] = loose
        self.assertEqual(liked_products(self.products, "u1"), [loose])
        self.assertTrue(unlike_product(loose, self.products))
        self.assertNotIn(loose.id, self.products)

    def test_delete_product_keeps_liked_recipes(self):
        liked = Recipe(title="Pancakes", is_liked=True, user_id="u1", product_id=self.milk.id)
        plain = Recipe(title="Porridge", user_id="u1", product_id=self.milk.id)
        recipes = {liked.id: liked, plain.id: plain}
        delete_product(self.milk, self.products, self.groups, recipes)
        self.assertNotIn(self.milk.id, self.products)
        self.assertEqual(list(recipes), [liked.id])
        self.assertIsNone(liked.product_id)
        self.assertEqual(self.groups[0].product_ids, [self.bread.id])

    def test_unlike_standalone_recipe_deletes_it(self):
        recipe = Recipe(title="Soup", is_liked=True, user_id="u1")
        recipes = {recipe.id: recipe}
        self.assertTrue(unlike_recipe(recipe, recipes, "u1"))
        self.assertEqual(recipes, {})

    def test_like_product_recipe_toggles(self):
        recipe = Recipe(title="Soup", user_id="u1", product_id=self.milk.id)
        recipes = {recipe.id: recipe}
        self.assertFalse(unlike_recipe(recipe, recipes, "u1"))
        self.assertTrue(recipe.is_liked)


class TestRecipeSearchTerms(unittest.TestCase):

    def test_breadcrumbs_preferred(self):
        p = _product("Organic Whole Milk", date(2024, 1, 1), breadcrumbs=["milk", "", "dairy", "Milk"])
        self.assertEqual(recipe_search_terms(p), ["milk", "dairy"])

    def test_title_fallback(self):
        p = _product("  Cheddar  ", date(2024, 1, 1))
        self.assertEqual(recipe_search_terms(p), ["Cheddar"])


if __name__ == '__main__':
    unittest.main()
