import json
import tempfile
import unittest
from datetime import date
from pathlib import Path

from shelf.domain.Product import Product
from shelf.domain.Recipe import Recipe
from shelf.infra.Product_Repository import ProductRepository
from shelf.infra.Recipe_Repository import RecipeRepository
from shelf.infra.User_Service import UserService
from shelf.logic.products.grouping import add_to_group


class TestRepositories(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_files_are_empty(self):
        repo = ProductRepository(self.data_dir)
        self.assertEqual(repo.load_products(), {})
        self.assertEqual(repo.load_groups(), [])
        self.assertEqual(RecipeRepository(self.data_dir).load(), {})

    def test_invalid_json_is_empty(self):
        (self.data_dir / "products.json").write_text("{not json", encoding="utf-8")
        self.assertEqual(ProductRepository(self.data_dir).load_products(), {})

    def test_save_and_reload(self):
        repo = ProductRepository(self.data_dir)
        groups = []
        product = Product(title="Milk", expiration_date=date(2024, 1, 10), user_id="u1")
        add_to_group(groups, product)
        repo.save({product.id: product}, groups)

        reloaded = ProductRepository(self.data_dir)
        self.assertEqual(reloaded.get(product.id).group_id, groups[0].id)
        self.assertEqual(reloaded.load_groups()[0].product_ids, [product.id])
        self.assertEqual([p.title for p in reloaded.for_user("u1")], ["Milk"])

    def test_delete_user_data(self):
        repo = ProductRepository(self.data_dir)
        mine = Product(title="Milk", user_id="u1")
        theirs = Product(title="Eggs", user_id="u2")
        repo.save({mine.id: mine, theirs.id: theirs}, [])
        self.assertEqual(repo.delete_user_data("u1"), 1)
        self.assertEqual(list(repo.load_products()), [theirs.id])

        recipes = RecipeRepository(self.data_dir)
        r1, r2 = Recipe(title="A", user_id="u1"), Recipe(title="B", user_id="u2")
        recipes.save({r1.id: r1, r2.id: r2})
        self.assertEqual(recipes.delete_user_data("u1"), 1)
        self.assertEqual(list(recipes.load()), [r2.id])

    def test_malformed_recipe_entries_are_skipped(self):
        valid = Recipe(title="Omelette", user_id="u1")
        (self.data_dir / "recipes.json").write_text(
            json.dumps(["ab", 5, valid.to_dict()]), encoding="utf-8")
        self.assertEqual([r.title for r in RecipeRepository(self.data_dir).load().values()], ["Omelette"])

    def test_repositories_on_one_directory_share_a_lock(self):
        products = ProductRepository(self.data_dir)
        self.assertIs(products.lock, ProductRepository(self.data_dir).lock)
        self.assertIs(products.lock, RecipeRepository(self.data_dir).lock)
        self.assertIs(products.lock, UserService(self.data_dir)._lock)
        with tempfile.TemporaryDirectory() as other:
            self.assertIsNot(products.lock, ProductRepository(Path(other)).lock)


if __name__ == '__main__':
    unittest.main()
