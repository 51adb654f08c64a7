"""Product and group repository (JSON file persistence)."""
import logging
from pathlib import Path
from typing import Dict, List, Optional

from shelf.domain.Product import Product
from shelf.domain.GroupedProducts import GroupedProducts
from shelf.infra.json_store import safe_load, atomic_write, lock_for
from shelf.infra.paths import DATA_DIR, PRODUCTS_FILE_NAME, GROUPS_FILE_NAME

logger = logging.getLogger(__name__)


class ProductRepository:
    """Loads and saves every user's products and expiration groups.

    Writes replace the whole file; the lock is shared by every repository on the
    same data directory and serializes load-modify-save cycles within one process.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or DATA_DIR)
        self.products_file = self.data_dir / PRODUCTS_FILE_NAME
        self.groups_file = self.data_dir / GROUPS_FILE_NAME
        self.lock = lock_for(self.data_dir)

    def load_products(self) -> Dict[str, Product]:
        products = {}
        for entry in safe_load(self.products_file, []):
            try:
                product = Product.from_dict(entry)
            except (TypeError, ValueError) as e:
                logger.error(f"Skipping invalid product entry: {e}")
                continue
            products[product.id] = product
        return products

    def load_groups(self) -> List[GroupedProducts]:
        return [GroupedProducts.from_dict(entry) for entry in safe_load(self.groups_file, [])]

    def save(self, products: Dict[str, Product], groups: List[GroupedProducts]):
        atomic_write(self.products_file, [p.to_dict() for p in products.values()])
        atomic_write(self.groups_file, [g.to_dict() for g in groups])

    def get(self, product_id: str) -> Optional[Product]:
        return self.load_products().get(product_id)

    def for_user(self, user_id: str) -> List[Product]:
        return [p for p in self.load_products().values() if p.user_id == user_id]

    def delete_user_data(self, user_id: str) -> int:
        """Remove every product and group owned by the user; returns the number of products removed."""
        with self.lock:
            products = self.load_products()
            groups = self.load_groups()
            kept = {pid: p for pid, p in products.items() if p.user_id != user_id}
            self.save(kept, [g for g in groups if g.user_id != user_id])
        return len(products) - len(kept)
