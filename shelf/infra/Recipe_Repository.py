import logging
from pathlib import Path
from typing import Dict, Optional

from shelf.domain.Recipe import Recipe
from shelf.infra.json_store import safe_load, atomic_write, lock_for
from shelf.infra.paths import DATA_DIR, RECIPES_FILE_NAME

logger = logging.getLogger(__name__)


class RecipeRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or DATA_DIR)
        self.recipes_file = self.data_dir / RECIPES_FILE_NAME
        self.lock = lock_for(self.data_dir)

    def load(self) -> Dict[str, Recipe]:
        """Read saved recipes; unreadable entries are logged and skipped."""
        recipes = {}
        for entry in safe_load(self.recipes_file, []):
            try:
                recipe = Recipe.from_dict(entry)
            except (TypeError, ValueError) as e:
                logger.error(f"Skipping invalid recipe entry: {e}")
                continue
            recipes[recipe.id] = recipe
        return recipes

    def save(self, recipes: Dict[str, Recipe]):
        atomic_write(self.recipes_file, [r.to_dict() for r in recipes.values()])

    def delete_user_data(self, user_id: str) -> int:
        with self.lock:
            recipes = self.load()
            kept = {rid: r for rid, r in recipes.items() if r.user_id != user_id}
            self.save(kept)
        return len(recipes) - len(kept)
