from pathlib import Path

from shelf.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized file names for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
PRODUCTS_FILE_NAME = 'products.json'
GROUPS_FILE_NAME = 'groups.json'
RECIPES_FILE_NAME = 'recipes.json'
USERS_FILE_NAME = 'users.json'
AUTH_USERS_FILE_NAME = 'auth_users.json'

__all__ = ['DATA_DIR', 'PRODUCTS_FILE_NAME', 'GROUPS_FILE_NAME', 'RECIPES_FILE_NAME',
           'USERS_FILE_NAME', 'AUTH_USERS_FILE_NAME']
