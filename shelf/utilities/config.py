"""Configuration management for the ShelfSmart service."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# API Configuration
SPOONACULAR_API_KEY: Final[str] = os.getenv('SPOONACULAR_API_KEY', '')
SPOONACULAR_BASE_URL: Final[str] = os.getenv('SPOONACULAR_BASE_URL', 'https://api.spoonacular.com')
OFFA_BASE_URL: Final[str] = os.getenv('OFFA_BASE_URL', 'https://world.openfoodfacts.net')
HTTP_TIMEOUT: Final[float] = float(os.getenv('HTTP_TIMEOUT', '10'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Expiration tracking
DEFAULT_EXPIRY_DAYS: Final[int] = int(os.getenv('DEFAULT_EXPIRY_DAYS', '7'))
WARNING_DAYS_BEFORE_EXPIRY: Final[int] = int(os.getenv('WARNING_DAYS_BEFORE_EXPIRY', '7'))
NOTIFICATION_HOUR: Final[int] = int(os.getenv('NOTIFICATION_HOUR', '15'))
NOTIFICATION_MINUTE: Final[int] = int(os.getenv('NOTIFICATION_MINUTE', '6'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('SHELF_DATA_DIR', str(BASE_DIR / 'data')))
