"""
Runtime settings from the environment.

CLI scripts call load_dotenv() first, so a .env file at the project root
can provide these.
"""

import os

from .constants import DEFAULT_DB_PATH

DB_PATH_ENV = "PRICECOMPARE_DB_PATH"
HEADLESS_ENV = "PRICECOMPARE_HEADLESS"


def get_db_path() -> str:
    """SQLite database path (PRICECOMPARE_DB_PATH, default data/prices.db)."""
    return os.environ.get(DB_PATH_ENV) or DEFAULT_DB_PATH


def get_headless() -> bool:
    """Whether to run browsers headless (PRICECOMPARE_HEADLESS, default true)."""
    value = os.environ.get(HEADLESS_ENV, "true").strip().lower()
    return value not in ("0", "false", "no", "off")
