"""
Persistence of normalized price records.

Modules:
    sqlite_store - PriceStore protocol and its SQLite implementation
"""

from .sqlite_store import DEFAULT_DB_PATH, PriceStore, SQLitePriceStore

__all__ = [
    'DEFAULT_DB_PATH',
    'PriceStore',
    'SQLitePriceStore',
]
