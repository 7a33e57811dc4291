"""
SQLite Price Store

Persists normalized records per country: one store row per country, one
product row per match key, one price row per observation. Every record is
also kept as JSON so aggregation can rebuild it exactly.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Protocol

from ..common.config_loader import load_countries
from ..common.constants import DEFAULT_DB_PATH
from ..models import NormalizedRecord

logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS stores (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    country TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    website_url TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    match_key TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    brand TEXT,
    unit TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS prices (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id INTEGER NOT NULL REFERENCES products(id),
    store_id INTEGER NOT NULL REFERENCES stores(id),
    amount TEXT NOT NULL,
    currency TEXT NOT NULL DEFAULT 'EUR',
    price_type TEXT NOT NULL,
    source_url TEXT NOT NULL,
    captured_at TEXT NOT NULL,
    record_json TEXT NOT NULL,
    UNIQUE (product_id, store_id, source_url, captured_at)
);

CREATE TABLE IF NOT EXISTS scrape_sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    country TEXT NOT NULL,
    started_at TEXT NOT NULL,
    finished_at TEXT,
    status TEXT NOT NULL DEFAULT 'running',
    records_saved INTEGER NOT NULL DEFAULT 0,
    error TEXT
);

CREATE INDEX IF NOT EXISTS idx_prices_product ON prices(product_id);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PriceStore(Protocol):
    """Persistence capability the acquisition pipeline writes through."""

    def find_or_create_product(self, name: str, brand: Optional[str], unit: str, match_key: str) -> int: ...

    def upsert_price(self, product_id: int, store_id: int, amount, currency: str,
                     price_type: str, record: NormalizedRecord) -> int: ...

    def begin_session(self, country: str) -> int: ...

    def complete_session(self, session_id: int, outcome: str,
                         records_saved: int = 0, error: Optional[str] = None) -> None: ...

    def save_batch(self, records: Iterable[NormalizedRecord], country: str) -> int: ...

    def load_records(self) -> List[NormalizedRecord]: ...


class SQLitePriceStore:
    """
    SQLite implementation of PriceStore.

    Usage:
        with SQLitePriceStore("data/prices.db") as store:
            store.save_batch(records, "hr")
            groups = aggregate(store.load_records())
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = Path(db_path or DEFAULT_DB_PATH)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection: Optional[sqlite3.Connection] = None

    def __enter__(self):
        self.init_schema()
        return self

    def __exit__(self, *args):
        self.close()

    def connect(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(str(self.db_path), timeout=30.0)
            self._connection.row_factory = sqlite3.Row
            self._connection.execute("PRAGMA foreign_keys = ON")
        return self._connection

    def close(self):
        if self._connection:
            self._connection.close()
            self._connection = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back and re-raise on any error."""
        conn = self.connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def init_schema(self):
        conn = self.connect()
        conn.executescript(SCHEMA)
        conn.commit()
        logger.debug("Database schema initialized: %s", self.db_path)

    # Stores and products

    def ensure_store(self, country: str) -> int:
        """Return the store id for a country, creating the row if needed."""
        with self.transaction() as conn:
            return self._ensure_store(conn, country)

    def find_or_create_product(self, name: str, brand: Optional[str], unit: str, match_key: str) -> int:
        """Return the product id for a match key, creating the row if needed."""
        with self.transaction() as conn:
            return self._find_or_create_product(conn, name, brand, unit, match_key)

    def upsert_price(self, product_id: int, store_id: int, amount, currency: str,
                     price_type: str, record: NormalizedRecord) -> int:
        """Insert a price observation; re-saving the same observation updates it."""
        with self.transaction() as conn:
            return self._upsert_price(conn, product_id, store_id, amount, currency, price_type, record)

    def _ensure_store(self, conn: sqlite3.Connection, country: str) -> int:
        row = conn.execute("SELECT id FROM stores WHERE country = ?", (country,)).fetchone()
        if row:
            return row["id"]

        config = load_countries().get(country, {})
        cursor = conn.execute(
            "INSERT INTO stores (country, name, website_url, created_at) VALUES (?, ?, ?, ?)",
            (country, f"Lidl {config.get('name', country.upper())}", config.get("host"), _now()),
        )
        return cursor.lastrowid

    def _find_or_create_product(self, conn, name, brand, unit, match_key) -> int:
        now = _now()
        row = conn.execute("SELECT id FROM products WHERE match_key = ?", (match_key,)).fetchone()
        if row:
            conn.execute(
                "UPDATE products SET name = ?, brand = COALESCE(?, brand), unit = ?, updated_at = ? WHERE id = ?",
                (name, brand, unit, now, row["id"]),
            )
            return row["id"]

        cursor = conn.execute(
            "INSERT INTO products (match_key, name, brand, unit, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (match_key, name, brand, unit, now, now),
        )
        return cursor.lastrowid

    def _upsert_price(self, conn, product_id, store_id, amount, currency, price_type, record) -> int:
        conn.execute(
            """
            INSERT INTO prices (product_id, store_id, amount, currency, price_type,
                source_url, captured_at, record_json)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (product_id, store_id, source_url, captured_at) DO UPDATE SET
                amount = excluded.amount,
                currency = excluded.currency,
                price_type = excluded.price_type,
                record_json = excluded.record_json
            """,
            (
                product_id, store_id, str(amount), currency, price_type,
                record.source_url, record.captured_at.isoformat(),
                json.dumps(record.to_dict(), ensure_ascii=False),
            ),
        )
        row = conn.execute(
            "SELECT id FROM prices WHERE product_id = ? AND store_id = ? AND source_url = ? AND captured_at = ?",
            (product_id, store_id, record.source_url, record.captured_at.isoformat()),
        ).fetchone()
        return row["id"]

    # Scrape sessions

    def begin_session(self, country: str) -> int:
        with self.transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO scrape_sessions (country, started_at) VALUES (?, ?)",
                (country, _now()),
            )
            return cursor.lastrowid

    def complete_session(self, session_id: int, outcome: str,
                         records_saved: int = 0, error: Optional[str] = None) -> None:
        with self.transaction() as conn:
            conn.execute(
                "UPDATE scrape_sessions SET finished_at = ?, status = ?, records_saved = ?, error = ? "
                "WHERE id = ?",
                (_now(), outcome, records_saved, error, session_id),
            )

    def get_session(self, session_id: int) -> Optional[dict]:
        row = self.connect().execute(
            "SELECT * FROM scrape_sessions WHERE id = ?", (session_id,)).fetchone()
        return dict(row) if row else None

    # Batches

    def save_batch(self, records: Iterable[NormalizedRecord], country: str) -> int:
        """
        Save one country's records in a single transaction.

        Either every record is saved or none is. The scrape session is
        completed with the outcome in both cases.

        Returns:
            Number of records saved
        """
        records = list(records)
        session_id = self.begin_session(country)

        try:
            with self.transaction() as conn:
                store_id = self._ensure_store(conn, country)
                for record in records:
                    product_id = self._find_or_create_product(
                        conn, record.name, record.brand, record.unit_base.unit.value, record.match_key)
                    self._upsert_price(
                        conn, product_id, store_id, record.price_amount, record.currency,
                        record.price_type.value, record)
        except (sqlite3.Error, ValueError) as e:
            logger.error("Saving %d records for %s failed: %s", len(records), country, e)
            self.complete_session(session_id, "failed", error=str(e))
            raise

        self.complete_session(session_id, "completed", records_saved=len(records))
        logger.info("Saved %d records for %s", len(records), country)
        return len(records)

    def load_records(self) -> List[NormalizedRecord]:
        """Return every stored record in arrival order."""
        rows = self.connect().execute("SELECT record_json FROM prices ORDER BY id").fetchall()
        return [NormalizedRecord.from_dict(json.loads(row["record_json"])) for row in rows]

    def get_table_counts(self) -> dict:
        """Get row counts for all tables."""
        counts = {}
        for table in ("stores", "products", "prices", "scrape_sessions"):
            row = self.connect().execute(f"SELECT COUNT(*) AS cnt FROM {table}").fetchone()
            counts[table] = row["cnt"]
        return counts
