"""DuckDB Key-Value Backing for BuyWay.

Stores serialized store snapshots (cart, wishlist) in a single ``kv_store``
table so they survive process restarts.
"""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import duckdb

logger = logging.getLogger(__name__)


class DuckDBKeyValueStore:
    """Persists string values by key in a DuckDB database.

    Blocking DuckDB calls are offloaded to the default executor. Each call
    works on its own cursor so calls from different executor threads never
    share a connection handle.
    """

    def __init__(self, db_path: Optional[str] = None):
        # In-memory database when no path is given
        self.db_path = db_path or ":memory:"
        self.conn: Optional[duckdb.DuckDBPyConnection] = None

    async def start(self) -> None:
        """Open the database and create the schema."""
        if self.conn is not None:
            return
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = duckdb.connect(self.db_path)
        self._create_schema()
        logger.info(f"Key-value database initialized: {self.db_path}")

    def _create_schema(self) -> None:
        self._connection().execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                storage_key VARCHAR PRIMARY KEY,
                payload VARCHAR NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def _connection(self) -> duckdb.DuckDBPyConnection:
        if self.conn is None:
            raise RuntimeError("Key-value database not started! Call start() first.")
        return self.conn

    async def get(self, key: str) -> Optional[str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._get_sync, key)

    async def set(self, key: str, value: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._set_sync, key, value)

    async def remove(self, keys: Iterable[str]) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._remove_sync, list(keys))

    def _get_sync(self, key: str) -> Optional[str]:
        cursor = self._connection().cursor()
        try:
            result = cursor.execute(
                "SELECT payload FROM kv_store WHERE storage_key = ?", [key]
            ).fetchone()
            return result[0] if result else None
        finally:
            cursor.close()

    def _set_sync(self, key: str, value: str) -> None:
        cursor = self._connection().cursor()
        try:
            # Use UPSERT pattern for DuckDB
            cursor.execute("""
                INSERT INTO kv_store (storage_key, payload, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT (storage_key) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
            """, [key, value])
            logger.debug(f"Saved '{key}' ({len(value)} chars)")
        finally:
            cursor.close()

    def _remove_sync(self, keys: List[str]) -> None:
        if not keys:
            return
        cursor = self._connection().cursor()
        try:
            placeholders = ", ".join("?" for _ in keys)
            cursor.execute(f"DELETE FROM kv_store WHERE storage_key IN ({placeholders})", keys)
        finally:
            cursor.close()

    def close(self) -> None:
        """Close the database connection."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logger.info(f"Key-value database closed: {self.db_path}")
