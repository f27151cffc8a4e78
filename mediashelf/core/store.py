"""
Store - owns the canonical ordered collection of MediaItem and persists it
under a single key.
"""

import json
import sqlite3
import threading
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Sequence

from .config import get_collection_key
from .db import get_db, init_db
from .schema import MediaItem
from ..util.logging import logger

Transform = Callable[[List[MediaItem]], Sequence[MediaItem]]


class StoreError(Exception):
    """Raised when the collection cannot be read or written."""
    pass


class Store(ABC):
    """Ordered collection persisted under a fixed key.

    ``update`` holds the store lock across read, transform and write, so
    concurrent in-process callers never lose each other's changes.
    """

    def __init__(self, key: Optional[str] = None):
        self.key = key or get_collection_key()
        self._lock = threading.RLock()

    @abstractmethod
    def _load(self) -> List[MediaItem]:
        pass

    @abstractmethod
    def _save(self, items: List[MediaItem]) -> None:
        pass

    def read(self) -> List[MediaItem]:
        """Return the persisted sequence; empty when nothing was ever written."""
        with self._lock:
            return self._load()

    def write(self, items: Iterable[MediaItem]) -> None:
        """Replace the persisted sequence wholesale."""
        items = list(items)
        with self._lock:
            self._save(items)
        logger.log_store_operation("write", self.key, item_count=len(items))

    def update(self, transform: Transform) -> List[MediaItem]:
        """Apply ``transform`` to the freshest value and persist the result."""
        with self._lock:
            result = list(transform(self._load()))
            self._save(result)
        logger.log_store_operation("update", self.key, item_count=len(result))
        return result


class InMemoryStore(Store):
    """Process-local store, used for tests and throwaway sessions."""

    def __init__(self, items: Iterable[MediaItem] = (), key: Optional[str] = None):
        super().__init__(key)
        self._items = tuple(items)

    def _load(self) -> List[MediaItem]:
        return list(self._items)

    def _save(self, items: List[MediaItem]) -> None:
        self._items = tuple(items)


class SQLiteStore(Store):
    """Durable store: the collection is a JSON array in one row of the kv table."""

    def __init__(self, key: Optional[str] = None, db_path: Optional[str] = None):
        super().__init__(key)
        self.db_path = db_path
        try:
            init_db(db_path)
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize store database: {e}")
            raise StoreError(f"Storage unavailable: {e}") from e

    def _load(self) -> List[MediaItem]:
        try:
            with get_db(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT value FROM kv WHERE key = ?", (self.key,))
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.log_store_operation("read", self.key, status="failed")
            raise StoreError(f"Failed to read collection '{self.key}': {e}") from e

        if row is None:
            return []

        try:
            records = json.loads(row[0])
            if not isinstance(records, list):
                raise ValueError(f"expected a list, got {type(records).__name__}")
            return [MediaItem.from_dict(record) for record in records]
        except (ValueError, KeyError, TypeError) as e:
            logger.log_store_operation("read", self.key, status="failed")
            raise StoreError(f"Corrupt collection '{self.key}': {e}") from e

    def _save(self, items: List[MediaItem]) -> None:
        payload = json.dumps([item.to_dict() for item in items], ensure_ascii=False)
        try:
            with get_db(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
                    (self.key, payload)
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.log_store_operation("write", self.key, item_count=len(items), status="failed")
            raise StoreError(f"Failed to write collection '{self.key}': {e}") from e
