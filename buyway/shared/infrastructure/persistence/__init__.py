"""Persistence adapters."""

from .backing import KeyValueBacking, MemoryKeyValueStore
from .duckdb_backing import DuckDBKeyValueStore
from .write_queue import PersistenceQueue

__all__ = ["KeyValueBacking", "MemoryKeyValueStore", "DuckDBKeyValueStore", "PersistenceQueue"]
