"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (key-value persistence).
"""

# Persistence
from buyway.shared.infrastructure.persistence.backing import KeyValueBacking, MemoryKeyValueStore
from buyway.shared.infrastructure.persistence.duckdb_backing import DuckDBKeyValueStore
from buyway.shared.infrastructure.persistence.write_queue import PersistenceQueue

__all__ = [
    # Persistence
    "KeyValueBacking",
    "MemoryKeyValueStore",
    "DuckDBKeyValueStore",
    "PersistenceQueue",
]
