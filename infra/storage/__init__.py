"""
Durable key-value store adapters.

- `infra.storage.store.KeyValueStore`: the contract
- `infra.storage.sql_store.SqlKeyValueStore`: SQLAlchemy-backed (production)
- `infra.storage.memory_store.InMemoryKeyValueStore`: dict-backed (tests, scratch runs)
"""

from infra.storage.store import KeyValueStore
from infra.storage.memory_store import InMemoryKeyValueStore
from infra.storage.sql_store import SqlKeyValueStore

__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "SqlKeyValueStore"]
