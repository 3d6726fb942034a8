"""
API data models. Single import surface for DB entities.

DB entities (api.models.models):
- StorageEntry: key-value rows backing the durable store
"""

from api.models.models import StorageEntry

__all__ = [
    "StorageEntry",
]
