from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import sessionmaker

from api.models.models import StorageEntry
from infra.storage.store import KeyValueStore


class SqlKeyValueStore(KeyValueStore):
    """
    KeyValueStore over the `storage_entries` table.

    Each call opens and commits its own short-lived DB session, so writes are
    durable as soon as ``set`` returns.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self._session_factory()
        try:
            entry = db.get(StorageEntry, key)
            return entry.value if entry else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self._session_factory()
        try:
            entry = db.get(StorageEntry, key)
            if entry is None:
                db.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def remove(self, key: str) -> None:
        db = self._session_factory()
        try:
            entry = db.get(StorageEntry, key)
            if entry is not None:
                db.delete(entry)
                db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
