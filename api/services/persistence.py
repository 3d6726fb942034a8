"""
JSON persistence over a durable key-value store.

Datetimes are written as ISO-8601 strings. On load, values under the keys
``timestamp`` and ``lastModified`` are revived to timezone-aware datetimes at
any nesting depth.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel

from infra.storage.store import KeyValueStore
from api.utils.logger import configure_logging

logger = configure_logging()

SESSIONS_KEY = "curriculum_architect_v2"
SETTINGS_KEY = "curriculum_architect_settings"
USERS_KEY = "curriculum_architect_users"
CURRENT_USER_KEY = "curriculum_architect_current_user"

DATE_FIELDS = frozenset({"timestamp", "lastModified"})


class PersistenceError(Exception):
    """A stored blob exists but cannot be decoded."""

    def __init__(self, key: str, detail: str):
        super().__init__(f"cannot decode {key}: {detail}")
        self.key = key
        self.detail = detail


def _encode_default(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _parse_date(value: str) -> Any:
    # JavaScript-style trailing Z is accepted alongside +00:00.
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _revive_dates(obj: dict) -> dict:
    for key in DATE_FIELDS:
        value = obj.get(key)
        if isinstance(value, str):
            obj[key] = _parse_date(value)
    return obj


def encode(value: Any) -> str:
    return json.dumps(value, default=_encode_default, ensure_ascii=False)


def decode(raw: str) -> Any:
    return json.loads(raw, object_hook=_revive_dates)


class PersistenceAdapter:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, key: str, value: Any) -> None:
        self.store.set(key, encode(value))

    def load(self, key: str) -> Optional[Any]:
        """Return the decoded value, or None when the key is absent."""
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return decode(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise PersistenceError(key, str(e)) from e

    def load_or_default(self, key: str, default: Any = None) -> Any:
        """Like load, but corrupt blobs are logged and read as ``default``."""
        try:
            value = self.load(key)
        except PersistenceError as e:
            logger.error("storage load error key=%s detail=%s", e.key, e.detail)
            return default
        return default if value is None else value

    def remove(self, key: str) -> None:
        self.store.remove(key)
