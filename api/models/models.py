from api.config import Base
from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageEntry(Base):
    """One durable key-value blob (sessions, settings, current user, credential list)."""
    __tablename__ = "storage_entries"
    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
