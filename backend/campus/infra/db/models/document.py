"""Document database model."""
import time
from datetime import datetime, timezone

from sqlalchemy import JSON, BigInteger, Column, DateTime, Index, String
from sqlalchemy.dialects.postgresql import JSONB

from campus.infra.db.base import Base


_last_seq = 0


def _next_seq() -> int:
    """Strictly increasing within a process, close to wall-clock ns across processes."""
    global _last_seq
    _last_seq = max(time.time_ns(), _last_seq + 1)
    return _last_seq


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentModel(Base):
    """One JSON document in a named collection (roles, announcements, notifications, ...)."""

    __tablename__ = "documents"

    collection = Column(String, primary_key=True)
    id = Column(String, primary_key=True)
    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    seq = Column(BigInteger, nullable=False, default=_next_seq)  # insertion order
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (Index("ix_documents_collection_seq", "collection", "seq"),)
