"""Database models."""
from campus.infra.db.models.document import DocumentModel

__all__ = ["DocumentModel"]
