"""Persistence collaborator contract.

Every entity is persisted as an opaque JSON document keyed by ``id`` inside a
named collection. Implementations guarantee per-document atomic
read-modify-write for ``update`` and nothing across documents.
"""
from typing import Any, Callable, Optional, Protocol

Document = dict[str, Any]
Predicate = Callable[[Document], bool]

ROLES = "roles"
USER_PREFERENCES = "userPreferences"
ANNOUNCEMENTS = "announcements"
EVENTS = "events"
NOTIFICATIONS = "notifications"


class DocumentStore(Protocol):
    """Document store protocol."""

    async def create(self, collection: str, doc: Document) -> str:
        """Insert a document and return its id (taken from doc['id'] when present)."""
        ...

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Get a document by id."""
        ...

    async def update(self, collection: str, doc_id: str, patch: Document) -> bool:
        """Shallow-merge patch into a document. Returns False if it does not exist."""
        ...

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns False if it does not exist."""
        ...

    async def query(self, collection: str, predicate: Optional[Predicate] = None) -> list[Document]:
        """List documents in insertion order, optionally filtered."""
        ...


def field_equals(field: str, value: Any) -> Predicate:
    """Predicate matching documents whose top-level field equals value."""
    return lambda doc: doc.get(field) == value
