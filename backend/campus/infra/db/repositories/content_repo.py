"""Announcement and event repository implementation."""
from typing import Generic, Optional, TypeVar

from campus.domain.common.store import ANNOUNCEMENTS, EVENTS, DocumentStore
from campus.domain.content.models import Announcement, Event, TargetableContent

C = TypeVar("C", bound=TargetableContent)


class ContentRepositoryImpl(Generic[C]):
    """Targetable content stored in one collection."""

    def __init__(self, store: DocumentStore, collection: str, model: type[C]):
        self.store = store
        self.collection = collection
        self.model = model

    async def create(self, item: C) -> C:
        await self.store.create(self.collection, item.model_dump(mode="json"))
        return item

    async def get_by_id(self, item_id: str) -> Optional[C]:
        doc = await self.store.get(self.collection, item_id)
        return self.model.model_validate(doc) if doc else None

    async def list_all(self) -> list[C]:
        return [self.model.model_validate(doc) for doc in await self.store.query(self.collection)]

    async def update(self, item_id: str, values: dict) -> Optional[C]:
        if not await self.store.update(self.collection, item_id, values):
            return None
        return await self.get_by_id(item_id)

    async def delete(self, item_id: str) -> bool:
        return await self.store.delete(self.collection, item_id)


def announcement_repository(store: DocumentStore) -> ContentRepositoryImpl[Announcement]:
    return ContentRepositoryImpl(store, ANNOUNCEMENTS, Announcement)


def event_repository(store: DocumentStore) -> ContentRepositoryImpl[Event]:
    return ContentRepositoryImpl(store, EVENTS, Event)
