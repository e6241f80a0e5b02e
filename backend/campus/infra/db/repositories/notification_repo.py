"""Notification repository."""
from typing import Optional

from campus.domain.common.store import NOTIFICATIONS, DocumentStore, field_equals
from campus.domain.notifications.models import Notification, NotificationType
from campus.domain.notifications.services import NotificationRepository


class NotificationRepositoryImpl(NotificationRepository):
    """Notification rows in ``notifications``; every query filters on user_id."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def _owned(self, user_id: str) -> list[Notification]:
        docs = await self.store.query(NOTIFICATIONS, field_equals("user_id", user_id))
        return [Notification.model_validate(doc) for doc in docs]

    async def create(self, notification: Notification) -> Notification:
        """Create a notification."""
        await self.store.create(NOTIFICATIONS, notification.model_dump(mode="json"))
        return notification

    async def list_by_user(
        self, user_id: str, limit: Optional[int] = None, type: Optional[NotificationType] = None
    ) -> list[Notification]:
        """List notifications for a user, newest first. Optional filter by type."""
        items = await self._owned(user_id)
        if type is not None:
            items = [n for n in items if n.type == type]
        items.sort(key=lambda n: n.timestamp, reverse=True)
        return items[:limit] if limit is not None else items

    async def count_unread(self, user_id: str) -> int:
        """Count unread notifications for a user."""
        return sum(1 for n in await self._owned(user_id) if not n.is_read)

    async def get(self, notification_id: str, user_id: str) -> Optional[Notification]:
        """Get a notification by ID if it belongs to the user."""
        doc = await self.store.get(NOTIFICATIONS, notification_id)
        if not doc or doc.get("user_id") != user_id:
            return None
        return Notification.model_validate(doc)

    async def mark_read(self, notification_id: str, user_id: str) -> bool:
        """Mark a notification as read. Returns True if found and updated."""
        if await self.get(notification_id, user_id) is None:
            return False
        return await self.store.update(NOTIFICATIONS, notification_id, {"is_read": True})

    async def mark_all_read(self, user_id: str) -> int:
        """Mark all unread notifications as read for a user. Returns count updated."""
        updated = 0
        for n in await self._owned(user_id):
            if not n.is_read and await self.store.update(NOTIFICATIONS, n.id, {"is_read": True}):
                updated += 1
        return updated

    async def delete_for_user(self, notification_id: str, user_id: str) -> bool:
        """Delete a notification if it belongs to the user. Returns True if deleted."""
        if await self.get(notification_id, user_id) is None:
            return False
        return await self.store.delete(NOTIFICATIONS, notification_id)
