"""Notification inbox: the owning user's view of their notification rows."""
from typing import Optional, Protocol

from campus.domain.common.errors import NotFoundError
from campus.domain.notifications.models import Notification, NotificationSummary, NotificationType


class NotificationRepository(Protocol):
    """Notification repository protocol. Every read/write is scoped to user_id."""

    async def create(self, notification: Notification) -> Notification:
        """Persist one notification row."""
        ...

    async def list_by_user(
        self, user_id: str, limit: Optional[int] = None, type: Optional[NotificationType] = None
    ) -> list[Notification]:
        """List a user's notifications, newest first."""
        ...

    async def count_unread(self, user_id: str) -> int:
        """Count unread notifications for a user."""
        ...

    async def get(self, notification_id: str, user_id: str) -> Optional[Notification]:
        """Get a notification if it belongs to the user."""
        ...

    async def mark_read(self, notification_id: str, user_id: str) -> bool:
        """Mark one notification read; False if missing or not owned."""
        ...

    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification read; returns count updated."""
        ...

    async def delete_for_user(self, notification_id: str, user_id: str) -> bool:
        """Delete a notification if it belongs to the user."""
        ...


class NotificationInbox:
    """Per-user notification operations."""

    def __init__(self, repo: NotificationRepository, recent_count: int = 5):
        self.repo = repo
        self.recent_count = recent_count

    async def list_notifications(
        self, user_id: str, limit: Optional[int] = None, type: Optional[NotificationType] = None
    ) -> list[Notification]:
        return await self.repo.list_by_user(user_id, limit=limit, type=type)

    async def unread_count(self, user_id: str) -> int:
        return await self.repo.count_unread(user_id)

    async def summary(self, user_id: str) -> NotificationSummary:
        """Totals plus the most recent notifications."""
        notifications = await self.repo.list_by_user(user_id)
        return NotificationSummary(
            total=len(notifications),
            unread=sum(1 for n in notifications if not n.is_read),
            recent=notifications[: self.recent_count],
        )

    async def mark_read(self, user_id: str, notification_id: str) -> None:
        if not await self.repo.mark_read(notification_id, user_id):
            raise NotFoundError("Notification", notification_id)

    async def mark_all_read(self, user_id: str) -> int:
        return await self.repo.mark_all_read(user_id)

    async def delete(self, user_id: str, notification_id: str) -> None:
        if not await self.repo.delete_for_user(notification_id, user_id):
            raise NotFoundError("Notification", notification_id)

    async def notify_system(self, user_id: str, title: str, message: str) -> Notification:
        """Single system notification (e.g. a welcome message)."""
        notification = Notification.create(
            user_id=user_id,
            type=NotificationType.SYSTEM,
            title=title,
            message=message,
            category="System",
        )
        return await self.repo.create(notification)
