"""
Notification fan-out: one content-creation event becomes one inbox row per recipient.

Call this once per created announcement or event. Rows are copies (one per
user, never shared) and carry relatedId only for UI linking. Replaying a
fan-out duplicates rows: there is no (contentId, userId) dedup key.
"""
import logging
from typing import Iterable

from campus.domain.audience.resolver import resolve_recipients
from campus.domain.content.models import Announcement, ContentKind, Event, TargetableContent
from campus.domain.notifications.models import Notification, NotificationType
from campus.domain.notifications.services import NotificationRepository
from campus.domain.roles.models import UserNotificationPreferences

logger = logging.getLogger(__name__)

_TITLES = {
    ContentKind.ANNOUNCEMENT: "New Announcement",
    ContentKind.EVENT: "New Event",
}


def build_notification(content: TargetableContent, user_id: str) -> Notification:
    """Notification row for one recipient of content."""
    kind = content.kind
    category = None
    author_name = None
    author_photo_url = None
    if isinstance(content, Announcement):
        category = content.category
        author_name = content.author_name
        author_photo_url = content.author_photo_url
    elif isinstance(content, Event):
        category = content.type
        author_name = content.organizer
    return Notification.create(
        user_id=user_id,
        type=NotificationType(kind.value),
        title=_TITLES[kind],
        message=content.title,
        related_id=content.id,
        category=category,
        author_name=author_name,
        author_photo_url=author_photo_url,
    )


class NotificationFanOut:
    """Writes per-recipient notification rows for new content."""

    def __init__(self, repo: NotificationRepository):
        self.repo = repo

    async def fan_out(
        self,
        content: TargetableContent,
        all_preferences: Iterable[UserNotificationPreferences],
    ) -> int:
        """
        Resolve recipients and create exactly one unread notification each.

        Args:
            content: The freshly persisted announcement or event (its id becomes relatedId).
            all_preferences: Every user's notification preferences.

        Returns:
            Number of notifications created.
        """
        recipients = resolve_recipients(content, all_preferences)
        for user_id in sorted(recipients):
            await self.repo.create(build_notification(content, user_id))
        logger.info(
            "Fan-out for %s %s: %d recipient(s)", content.kind.value, content.id, len(recipients)
        )
        return len(recipients)
