"""Notification domain models."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from campus.domain.common.types import generate_id, utcnow


class NotificationType(str, Enum):
    """Notification type."""
    ANNOUNCEMENT = "announcement"
    EVENT = "event"
    SYSTEM = "system"


class Notification(BaseModel):
    """One recipient's copy of a notification."""

    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType
    related_id: Optional[str] = None  # announcement/event id, for UI linking only
    is_read: bool = False
    timestamp: datetime
    category: Optional[str] = None
    author_name: Optional[str] = None
    author_photo_url: Optional[str] = None

    @classmethod
    def create(
        cls,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        related_id: Optional[str] = None,
        category: Optional[str] = None,
        author_name: Optional[str] = None,
        author_photo_url: Optional[str] = None,
    ) -> "Notification":
        """Create a new unread notification."""
        return cls(
            id=generate_id(),
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            related_id=related_id,
            is_read=False,
            timestamp=utcnow(),
            category=category,
            author_name=author_name,
            author_photo_url=author_photo_url,
        )


class NotificationSummary(BaseModel):
    """Inbox badge data."""

    total: int
    unread: int
    recent: list[Notification] = Field(default_factory=list)
