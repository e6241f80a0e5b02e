"""Announcement and event domain models."""
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, Field

from campus.domain.auth.models import UserRole


class ContentKind(str, Enum):
    """Kind of targetable content; doubles as the notification type."""
    ANNOUNCEMENT = "announcement"
    EVENT = "event"


class AttachmentType(str, Enum):
    """Attachment media type."""
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"


class FileAttachment(BaseModel):
    """File stored in the blob store; url is opaque here."""

    id: str
    name: str
    type: AttachmentType
    url: str
    size: int
    uploaded_at: datetime
    uploaded_by: str


class TargetableContent(BaseModel):
    """Shared shape of announcements and events."""

    kind: ClassVar[ContentKind]

    id: str
    is_public: bool = True
    target_roles: list[str] = Field(default_factory=list)
    attachments: list[FileAttachment] = Field(default_factory=list)
    timestamp: datetime
    title: str


class Announcement(TargetableContent):
    """Announcement posted by a teacher or admin."""

    kind: ClassVar[ContentKind] = ContentKind.ANNOUNCEMENT

    content: str
    author_id: str
    author_name: str
    author_photo_url: Optional[str] = None
    is_pinned: bool = False
    category: Optional[str] = None
    role: UserRole
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class Event(TargetableContent):
    """Calendar event."""

    kind: ClassVar[ContentKind] = ContentKind.EVENT

    description: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: str
    type: str
    organizer: str
    attendees: Optional[int] = None
    created_by: str

    @property
    def author_id(self) -> str:
        return self.created_by


def announcement_sort_key(item: Announcement) -> tuple:
    """Pinned first, then newest first."""
    return (not item.is_pinned, -item.timestamp.timestamp())


def event_sort_key(item: Event) -> tuple:
    """Soonest start first; undated events last."""
    if item.start_time is None:
        return (1, 0.0)
    return (0, item.start_time.timestamp())
