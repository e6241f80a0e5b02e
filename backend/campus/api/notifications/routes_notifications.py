"""Notification inbox API routes. Every route acts on the current user's rows only."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from campus.api.deps import get_current_viewer, get_inbox
from campus.domain.auth.models import Viewer
from campus.domain.common.errors import AuthorizationError
from campus.domain.notifications.models import Notification, NotificationType
from campus.domain.notifications.services import NotificationInbox
from campus.settings import settings

router = APIRouter()


class NotificationResponse(BaseModel):
    """Notification response."""
    id: str
    type: NotificationType
    title: str
    message: str
    related_id: Optional[str] = None
    category: Optional[str] = None
    author_name: Optional[str] = None
    author_photo_url: Optional[str] = None
    read: bool
    timestamp: int  # ms since epoch for client compatibility

    @classmethod
    def from_domain(cls, n: Notification) -> "NotificationResponse":
        return cls(
            id=n.id,
            type=n.type,
            title=n.title,
            message=n.message,
            related_id=n.related_id,
            category=n.category,
            author_name=n.author_name,
            author_photo_url=n.author_photo_url,
            read=n.is_read,
            timestamp=int(n.timestamp.timestamp() * 1000),
        )


class NotificationSummaryResponse(BaseModel):
    """Inbox badge summary."""
    total: int
    unread: int
    recent: List[NotificationResponse]


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    limit: Optional[int] = None,
    type: Optional[NotificationType] = None,
    viewer: Viewer = Depends(get_current_viewer),
    inbox: NotificationInbox = Depends(get_inbox),
):
    """List notifications for the current user, newest first. Optional filter by type."""
    if limit is None or limit < 1 or limit > settings.notification_list_max:
        limit = settings.notification_list_limit
    items = await inbox.list_notifications(viewer.user_id, limit=limit, type=type)
    return [NotificationResponse.from_domain(n) for n in items]


@router.get("/unread-count")
async def get_unread_count(
    viewer: Viewer = Depends(get_current_viewer),
    inbox: NotificationInbox = Depends(get_inbox),
):
    """Return unread notification count for the current user."""
    return {"unread": await inbox.unread_count(viewer.user_id)}


@router.get("/summary", response_model=NotificationSummaryResponse)
async def get_summary(
    viewer: Viewer = Depends(get_current_viewer),
    inbox: NotificationInbox = Depends(get_inbox),
):
    summary = await inbox.summary(viewer.user_id)
    return NotificationSummaryResponse(
        total=summary.total,
        unread=summary.unread,
        recent=[NotificationResponse.from_domain(n) for n in summary.recent],
    )


@router.patch("/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    inbox: NotificationInbox = Depends(get_inbox),
):
    """Mark a notification as read."""
    await inbox.mark_read(viewer.user_id, notification_id)
    return {"ok": True}


@router.post("/read-all")
async def mark_all_notifications_read(
    viewer: Viewer = Depends(get_current_viewer),
    inbox: NotificationInbox = Depends(get_inbox),
):
    """Mark all notifications as read for the current user."""
    count = await inbox.mark_all_read(viewer.user_id)
    return {"ok": True, "updated": count}


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    inbox: NotificationInbox = Depends(get_inbox),
):
    """Delete a notification for the current user (e.g. after swipe-to-dismiss)."""
    await inbox.delete(viewer.user_id, notification_id)
    return {"ok": True}


class SystemNotificationRequest(BaseModel):
    """Send a system notification to one user (admin only)."""
    user_id: str
    title: str
    message: str


@router.post("/system", response_model=NotificationResponse, status_code=201)
async def send_system_notification(
    request: SystemNotificationRequest,
    viewer: Viewer = Depends(get_current_viewer),
    inbox: NotificationInbox = Depends(get_inbox),
):
    if not viewer.is_admin:
        raise AuthorizationError("Only admins can send system notifications")
    notification = await inbox.notify_system(request.user_id, request.title, request.message)
    return NotificationResponse.from_domain(notification)
