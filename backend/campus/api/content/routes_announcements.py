"""Announcement API routes."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from campus.api.deps import get_announcement_service, get_current_viewer, get_viewer_roles
from campus.domain.audience.resolver import filter_for_viewer
from campus.domain.auth.models import Viewer
from campus.domain.auth.policies import ensure_can_modify, ensure_can_pin, ensure_can_publish
from campus.domain.common.errors import NotFoundError
from campus.domain.content.models import Announcement, FileAttachment
from campus.domain.content.services import ContentService

router = APIRouter()


class AnnouncementCreateRequest(BaseModel):
    """Create announcement request."""
    title: str
    content: str
    category: Optional[str] = None
    author_name: Optional[str] = None
    author_photo_url: Optional[str] = None
    attachments: List[FileAttachment] = []
    is_public: bool = True
    target_roles: List[str] = []
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class AnnouncementUpdateRequest(BaseModel):
    """Partial announcement update."""
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    attachments: Optional[List[FileAttachment]] = None
    is_public: Optional[bool] = None
    target_roles: Optional[List[str]] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


@router.get("", response_model=List[Announcement])
async def list_announcements(
    viewer: Viewer = Depends(get_current_viewer),
    viewer_roles: List[str] = Depends(get_viewer_roles),
    service: ContentService[Announcement] = Depends(get_announcement_service),
):
    """Announcements visible to the viewer, pinned first then newest first."""
    return await service.list_visible(viewer, viewer_roles)


@router.get("/{announcement_id}", response_model=Announcement)
async def get_announcement(
    announcement_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    viewer_roles: List[str] = Depends(get_viewer_roles),
    service: ContentService[Announcement] = Depends(get_announcement_service),
):
    item = await service.get(announcement_id)
    if not filter_for_viewer([item], viewer, viewer_roles):
        raise NotFoundError("Announcement", announcement_id)
    return item


@router.post("", response_model=Announcement, status_code=201)
async def create_announcement(
    request: AnnouncementCreateRequest,
    viewer: Viewer = Depends(get_current_viewer),
    service: ContentService[Announcement] = Depends(get_announcement_service),
):
    """Publish an announcement and notify its audience."""
    ensure_can_publish(viewer)
    data = request.model_dump()
    data.update(
        author_id=viewer.user_id,
        author_name=request.author_name or "Anonymous",
        role=viewer.role,
        is_pinned=False,
    )
    return await service.create(data)


@router.patch("/{announcement_id}", response_model=Announcement)
async def update_announcement(
    announcement_id: str,
    request: AnnouncementUpdateRequest,
    viewer: Viewer = Depends(get_current_viewer),
    service: ContentService[Announcement] = Depends(get_announcement_service),
):
    """Edit an announcement. Recipients are not notified again."""
    current = await service.get(announcement_id)
    ensure_can_modify(viewer, current.author_id)
    return await service.update(announcement_id, request.model_dump(exclude_unset=True))


@router.delete("/{announcement_id}")
async def delete_announcement(
    announcement_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    service: ContentService[Announcement] = Depends(get_announcement_service),
):
    current = await service.get(announcement_id)
    ensure_can_modify(viewer, current.author_id)
    await service.delete(announcement_id)
    return {"ok": True}


@router.post("/{announcement_id}/pin", response_model=Announcement)
async def toggle_announcement_pin(
    announcement_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    service: ContentService[Announcement] = Depends(get_announcement_service),
):
    """Pin or unpin an announcement (admin only)."""
    ensure_can_pin(viewer)
    return await service.toggle_pin(announcement_id)
