"""Event API routes."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from campus.api.deps import get_current_viewer, get_event_service, get_viewer_roles
from campus.domain.audience.resolver import filter_for_viewer
from campus.domain.auth.models import Viewer
from campus.domain.auth.policies import ensure_can_modify, ensure_can_publish
from campus.domain.common.errors import NotFoundError
from campus.domain.content.models import Event, FileAttachment
from campus.domain.content.services import ContentService

router = APIRouter()


class EventCreateRequest(BaseModel):
    """Create event request."""
    title: str
    description: str
    location: str
    type: str
    organizer: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    attendees: Optional[int] = None
    attachments: List[FileAttachment] = []
    is_public: bool = True
    target_roles: List[str] = []


class EventUpdateRequest(BaseModel):
    """Partial event update."""
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    organizer: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    attendees: Optional[int] = None
    attachments: Optional[List[FileAttachment]] = None
    is_public: Optional[bool] = None
    target_roles: Optional[List[str]] = None


@router.get("", response_model=List[Event])
async def list_events(
    viewer: Viewer = Depends(get_current_viewer),
    viewer_roles: List[str] = Depends(get_viewer_roles),
    service: ContentService[Event] = Depends(get_event_service),
):
    """Events visible to the viewer, soonest first."""
    return await service.list_visible(viewer, viewer_roles)


@router.get("/{event_id}", response_model=Event)
async def get_event(
    event_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    viewer_roles: List[str] = Depends(get_viewer_roles),
    service: ContentService[Event] = Depends(get_event_service),
):
    item = await service.get(event_id)
    if not filter_for_viewer([item], viewer, viewer_roles):
        raise NotFoundError("Event", event_id)
    return item


@router.post("", response_model=Event, status_code=201)
async def create_event(
    request: EventCreateRequest,
    viewer: Viewer = Depends(get_current_viewer),
    service: ContentService[Event] = Depends(get_event_service),
):
    ensure_can_publish(viewer)
    data = request.model_dump()
    data["created_by"] = viewer.user_id
    return await service.create(data)


@router.patch("/{event_id}", response_model=Event)
async def update_event(
    event_id: str,
    request: EventUpdateRequest,
    viewer: Viewer = Depends(get_current_viewer),
    service: ContentService[Event] = Depends(get_event_service),
):
    current = await service.get(event_id)
    ensure_can_modify(viewer, current.author_id)
    return await service.update(event_id, request.model_dump(exclude_unset=True))


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    service: ContentService[Event] = Depends(get_event_service),
):
    current = await service.get(event_id)
    ensure_can_modify(viewer, current.author_id)
    await service.delete(event_id)
    return {"ok": True}
