"""Notification preference API routes (current user only)."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from campus.api.deps import get_current_viewer, get_preferences_service
from campus.domain.auth.models import Viewer
from campus.domain.roles.models import UserNotificationPreferences
from campus.domain.roles.services import NotificationPreferencesService

router = APIRouter()


class PreferencesUpdateRequest(BaseModel):
    """Update preferences request."""
    subscribed_roles: Optional[List[str]] = None
    allow_all_announcements: Optional[bool] = None


@router.get("/me", response_model=UserNotificationPreferences)
async def get_my_preferences(
    viewer: Viewer = Depends(get_current_viewer),
    preferences: NotificationPreferencesService = Depends(get_preferences_service),
):
    """Current user's preferences; created with defaults on first access."""
    return await preferences.get_preferences(viewer.user_id)


@router.put("/me", response_model=UserNotificationPreferences)
async def update_my_preferences(
    request: PreferencesUpdateRequest,
    viewer: Viewer = Depends(get_current_viewer),
    preferences: NotificationPreferencesService = Depends(get_preferences_service),
):
    return await preferences.update_preferences(
        viewer.user_id,
        subscribed_roles=request.subscribed_roles,
        allow_all_announcements=request.allow_all_announcements,
    )
