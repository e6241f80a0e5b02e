"""API dependencies."""
from typing import AsyncIterator, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.auth.models import UserRole, Viewer
from campus.domain.common.store import DocumentStore
from campus.domain.content.models import Announcement, Event, announcement_sort_key, event_sort_key
from campus.domain.content.services import ContentService
from campus.domain.notifications.services import NotificationInbox
from campus.domain.roles.services import NotificationPreferencesService, RoleRegistry
from campus.infra.db.base import get_sessionmaker
from campus.infra.db.document_store import SqlDocumentStore
from campus.infra.db.repositories.content_repo import announcement_repository, event_repository
from campus.infra.db.repositories.notification_repo import NotificationRepositoryImpl
from campus.infra.db.repositories.preferences_repo import PreferencesRepositoryImpl
from campus.infra.db.repositories.role_repo import RoleRepositoryImpl
from campus.services.notification_service import NotificationFanOut
from campus.settings import settings


async def get_db() -> AsyncIterator[AsyncSession]:
    """One session per request."""
    async with get_sessionmaker()() as session:
        yield session


def get_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    return SqlDocumentStore(db)


async def get_current_viewer(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Viewer:
    """Viewer identity forwarded by the upstream auth gateway; the role is trusted as-is."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
    )
    if not x_user_id or not x_user_role:
        raise credentials_exception
    try:
        role = UserRole(x_user_role.strip().lower())
    except ValueError:
        raise credentials_exception
    return Viewer(user_id=x_user_id.strip(), role=role)


def get_role_registry(store: DocumentStore = Depends(get_store)) -> RoleRegistry:
    return RoleRegistry(RoleRepositoryImpl(store), PreferencesRepositoryImpl(store))


def get_preferences_service(store: DocumentStore = Depends(get_store)) -> NotificationPreferencesService:
    return NotificationPreferencesService(PreferencesRepositoryImpl(store), RoleRepositoryImpl(store))


def get_inbox(store: DocumentStore = Depends(get_store)) -> NotificationInbox:
    return NotificationInbox(
        NotificationRepositoryImpl(store),
        recent_count=settings.notification_summary_recent,
    )


def _content_service(store: DocumentStore, model, repo, sort_key) -> ContentService:
    return ContentService(
        model=model,
        repo=repo,
        role_repo=RoleRepositoryImpl(store),
        preferences=NotificationPreferencesService(PreferencesRepositoryImpl(store), RoleRepositoryImpl(store)),
        fan_out=NotificationFanOut(NotificationRepositoryImpl(store)),
        sort_key=sort_key,
    )


def get_announcement_service(store: DocumentStore = Depends(get_store)) -> ContentService[Announcement]:
    return _content_service(store, Announcement, announcement_repository(store), announcement_sort_key)


def get_event_service(store: DocumentStore = Depends(get_store)) -> ContentService[Event]:
    return _content_service(store, Event, event_repository(store), event_sort_key)


async def get_viewer_roles(
    viewer: Viewer = Depends(get_current_viewer),
    preferences: NotificationPreferencesService = Depends(get_preferences_service),
) -> list[str]:
    """Roles the viewer is subscribed to; used for visibility filtering."""
    prefs = await preferences.get_preferences(viewer.user_id)
    return prefs.subscribed_roles
