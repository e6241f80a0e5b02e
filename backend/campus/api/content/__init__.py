"""Announcement and event API routes."""
from fastapi import APIRouter

from campus.api.content import routes_announcements, routes_events

router = APIRouter()

router.include_router(routes_announcements.router, prefix="/announcements", tags=["announcements"])
router.include_router(routes_events.router, prefix="/events", tags=["events"])
