"""Role and preference API routes."""
from fastapi import APIRouter

from campus.api.roles import routes_preferences, routes_roles

router = APIRouter()

router.include_router(routes_roles.router, prefix="/roles", tags=["roles"])
router.include_router(routes_preferences.router, prefix="/preferences", tags=["preferences"])
