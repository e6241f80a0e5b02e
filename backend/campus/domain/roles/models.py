"""Notification role domain models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campus.domain.common.types import generate_id, utcnow

SYSTEM_USER = "system"
DEFAULT_SUBSCRIBED_ROLES = ("general",)
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class Role(BaseModel):
    """Audience segment that content can be targeted to."""

    id: str
    name: str
    description: str
    color: str  # "#RRGGBB"
    is_default: bool = False
    created_at: datetime
    created_by: str

    @classmethod
    def create(cls, name: str, description: str, color: str, created_by: str) -> "Role":
        """Create a new custom role."""
        return cls(
            id=generate_id(),
            name=name,
            description=description,
            color=color,
            is_default=False,
            created_at=utcnow(),
            created_by=created_by,
        )


class RoleUpdate(BaseModel):
    """Partial role update. id, is_default and creation fields are never patchable."""

    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class UserNotificationPreferences(BaseModel):
    """Per-user role subscriptions (1:1 with user)."""

    user_id: str
    subscribed_roles: list[str] = Field(default_factory=list)
    allow_all_announcements: bool = True
    updated_at: datetime

    @classmethod
    def default_for(cls, user_id: str) -> "UserNotificationPreferences":
        """Preferences a user starts with on first access."""
        return cls(
            user_id=user_id,
            subscribed_roles=list(DEFAULT_SUBSCRIBED_ROLES),
            allow_all_announcements=True,
            updated_at=utcnow(),
        )


def _default_role(role_id: str, name: str, description: str, color: str) -> dict:
    return {
        "id": role_id,
        "name": name,
        "description": description,
        "color": color,
        "is_default": True,
        "created_by": SYSTEM_USER,
    }


# Seeded at startup; ids and names are permanent.
DEFAULT_ROLES: tuple[dict, ...] = (
    _default_role("hnd", "HND", "Higher National Diploma students", "#3B82F6"),
    _default_role("bachelor", "Bachelor Degree", "Bachelor degree students", "#10B981"),
    _default_role("masters", "Masters", "Masters degree students", "#8B5CF6"),
    _default_role("polytech", "Polytech", "Polytechnic students", "#F59E0B"),
    _default_role("general", "General", "General announcements for all students", "#6B7280"),
)
