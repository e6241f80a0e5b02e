"""Role registry and notification preference services."""
import logging
import re
from typing import Iterable, Optional, Protocol

from campus.domain.common.errors import ImmutableFieldError, NotFoundError, ValidationError
from campus.domain.common.types import utcnow
from campus.domain.roles.models import (
    DEFAULT_ROLES,
    HEX_COLOR_PATTERN,
    Role,
    RoleUpdate,
    UserNotificationPreferences,
)

logger = logging.getLogger(__name__)


class RoleRepository(Protocol):
    """Role repository protocol."""

    async def create(self, role: Role) -> Role:
        """Create a role."""
        ...

    async def get_by_id(self, role_id: str) -> Optional[Role]:
        """Get role by ID."""
        ...

    async def list_all(self) -> list[Role]:
        """List all roles in creation order."""
        ...

    async def update(self, role_id: str, values: dict) -> Optional[Role]:
        """Patch a role; None if it does not exist."""
        ...

    async def delete(self, role_id: str) -> bool:
        """Delete a role; False if it does not exist."""
        ...


class PreferencesRepository(Protocol):
    """User notification preferences repository protocol."""

    async def get(self, user_id: str) -> Optional[UserNotificationPreferences]:
        """Get preferences for a user."""
        ...

    async def save(self, prefs: UserNotificationPreferences) -> UserNotificationPreferences:
        """Create or replace preferences for a user."""
        ...

    async def list_all(self) -> list[UserNotificationPreferences]:
        """List every stored preference record."""
        ...

    async def list_subscribed_to(self, role_id: str) -> list[UserNotificationPreferences]:
        """List preference records that reference a role."""
        ...


def _require_text(value: Optional[str], field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"Role {field} is required")
    return text


def _require_color(value: Optional[str]) -> str:
    color = (value or "").strip()
    if not re.fullmatch(HEX_COLOR_PATTERN, color):
        raise ValidationError(f"Role color must be a hex value like #3B82F6, got {value!r}")
    return color


class RoleRegistry:
    """Owns the set of notification roles (default + admin-created)."""

    def __init__(self, role_repo: RoleRepository, preferences_repo: PreferencesRepository):
        self.role_repo = role_repo
        self.preferences_repo = preferences_repo

    async def list_roles(self) -> list[Role]:
        """All roles, default and custom."""
        return await self.role_repo.list_all()

    async def get_role(self, role_id: str) -> Role:
        """Get role by ID."""
        role = await self.role_repo.get_by_id(role_id)
        if not role:
            raise NotFoundError("Role", role_id)
        return role

    async def create_role(self, name: str, description: str, color: str, created_by: str) -> Role:
        """Create a custom (deletable) role."""
        role = Role.create(
            name=_require_text(name, "name"),
            description=_require_text(description, "description"),
            color=_require_color(color),
            created_by=created_by,
        )
        created = await self.role_repo.create(role)
        logger.info("Role created: id=%s name=%r by=%s", created.id, created.name, created_by)
        return created

    async def update_role(self, role_id: str, patch: RoleUpdate) -> Role:
        """Apply a partial update. Default roles keep their name."""
        role = await self.get_role(role_id)
        values: dict = {}
        if patch.name is not None:
            name = patch.name.strip()
            if name != role.name:
                if role.is_default:
                    raise ImmutableFieldError("Role", "name", "Cannot modify default role names")
                values["name"] = _require_text(name, "name")
        if patch.description is not None:
            values["description"] = _require_text(patch.description, "description")
        if patch.color is not None:
            values["color"] = _require_color(patch.color)
        if not values:
            return role
        updated = await self.role_repo.update(role_id, values)
        if updated is None:
            raise NotFoundError("Role", role_id)
        return updated

    async def delete_role(self, role_id: str) -> int:
        """Delete a custom role, then strip it from every subscription.

        The store has no multi-document transactions: the role document is
        removed first and the preference sweep follows. Until the sweep ends,
        some preferences may still reference the deleted id; running
        prune_role_references again completes an interrupted sweep.

        Returns the number of preference records that were pruned.
        """
        role = await self.get_role(role_id)
        if role.is_default:
            raise ImmutableFieldError("Role", "id", "Cannot delete default roles")
        if not await self.role_repo.delete(role_id):
            raise NotFoundError("Role", role_id)
        logger.info("Role deleted: id=%s; sweeping subscriptions", role_id)
        try:
            pruned = await self.prune_role_references(role_id)
        except Exception:
            logger.error(
                "Subscription sweep for deleted role %s did not finish; "
                "preferences may hold a stale reference until prune_role_references is re-run",
                role_id,
            )
            raise
        return pruned

    async def prune_role_references(self, role_id: str) -> int:
        """Remove role_id from every stored subscription set. Idempotent."""
        pruned = 0
        for prefs in await self.preferences_repo.list_subscribed_to(role_id):
            prefs.subscribed_roles = [r for r in prefs.subscribed_roles if r != role_id]
            prefs.updated_at = utcnow()
            await self.preferences_repo.save(prefs)
            pruned += 1
        logger.info("Pruned role %s from %d preference record(s)", role_id, pruned)
        return pruned

    async def seed_default_roles(self) -> list[Role]:
        """Create any missing default role. Safe to call on every startup."""
        created = []
        for definition in DEFAULT_ROLES:
            if await self.role_repo.get_by_id(definition["id"]):
                continue
            role = Role(**definition, created_at=utcnow())
            created.append(await self.role_repo.create(role))
        if created:
            logger.info("Seeded default roles: %s", ", ".join(r.id for r in created))
        return created


class NotificationPreferencesService:
    """Per-user subscription records."""

    def __init__(self, preferences_repo: PreferencesRepository, role_repo: RoleRepository):
        self.preferences_repo = preferences_repo
        self.role_repo = role_repo

    async def get_preferences(self, user_id: str) -> UserNotificationPreferences:
        """Get preferences, creating the default record on first access."""
        prefs = await self.preferences_repo.get(user_id)
        if prefs is None:
            prefs = await self.preferences_repo.save(UserNotificationPreferences.default_for(user_id))
        return prefs

    async def update_preferences(
        self,
        user_id: str,
        subscribed_roles: Optional[Iterable[str]] = None,
        allow_all_announcements: Optional[bool] = None,
    ) -> UserNotificationPreferences:
        """Update subscriptions. Every subscribed role must exist."""
        prefs = await self.get_preferences(user_id)
        if subscribed_roles is not None:
            role_ids = list(dict.fromkeys(subscribed_roles))
            known = {r.id for r in await self.role_repo.list_all()}
            unknown = [r for r in role_ids if r not in known]
            if unknown:
                raise ValidationError(f"Unknown notification role(s): {', '.join(unknown)}")
            prefs.subscribed_roles = role_ids
        if allow_all_announcements is not None:
            prefs.allow_all_announcements = allow_all_announcements
        prefs.updated_at = utcnow()
        return await self.preferences_repo.save(prefs)

    async def list_all_preferences(self) -> list[UserNotificationPreferences]:
        """Every preference record (input to recipient resolution)."""
        return await self.preferences_repo.list_all()

