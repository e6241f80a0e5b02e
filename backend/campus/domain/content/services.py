"""Content store adapter for announcements and events."""
import logging
from typing import Any, Callable, Generic, Iterable, Optional, Protocol, TypeVar

import pydantic

from campus.domain.audience.resolver import filter_for_viewer
from campus.domain.auth.models import Viewer
from campus.domain.common.errors import NotFoundError, ValidationError
from campus.domain.common.types import generate_id, utcnow
from campus.domain.content.models import TargetableContent
from campus.domain.roles.models import UserNotificationPreferences

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=TargetableContent)

# Fields fixed at creation time.
PROTECTED_FIELDS = frozenset({"id", "timestamp", "author_id", "created_by", "role"})


class ContentRepository(Protocol[C]):
    """Content repository protocol (one per collection)."""

    async def create(self, item: C) -> C:
        ...

    async def get_by_id(self, item_id: str) -> Optional[C]:
        ...

    async def list_all(self) -> list[C]:
        ...

    async def update(self, item_id: str, values: dict) -> Optional[C]:
        ...

    async def delete(self, item_id: str) -> bool:
        ...


class RoleLookup(Protocol):
    async def list_all(self) -> list:
        ...


class PreferencesSource(Protocol):
    async def list_all_preferences(self) -> list[UserNotificationPreferences]:
        ...


class FanOut(Protocol):
    async def fan_out(
        self, content: TargetableContent, all_preferences: Iterable[UserNotificationPreferences]
    ) -> int:
        ...


def check_targeting(is_public: bool, target_roles: list[str]) -> None:
    """Non-public content needs at least one target role."""
    if not is_public and not target_roles:
        raise ValidationError("Select at least one notification role for targeted content")


class ContentService(Generic[C]):
    """CRUD over one content collection, enforcing targeting on write."""

    def __init__(
        self,
        model: type[C],
        repo: ContentRepository[C],
        role_repo: RoleLookup,
        preferences: PreferencesSource,
        fan_out: FanOut,
        sort_key: Callable[[C], Any],
    ):
        self.model = model
        self.repo = repo
        self.role_repo = role_repo
        self.preferences = preferences
        self.fan_out = fan_out
        self.sort_key = sort_key

    @property
    def resource(self) -> str:
        return self.model.__name__

    async def _check_known_roles(self, target_roles: list[str]) -> None:
        if not target_roles:
            return
        known = {r.id for r in await self.role_repo.list_all()}
        unknown = [r for r in target_roles if r not in known]
        if unknown:
            raise ValidationError(f"Unknown notification role(s): {', '.join(unknown)}")

    def _build(self, data: dict) -> C:
        try:
            item = self.model.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid {self.resource.lower()}: {e}") from e
        check_targeting(item.is_public, item.target_roles)
        if item.is_public:
            item.target_roles = []
        else:
            item.target_roles = list(dict.fromkeys(item.target_roles))
        return item

    async def create(self, data: dict) -> C:
        """Validate, persist, then notify recipients.

        Notification failures are logged and never undo the write.
        """
        item = self._build({**data, "id": generate_id(), "timestamp": utcnow()})
        await self._check_known_roles(item.target_roles)
        created = await self.repo.create(item)
        logger.info(
            "%s created: id=%s public=%s targets=%s",
            self.resource, created.id, created.is_public, created.target_roles,
        )
        try:
            all_preferences = await self.preferences.list_all_preferences()
            await self.fan_out.fan_out(created, all_preferences)
        except Exception:
            logger.exception("Notification fan-out failed for %s %s", self.resource, created.id)
        return created

    async def get(self, item_id: str) -> C:
        item = await self.repo.get_by_id(item_id)
        if not item:
            raise NotFoundError(self.resource, item_id)
        return item

    async def update(self, item_id: str, patch: dict) -> C:
        """Apply a partial update. Edits never re-notify."""
        protected = PROTECTED_FIELDS.intersection(patch)
        if protected:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(protected))}")
        current = await self.get(item_id)
        item = self._build({**current.model_dump(), **patch})
        if "target_roles" in patch:
            await self._check_known_roles(item.target_roles)
        updated = await self.repo.update(item_id, item.model_dump(mode="json", exclude={"id"}))
        if updated is None:
            raise NotFoundError(self.resource, item_id)
        return updated

    async def delete(self, item_id: str) -> None:
        """Delete an item. Deleting twice is an error."""
        if not await self.repo.delete(item_id):
            raise NotFoundError(self.resource, item_id)
        logger.info("%s deleted: id=%s", self.resource, item_id)

    async def list_all(self) -> list[C]:
        """All items in display order, unfiltered."""
        return sorted(await self.repo.list_all(), key=self.sort_key)

    async def list_visible(self, viewer: Viewer, viewer_roles: Iterable[str]) -> list[C]:
        """Items this viewer may see, in display order."""
        return filter_for_viewer(await self.list_all(), viewer, set(viewer_roles))

    async def toggle_pin(self, item_id: str) -> C:
        """Flip is_pinned (announcements only)."""
        if "is_pinned" not in self.model.model_fields:
            raise ValidationError(f"{self.resource} cannot be pinned")
        item = await self.get(item_id)
        updated = await self.repo.update(item_id, {"is_pinned": not item.is_pinned})
        if updated is None:
            raise NotFoundError(self.resource, item_id)
        return updated
