"""User notification preferences repository implementation."""
from typing import Optional

from campus.domain.common.store import USER_PREFERENCES, DocumentStore
from campus.domain.roles.models import UserNotificationPreferences
from campus.domain.roles.services import PreferencesRepository


class PreferencesRepositoryImpl(PreferencesRepository):
    """Preferences stored in ``userPreferences``, keyed by user id."""

    def __init__(self, store: DocumentStore):
        self.store = store

    @staticmethod
    def _to_doc(prefs: UserNotificationPreferences) -> dict:
        return {"id": prefs.user_id, **prefs.model_dump(mode="json")}

    @staticmethod
    def _from_doc(doc: dict) -> UserNotificationPreferences:
        return UserNotificationPreferences.model_validate(doc)

    async def get(self, user_id: str) -> Optional[UserNotificationPreferences]:
        doc = await self.store.get(USER_PREFERENCES, user_id)
        return self._from_doc(doc) if doc else None

    async def save(self, prefs: UserNotificationPreferences) -> UserNotificationPreferences:
        """Upsert: patch the existing document or create it."""
        doc = self._to_doc(prefs)
        if not await self.store.update(USER_PREFERENCES, prefs.user_id, doc):
            await self.store.create(USER_PREFERENCES, doc)
        return prefs

    async def list_all(self) -> list[UserNotificationPreferences]:
        return [self._from_doc(doc) for doc in await self.store.query(USER_PREFERENCES)]

    async def list_subscribed_to(self, role_id: str) -> list[UserNotificationPreferences]:
        docs = await self.store.query(
            USER_PREFERENCES, lambda doc: role_id in doc.get("subscribed_roles", [])
        )
        return [self._from_doc(doc) for doc in docs]
