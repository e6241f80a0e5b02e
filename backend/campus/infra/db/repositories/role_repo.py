"""Role repository implementation."""
from typing import Optional

from campus.domain.common.store import ROLES, DocumentStore
from campus.domain.roles.models import Role
from campus.domain.roles.services import RoleRepository


class RoleRepositoryImpl(RoleRepository):
    """Roles stored in the ``roles`` collection."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def create(self, role: Role) -> Role:
        await self.store.create(ROLES, role.model_dump(mode="json"))
        return role

    async def get_by_id(self, role_id: str) -> Optional[Role]:
        doc = await self.store.get(ROLES, role_id)
        return Role.model_validate(doc) if doc else None

    async def list_all(self) -> list[Role]:
        return [Role.model_validate(doc) for doc in await self.store.query(ROLES)]

    async def update(self, role_id: str, values: dict) -> Optional[Role]:
        if not await self.store.update(ROLES, role_id, values):
            return None
        return await self.get_by_id(role_id)

    async def delete(self, role_id: str) -> bool:
        return await self.store.delete(ROLES, role_id)
