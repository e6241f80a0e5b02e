"""Seed the default notification roles (hnd, bachelor, masters, polytech, general). Idempotent."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from campus.domain.roles.models import DEFAULT_ROLES
from campus.domain.roles.services import RoleRegistry
from campus.infra.db.base import build_engine, build_sessionmaker
from campus.infra.db.document_store import SqlDocumentStore
from campus.infra.db.repositories.preferences_repo import PreferencesRepositoryImpl
from campus.infra.db.repositories.role_repo import RoleRepositoryImpl
from campus.settings import settings


async def seed_default_roles():
    """Create any default role that is missing."""
    engine = build_engine(settings.database_url)
    AsyncSessionLocal = build_sessionmaker(engine)

    async with AsyncSessionLocal() as session:
        store = SqlDocumentStore(session)
        registry = RoleRegistry(RoleRepositoryImpl(store), PreferencesRepositoryImpl(store))
        created = await registry.seed_default_roles()
        print(f"Seeded {len(created)} default roles ({len(DEFAULT_ROLES) - len(created)} already existed).")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_default_roles())
