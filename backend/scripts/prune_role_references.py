#!/usr/bin/env python3
"""Remove a deleted role id from every user's subscriptions.

Completes a role deletion whose subscription sweep was interrupted. Safe to
run more than once.
"""
import asyncio
import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from campus.domain.roles.services import RoleRegistry
from campus.infra.db.base import build_engine, build_sessionmaker
from campus.infra.db.document_store import SqlDocumentStore
from campus.infra.db.repositories.preferences_repo import PreferencesRepositoryImpl
from campus.infra.db.repositories.role_repo import RoleRepositoryImpl
from campus.settings import settings


async def prune_role_references(role_id: str) -> int:
    engine = build_engine(settings.database_url)
    AsyncSessionLocal = build_sessionmaker(engine)
    try:
        async with AsyncSessionLocal() as session:
            store = SqlDocumentStore(session)
            role_repo = RoleRepositoryImpl(store)
            if await role_repo.get_by_id(role_id) is not None:
                print(f"Role '{role_id}' still exists; delete it through the API instead.")
                return 1
            registry = RoleRegistry(role_repo, PreferencesRepositoryImpl(store))
            pruned = await registry.prune_role_references(role_id)
            print(f"Removed role '{role_id}' from {pruned} subscription record(s).")
            return 0
    finally:
        await engine.dispose()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python scripts/prune_role_references.py <role_id>")
        sys.exit(2)
    sys.exit(asyncio.run(prune_role_references(sys.argv[1])))
