"""SQLAlchemy implementation of the document store."""
import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus.domain.common.store import Document, DocumentStore, Predicate
from campus.domain.common.types import generate_id
from campus.infra.db.models.document import DocumentModel

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """Documents stored as JSON rows keyed by (collection, id). Each call commits."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, collection: str, doc: Document) -> str:
        """Insert a document."""
        doc_id = str(doc.get("id") or generate_id())
        model = DocumentModel(collection=collection, id=doc_id, data={**doc, "id": doc_id})
        self.session.add(model)
        await self._commit()
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Get a document by id."""
        model = await self._get_model(collection, doc_id)
        return dict(model.data) if model else None

    async def update(self, collection: str, doc_id: str, patch: Document) -> bool:
        """Read-modify-write one document in a single transaction."""
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.collection == collection, DocumentModel.id == doc_id)
            .with_for_update()
        )
        model = result.scalar_one_or_none()
        if model is None:
            return False
        # Reassign so the JSON column is flagged dirty.
        model.data = {**model.data, **patch, "id": doc_id}
        await self._commit()
        return True

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document."""
        result = await self.session.execute(
            delete(DocumentModel).where(
                DocumentModel.collection == collection,
                DocumentModel.id == doc_id,
            )
        )
        await self._commit()
        return result.rowcount > 0

    async def query(self, collection: str, predicate: Optional[Predicate] = None) -> list[Document]:
        """List documents in insertion order, optionally filtered."""
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .order_by(DocumentModel.seq, DocumentModel.id)
        )
        docs = [dict(m.data) for m in result.scalars().all()]
        if predicate is None:
            return docs
        return [d for d in docs if predicate(d)]

    async def _get_model(self, collection: str, doc_id: str) -> Optional[DocumentModel]:
        result = await self.session.execute(
            select(DocumentModel).where(
                DocumentModel.collection == collection,
                DocumentModel.id == doc_id,
            )
        )
        return result.scalar_one_or_none()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            logger.warning("Document store commit failed; rolling back")
            await self.session.rollback()
            raise
