"""
Generic document store used by every storefront collection.

Documents are JSON dicts addressed by (collection, key). Two implementations:
- SqlDocumentStore: the `documents` table through an async SQLAlchemy session
- InMemoryDocumentStore: process-local dicts, for tests and local development
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UnavailableError
from app.models.document import Document

logger = logging.getLogger(__name__)


def _matches(data: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
    if not filters:
        return True
    return all(data.get(field) == value for field, value in filters.items())


class DocumentStore(ABC):
    """get/put/query/delete by collection name and document key"""

    @abstractmethod
    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """Return the document or None if it does not exist"""

    @abstractmethod
    async def put(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        """Create or replace a document"""

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Return documents of a collection ordered by key.

        Args:
            collection: Collection name
            filters: Top-level field equality filters
            limit: Maximum number of documents to return

        Returns:
            Documents, each with its key under "id"
        """

    @abstractmethod
    async def delete(self, collection: str, key: str) -> bool:
        """Delete a document. Returns False if it did not exist."""


class SqlDocumentStore(DocumentStore):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fetch(self, collection: str, key: str) -> Optional[Document]:
        result = await self.db.execute(
            select(Document)
            .where(Document.collection == collection)
            .where(Document.key == key)
        )
        return result.scalar_one_or_none()

    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            document = await self._fetch(collection, key)
        except SQLAlchemyError as e:
            logger.error(f"Error reading {collection}/{key}: {str(e)}")
            raise UnavailableError(f"Document store unavailable: {str(e)}")
        return dict(document.data) if document else None

    async def put(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        try:
            document = await self._fetch(collection, key)
            if document:
                document.data = data
            else:
                self.db.add(Document(collection=collection, key=key, data=data))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error writing {collection}/{key}: {str(e)}")
            raise UnavailableError(f"Document store unavailable: {str(e)}")

    async def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        try:
            result = await self.db.execute(
                select(Document)
                .where(Document.collection == collection)
                .order_by(Document.key)
            )
            documents = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Error querying {collection}: {str(e)}")
            raise UnavailableError(f"Document store unavailable: {str(e)}")

        # JSON column filters differ per dialect, so match in Python
        matches = [
            {**document.data, "id": document.key}
            for document in documents
            if _matches(document.data, filters)
        ]
        return matches[:limit] if limit is not None else matches

    async def delete(self, collection: str, key: str) -> bool:
        try:
            result = await self.db.execute(
                delete(Document)
                .where(Document.collection == collection)
                .where(Document.key == key)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error deleting {collection}/{key}: {str(e)}")
            raise UnavailableError(f"Document store unavailable: {str(e)}")
        return result.rowcount > 0


class InMemoryDocumentStore(DocumentStore):

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        data = self._collections.get(collection, {}).get(key)
        return copy.deepcopy(data) if data is not None else None

    async def put(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        self._collections.setdefault(collection, {})[key] = copy.deepcopy(data)

    async def query(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        documents = self._collections.get(collection, {})
        matches = [
            {**copy.deepcopy(data), "id": key}
            for key, data in sorted(documents.items())
            if _matches(data, filters)
        ]
        return matches[:limit] if limit is not None else matches

    async def delete(self, collection: str, key: str) -> bool:
        return self._collections.get(collection, {}).pop(key, None) is not None
