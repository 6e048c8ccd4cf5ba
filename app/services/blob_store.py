"""
Key/value blob storage for serialized carts.
"""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from app.core.enums import Collection
from app.core.exceptions import UnavailableError
from app.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class BlobStore(ABC):

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes or None. Raises UnavailableError if unreachable."""

    @abstractmethod
    async def put(self, key: str, value: bytes) -> None:
        """Store the bytes under key. Raises UnavailableError if unreachable."""


class InMemoryBlobStore(BlobStore):

    def __init__(self):
        self._blobs: Dict[str, bytes] = {}

    async def get(self, key: str) -> Optional[bytes]:
        return self._blobs.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self._blobs[key] = bytes(value)


class DocumentBlobStore(BlobStore):
    """Blobs kept base64 encoded in a document store collection"""

    def __init__(self, store: DocumentStore, collection: str = Collection.CARTS.value):
        self.store = store
        self.collection = collection

    async def get(self, key: str) -> Optional[bytes]:
        document = await self.store.get(self.collection, key)
        if not document or "payload" not in document:
            return None
        try:
            return base64.b64decode(document["payload"], validate=True)
        except (binascii.Error, TypeError) as e:
            # Unreadable payloads are treated like missing ones by the cart
            logger.warning(f"Corrupt blob {self.collection}/{key}: {str(e)}")
            return None

    async def put(self, key: str, value: bytes) -> None:
        await self.store.put(
            self.collection,
            key,
            {"payload": base64.b64encode(value).decode("ascii")}
        )
