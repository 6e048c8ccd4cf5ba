"""
Purpose: Per-user wishlist kept in the `wishlist` collection.

One document per (user, product), keyed "<userId>_<productId>", so adding the
same product twice never creates a second entry.
"""

import logging
from datetime import datetime, timezone
from typing import List

from pydantic import ValidationError as SchemaValidationError

from app.core.enums import Collection
from app.core.exceptions import ValidationError
from app.schemas.wishlist import WishlistEntry
from app.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


def wishlist_key(user_id: str, product_id: str) -> str:
    return f"{user_id}_{product_id}"


class WishlistService:

    def __init__(self, store: DocumentStore, user_id: str):
        if not user_id:
            raise ValidationError("A user id is required for a wishlist")
        self.store = store
        self.user_id = user_id

    async def list_entries(self) -> List[WishlistEntry]:
        """Entries of this user, most recently added first"""
        documents = await self.store.query(
            Collection.WISHLIST.value,
            filters={"userId": self.user_id},
        )
        entries: List[WishlistEntry] = []
        for document in documents:
            try:
                entries.append(WishlistEntry.from_document(document))
            except SchemaValidationError as e:
                logger.warning(f"Skipping invalid wishlist entry {document.get('id')}: {e.error_count()} errors")
        entries.sort(key=lambda entry: entry.added_at, reverse=True)
        return entries

    async def contains(self, product_id: str) -> bool:
        document = await self.store.get(Collection.WISHLIST.value, wishlist_key(self.user_id, product_id))
        return document is not None

    async def add(self, product_id: str) -> bool:
        """Add a product. Returns False if it was already there."""
        if not product_id:
            raise ValidationError("Product is required")
        if await self.contains(product_id):
            return False
        entry = WishlistEntry(
            user_id=self.user_id,
            product_id=product_id,
            added_at=datetime.now(timezone.utc),
        )
        await self.store.put(
            Collection.WISHLIST.value,
            wishlist_key(self.user_id, product_id),
            entry.to_document(),
        )
        logger.info(f"Added {product_id} to wishlist of {self.user_id}")
        return True

    async def remove(self, product_id: str) -> bool:
        """Remove a product. Returns False if it was not there."""
        return await self.store.delete(Collection.WISHLIST.value, wishlist_key(self.user_id, product_id))

    async def toggle(self, product_id: str) -> bool:
        """Add if absent, remove if present. Returns whether it is now in the wishlist."""
        if await self.remove(product_id):
            return False
        await self.add(product_id)
        return True
