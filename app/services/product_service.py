"""
Purpose: Read-only access to the product catalog.

- list_products: every product, newest first, optionally narrowed to a
  category, to featured products and to products marked in stock.
- get_product / get_snapshot: one product by id. The snapshot is the subset a
  cart line is built from.

Entries that do not validate are skipped in listings and reported as
ValidationError when asked for directly.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError as SchemaValidationError

from app.core.enums import Collection
from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.cart import ProductSnapshot
from app.schemas.product import ProductRead
from app.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _created_sort_key(product: ProductRead) -> datetime:
    created = product.created_at
    if created is None:
        return _OLDEST
    # Stored timestamps may be naive; treat them as UTC
    return created if created.tzinfo else created.replace(tzinfo=timezone.utc)


class ProductCatalog:

    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_products(
        self,
        category: Optional[str] = None,
        featured: bool = False,
        in_stock: bool = False,
        limit: Optional[int] = None
    ) -> List[ProductRead]:
        """
        List catalog products, newest first.

        Args:
            category: Only products in this category
            featured: Only products flagged as featured
            in_stock: Only products flagged as in stock
            limit: Maximum number of products to return

        Returns:
            Valid products matching every given filter
        """
        filters = {}
        if category:
            filters["category"] = category
        if featured:
            filters["featured"] = True
        if in_stock:
            filters["inStock"] = True

        documents = await self.store.query(Collection.PRODUCTS.value, filters=filters or None)

        products: List[ProductRead] = []
        for document in documents:
            try:
                products.append(ProductRead.from_document(document))
            except SchemaValidationError as e:
                logger.warning(f"Skipping invalid product {document.get('id')}: {e.error_count()} errors")

        products.sort(key=_created_sort_key, reverse=True)
        logger.debug(f"Found {len(products)} products")
        return products[:limit] if limit is not None else products

    async def _get_document(self, product_id: str) -> dict:
        data = await self.store.get(Collection.PRODUCTS.value, product_id)
        if data is None:
            raise NotFoundError(f"Product {product_id} not found")
        return {**data, "id": product_id}

    async def get_product(self, product_id: str) -> ProductRead:
        document = await self._get_document(product_id)
        try:
            return ProductRead.from_document(document)
        except SchemaValidationError as e:
            logger.error(f"Product {product_id} has an invalid catalog entry: {e.error_count()} errors")
            raise ValidationError(f"Product {product_id} has an invalid catalog entry")

    async def get_snapshot(self, product_id: str) -> ProductSnapshot:
        """Current catalog snapshot of a product for a cart line"""
        document = await self._get_document(product_id)
        try:
            return ProductSnapshot.from_document(document)
        except SchemaValidationError as e:
            logger.error(f"Product {product_id} has an invalid catalog entry: {e.error_count()} errors")
            raise ValidationError(f"Product {product_id} cannot be added to a cart")
