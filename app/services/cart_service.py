"""
Purpose: Session cart with merge-by-identity line items and write-through persistence.

- Cart holds the ordered line items and derives totals on every read.
- CartService wraps a Cart for one session/user key and saves the whole line
  list to the blob store after every mutation. A failed save is kept as a
  warning; the in-memory cart stays as mutated.
"""

import logging
from typing import List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from app.core.exceptions import ValidationError, UnavailableError, OutOfStockError
from app.schemas.cart import ProductSnapshot, LineItem, CartTotals, CartRead
from app.services.blob_store import BlobStore

logger = logging.getLogger(__name__)

_line_items_adapter = TypeAdapter(List[LineItem])


def serialize_line_items(items: List[LineItem]) -> bytes:
    return _line_items_adapter.dump_json(items, by_alias=True)


def deserialize_line_items(raw: bytes) -> List[LineItem]:
    return _line_items_adapter.validate_json(raw)


class Cart:
    """Ordered line items keyed by product id"""

    def __init__(self, items: Optional[List[LineItem]] = None):
        self.items: List[LineItem] = list(items or [])

    @classmethod
    def from_snapshot(cls, items: List[LineItem]) -> "Cart":
        """Rebuild a cart, folding repeated product ids into the first line"""
        cart = cls()
        for item in items:
            existing = cart.find(item.product_id)
            if existing:
                existing.quantity += item.quantity
            else:
                cart.items.append(item)
        return cart

    def find(self, product_id: str) -> Optional[LineItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def quantity_of(self, product_id: str) -> int:
        item = self.find(product_id)
        return item.quantity if item else 0

    def add(self, product: ProductSnapshot, quantity: int) -> None:
        existing = self.find(product.id)
        if existing:
            existing.quantity += quantity
            return
        self.items.append(
            LineItem(
                product_id=product.id,
                display_name=product.name,
                unit_price=product.price,
                quantity=quantity,
                image_ref=product.image_ref,
                category_ref=product.category,
            )
        )

    def remove(self, product_id: str) -> bool:
        remaining = [item for item in self.items if item.product_id != product_id]
        removed = len(remaining) != len(self.items)
        self.items = remaining
        return removed

    def set_quantity(self, product_id: str, quantity: int) -> bool:
        if quantity <= 0:
            return self.remove(product_id)
        existing = self.find(product_id)
        if not existing:
            return False
        existing.quantity = quantity
        return True

    def clear(self) -> None:
        self.items = []

    def totals(self) -> CartTotals:
        return CartTotals(
            total_item_count=sum(item.quantity for item in self.items),
            total_amount=sum(item.line_total for item in self.items),
        )


class CartService:

    def __init__(self, store: BlobStore, cart_key: str):
        self.store = store
        self.cart_key = cart_key
        self.cart = Cart()
        self.persist_warning: Optional[str] = None

    @property
    def items(self) -> List[LineItem]:
        return self.cart.items

    async def load(self) -> Cart:
        """
        Rehydrate the cart from its last snapshot.

        Missing, corrupt or unreachable snapshots give an empty cart.
        """
        try:
            raw = await self.store.get(self.cart_key)
        except UnavailableError as e:
            logger.warning(f"Cart store unavailable loading {self.cart_key}, starting empty: {str(e)}")
            raw = None

        items: List[LineItem] = []
        if raw:
            try:
                items = deserialize_line_items(raw)
            except SchemaValidationError as e:
                logger.warning(f"Discarding corrupt cart snapshot {self.cart_key}: {e.error_count()} errors")

        self.cart = Cart.from_snapshot(items)
        if len(self.cart.items) != len(items):
            logger.warning(f"Merged duplicate lines in cart snapshot {self.cart_key}")
        return self.cart

    async def _save(self) -> None:
        try:
            await self.store.put(self.cart_key, serialize_line_items(self.cart.items))
            self.persist_warning = None
        except UnavailableError as e:
            logger.warning(f"Cart {self.cart_key} changed but could not be saved: {str(e)}")
            self.persist_warning = "Cart could not be saved; changes may be lost when the session ends"

    async def add_item(self, product: Optional[ProductSnapshot], quantity: int = 1) -> int:
        """
        Add a product, merging into its existing line.

        Args:
            product: Catalog snapshot of the product
            quantity: Units to add, at least 1

        Returns:
            The number of units actually added (clamped to remaining stock)

        Raises:
            ValidationError: If product is missing or quantity < 1
            OutOfStockError: If the cart already holds all available stock
        """
        if product is None:
            raise ValidationError("Product is required")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        if product.stock_quantity is not None:
            available = product.stock_quantity - self.cart.quantity_of(product.id)
            if available <= 0:
                raise OutOfStockError(f"'{product.name}' is already in the cart at maximum quantity")
            if quantity > available:
                logger.info(f"Limited stock for {product.id}: adding {available} instead of {quantity}")
                quantity = available

        self.cart.add(product, quantity)
        await self._save()
        return quantity

    async def remove_item(self, product_id: str) -> None:
        if self.cart.remove(product_id):
            await self._save()

    async def update_quantity(self, product_id: str, quantity: int) -> None:
        """Absolute set; quantity <= 0 removes the line"""
        if self.cart.set_quantity(product_id, quantity):
            await self._save()

    async def reprice_item(self, product: ProductSnapshot) -> None:
        """Refresh a line's snapshot from a freshly fetched product"""
        existing = self.cart.find(product.id)
        if not existing:
            return
        existing.display_name = product.name
        existing.unit_price = product.price
        existing.image_ref = product.image_ref
        existing.category_ref = product.category
        await self._save()

    async def clear(self) -> None:
        self.cart.clear()
        await self._save()

    def totals(self) -> CartTotals:
        return self.cart.totals()

    def to_read(self) -> CartRead:
        totals = self.totals()
        return CartRead(
            items=list(self.cart.items),
            total_items=totals.total_item_count,
            total_price=totals.total_amount,
            warning=self.persist_warning,
        )
