"""
Schemas for per-user wishlists.
"""

from datetime import datetime
from typing import List, Optional

from app.schemas.base import BaseSchema
from app.schemas.cart import ProductSnapshot


class WishlistEntry(BaseSchema):
    user_id: str
    product_id: str
    added_at: datetime


class WishlistItem(BaseSchema):
    """An entry with the product as it is in the catalog now; None if it was removed"""
    product_id: str
    added_at: datetime
    product: Optional[ProductSnapshot] = None


class WishlistRead(BaseSchema):
    items: List[WishlistItem]
    count: int


class AddWishlistItemRequest(BaseSchema):
    product_id: str


class WishlistStatus(BaseSchema):
    product_id: str
    in_wishlist: bool
