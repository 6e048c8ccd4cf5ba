"""
Schemas for the shopping cart.
"""

from typing import List, Optional
from pydantic import Field

from app.schemas.base import BaseSchema


class ProductSnapshot(BaseSchema):
    """The catalog fields a cart line is built from"""
    id: str
    name: str
    price: float = Field(..., ge=0)
    featured_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    stock_quantity: Optional[int] = None

    @property
    def image_ref(self) -> Optional[str]:
        if self.featured_image:
            return self.featured_image
        return self.images[0] if self.images else None


class LineItem(BaseSchema):
    product_id: str
    display_name: str
    unit_price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image_ref: Optional[str] = None
    category_ref: Optional[str] = None

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class CartTotals(BaseSchema):
    total_item_count: int
    total_amount: float


class CartRead(BaseSchema):
    items: List[LineItem]
    total_items: int
    total_price: float
    warning: Optional[str] = None


class AddCartItemRequest(BaseSchema):
    product_id: str
    quantity: int = 1


class UpdateCartItemRequest(BaseSchema):
    quantity: int
