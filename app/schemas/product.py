"""
Schemas for catalog products as stored in the `products` collection.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ConfigDict, Field

from app.schemas.base import BaseSchema


class ProductRead(BaseSchema):
    """A catalog product; unknown stored fields are passed through"""
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    featured_image: Optional[str] = None
    in_stock: bool = True
    stock_quantity: Optional[int] = None
    rating: float = 0
    reviews: int = 0
    featured: bool = False
    tags: List[str] = Field(default_factory=list)
    specifications: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductListResponse(BaseSchema):
    success: bool = True
    products: List[ProductRead]
    count: int
