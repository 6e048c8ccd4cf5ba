import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_product_catalog
from app.schemas.product import ProductListResponse
from app.services.product_service import ProductCatalog

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
)


@router.get("")
async def list_products(
    category: Optional[str] = None,
    featured: bool = False,
    in_stock: bool = Query(False, alias="inStock"),
    limit: Optional[int] = Query(None, ge=1),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    """List products, newest first, with optional category/featured/inStock filters."""
    products = await catalog.list_products(
        category=category,
        featured=featured,
        in_stock=in_stock,
        limit=limit,
    )
    return ProductListResponse(products=products, count=len(products)).to_document()


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    product = await catalog.get_product(product_id)
    return {"success": True, "product": product.to_document()}
