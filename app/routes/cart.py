import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_blob_store, get_product_catalog
from app.schemas.cart import AddCartItemRequest, UpdateCartItemRequest
from app.services.blob_store import BlobStore
from app.services.cart_service import CartService
from app.services.product_service import ProductCatalog

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/cart",
    tags=["cart"],
)


async def get_cart_service(
    session_id: str,
    blob_store: BlobStore = Depends(get_blob_store),
) -> CartService:
    service = CartService(blob_store, session_id)
    await service.load()
    return service


@router.get("/{session_id}")
async def get_cart(cart: CartService = Depends(get_cart_service)):
    return cart.to_read().to_document()


@router.post("/{session_id}/items")
async def add_cart_item(
    item: AddCartItemRequest,
    cart: CartService = Depends(get_cart_service),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    product = await catalog.get_snapshot(item.product_id)
    added = await cart.add_item(product, item.quantity)
    response = cart.to_read().to_document()
    response["added"] = added
    return response


@router.patch("/{session_id}/items/{product_id}")
async def update_cart_item(
    product_id: str,
    update: UpdateCartItemRequest,
    cart: CartService = Depends(get_cart_service),
):
    await cart.update_quantity(product_id, update.quantity)
    return cart.to_read().to_document()


@router.post("/{session_id}/items/{product_id}/refresh")
async def refresh_cart_item(
    product_id: str,
    cart: CartService = Depends(get_cart_service),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    """Re-price a line from the current catalog entry."""
    product = await catalog.get_snapshot(product_id)
    await cart.reprice_item(product)
    return cart.to_read().to_document()


@router.delete("/{session_id}/items/{product_id}")
async def remove_cart_item(
    product_id: str,
    cart: CartService = Depends(get_cart_service),
):
    await cart.remove_item(product_id)
    return cart.to_read().to_document()


@router.delete("/{session_id}")
async def clear_cart(cart: CartService = Depends(get_cart_service)):
    await cart.clear()
    return cart.to_read().to_document()
