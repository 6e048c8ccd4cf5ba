import logging

from fastapi import APIRouter, Depends

from app.core.exceptions import NotFoundError, ValidationError
from app.dependencies import get_document_store, get_product_catalog
from app.schemas.wishlist import AddWishlistItemRequest, WishlistItem, WishlistRead, WishlistStatus
from app.services.document_store import DocumentStore
from app.services.product_service import ProductCatalog
from app.services.wishlist_service import WishlistService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/wishlist",
    tags=["wishlist"],
)


def get_wishlist_service(
    user_id: str,
    store: DocumentStore = Depends(get_document_store),
) -> WishlistService:
    return WishlistService(store, user_id)


async def read_wishlist(wishlist: WishlistService, catalog: ProductCatalog) -> dict:
    items = []
    for entry in await wishlist.list_entries():
        try:
            product = await catalog.get_snapshot(entry.product_id)
        except (NotFoundError, ValidationError):
            product = None
        items.append(WishlistItem(product_id=entry.product_id, added_at=entry.added_at, product=product))
    return WishlistRead(items=items, count=len(items)).to_document()


@router.get("/{user_id}")
async def get_wishlist(
    wishlist: WishlistService = Depends(get_wishlist_service),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    return await read_wishlist(wishlist, catalog)


@router.post("/{user_id}/items")
async def add_wishlist_item(
    item: AddWishlistItemRequest,
    wishlist: WishlistService = Depends(get_wishlist_service),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    # Only catalog products can be wished for
    await catalog.get_snapshot(item.product_id)
    added = await wishlist.add(item.product_id)
    response = await read_wishlist(wishlist, catalog)
    response["added"] = added
    return response


@router.get("/{user_id}/items/{product_id}")
async def wishlist_status(
    product_id: str,
    wishlist: WishlistService = Depends(get_wishlist_service),
):
    status = WishlistStatus(product_id=product_id, in_wishlist=await wishlist.contains(product_id))
    return status.to_document()


@router.post("/{user_id}/items/{product_id}/toggle")
async def toggle_wishlist_item(
    product_id: str,
    wishlist: WishlistService = Depends(get_wishlist_service),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    if not await wishlist.contains(product_id):
        await catalog.get_snapshot(product_id)
    in_wishlist = await wishlist.toggle(product_id)
    return WishlistStatus(product_id=product_id, in_wishlist=in_wishlist).to_document()


@router.delete("/{user_id}/items/{product_id}")
async def remove_wishlist_item(
    product_id: str,
    wishlist: WishlistService = Depends(get_wishlist_service),
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    await wishlist.remove(product_id)
    return await read_wishlist(wishlist, catalog)
