from typing import AsyncGenerator
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.database import async_session
from app.services.blob_store import BlobStore, DocumentBlobStore
from app.services.document_store import DocumentStore, SqlDocumentStore
from app.services.shipping.geocoding import Geocoder, NominatimGeocoder
from app.services.product_service import ProductCatalog
from app.services.shipping.settings_service import ShippingSettingsService
from app.services.tax_service import TaxService, IpApiLocator


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


def get_document_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    return SqlDocumentStore(db)


def get_blob_store(store: DocumentStore = Depends(get_document_store)) -> BlobStore:
    return DocumentBlobStore(store, get_settings().CART_COLLECTION)


def get_product_catalog(store: DocumentStore = Depends(get_document_store)) -> ProductCatalog:
    return ProductCatalog(store)


def get_geocoder() -> Geocoder:
    return NominatimGeocoder()


def get_shipping_settings_service(
    store: DocumentStore = Depends(get_document_store)
) -> ShippingSettingsService:
    return ShippingSettingsService(store)


def get_tax_service() -> TaxService:
    return TaxService(ip_locator=IpApiLocator())
