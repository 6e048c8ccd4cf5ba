"""
Stored shipping settings (zones, methods, global options).
"""

import logging
from datetime import datetime, timezone

from pydantic import ValidationError as SchemaValidationError

from app.core.enums import Collection
from app.core.exceptions import ValidationError
from app.schemas.shipping import ShippingSettings
from app.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

SETTINGS_KEY = "shipping"


class ShippingSettingsService:

    def __init__(self, store: DocumentStore):
        self.store = store

    async def get_settings(self) -> ShippingSettings:
        """Saved settings, or the defaults when none were saved"""
        data = await self.store.get(Collection.SETTINGS.value, SETTINGS_KEY)
        if data is None:
            return ShippingSettings.default()
        try:
            return ShippingSettings.from_document(data)
        except SchemaValidationError as e:
            logger.error(f"Stored shipping settings are invalid, using defaults: {e.error_count()} errors")
            return ShippingSettings.default()

    async def save_settings(self, settings: ShippingSettings) -> ShippingSettings:
        if settings is None:
            raise ValidationError("Settings are required")
        stamped = settings.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        await self.store.put(Collection.SETTINGS.value, SETTINGS_KEY, stamped.to_document())
        logger.info("Shipping settings saved")
        return stamped
