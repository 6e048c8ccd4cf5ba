import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.exceptions import ValidationError, UnavailableError
from app.core.security import require_admin
from app.dependencies import get_geocoder, get_shipping_settings_service
from app.schemas.shipping import ShippingRateRequest, ShippingRateResponse, ShippingSettings
from app.services.shipping.estimator import RateEstimator
from app.services.shipping.factory import get_rate_provider
from app.services.shipping.geocoding import Geocoder
from app.services.shipping.settings_service import ShippingSettingsService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/shipping",
    tags=["shipping"],
    responses={404: {"description": "Not found"}},
)


@router.post("/calculate")
async def calculate_shipping(
    request: ShippingRateRequest,
    geocoder: Geocoder = Depends(get_geocoder),
    settings_service: ShippingSettingsService = Depends(get_shipping_settings_service),
):
    """Quote every shipping service for a package between two addresses."""
    settings = get_settings()
    currency = settings.SHIPPING_CURRENCY

    try:
        providers = [get_rate_provider("distance", currency=currency)]
        if settings.SHIPPING_ZONE_RATES_ENABLED:
            try:
                shipping_settings = await settings_service.get_settings()
            except UnavailableError as e:
                logger.warning(f"Shipping settings unavailable, quoting without zone rates: {str(e)}")
            else:
                providers.append(get_rate_provider("zones", settings=shipping_settings))

        estimator = RateEstimator(
            geocoder,
            providers=providers,
            currency=currency,
            default_distance_km=settings.SHIPPING_DEFAULT_DISTANCE_KM,
        )
        rates = await estimator.estimate(request.origin, request.destination, request.package)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Shipping calculation error: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to calculate shipping rates"})

    if request.service:
        wanted = request.service.strip().lower()
        selected = [rate for rate in rates if rate.service_name.lower() == wanted]
        if selected:
            rates = selected

    return ShippingRateResponse(rates=rates).to_document()


@router.get("/settings")
async def get_shipping_settings(
    settings_service: ShippingSettingsService = Depends(get_shipping_settings_service),
):
    try:
        shipping_settings = await settings_service.get_settings()
    except Exception as e:
        logger.error(f"Error fetching shipping settings: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to fetch shipping settings"},
        )
    return {"success": True, "settings": shipping_settings.to_document()}


@router.post("/settings", dependencies=[require_admin()])
async def save_shipping_settings(
    shipping_settings: ShippingSettings,
    settings_service: ShippingSettingsService = Depends(get_shipping_settings_service),
):
    try:
        saved = await settings_service.save_settings(shipping_settings)
    except Exception as e:
        logger.error(f"Error saving shipping settings: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to save shipping settings"},
        )
    return {
        "success": True,
        "message": "Shipping settings saved successfully",
        "settings": saved.to_document(),
    }
