import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.exceptions import ValidationError
from app.dependencies import get_tax_service
from app.schemas.tax import TaxCalculationRequest
from app.services.tax_service import TaxService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tax",
    tags=["tax"],
)


def client_ip_from(request: Request):
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.headers.get("x-real-ip")


@router.post("/calculate")
async def calculate_tax(
    body: TaxCalculationRequest,
    request: Request,
    tax_service: TaxService = Depends(get_tax_service),
):
    try:
        result = await tax_service.calculate(
            body.subtotal,
            shipping_address=body.shipping_address,
            user_location=body.user_location,
            client_ip=client_ip_from(request),
        )
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Error calculating tax: {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Failed to calculate tax"})
    return result.to_document()
