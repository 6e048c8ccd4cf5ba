# app/main.py

import logging
import subprocess
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core import logging_config  # noqa: F401  configures logging on import
from app.core.config import get_settings
from app.core.exceptions import (
    BaseServiceError,
    ValidationError,
    NotFoundError,
    OutOfStockError,
)
from app.routes import cart, health, products, shipping, tax, wishlist

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run migrations on startup
    if get_settings().RUN_MIGRATIONS:
        logger.info("Running database migrations...")
        try:
            result = subprocess.run(['alembic', 'upgrade', 'head'], capture_output=True, text=True)
        except OSError as e:
            logger.error(f"Migration error: {e}")
        else:
            if result.returncode == 0:
                logger.info("Migrations completed successfully")
            else:
                logger.error(f"Migration failed: {result.stderr}")
    yield


app = FastAPI(
    title="Jewelry Storefront API",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Add middleware to handle HTTPS behind proxy
@app.middleware("http")
async def proxy_headers_middleware(request: Request, call_next):
    forwarded_proto = request.headers.get("x-forwarded-proto")
    if forwarded_proto == "https":
        request.scope["scheme"] = "https"
    response = await call_next(request)
    return response


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error_response(400, exc)


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return _error_response(404, exc)


@app.exception_handler(OutOfStockError)
async def out_of_stock_error_handler(request: Request, exc: OutOfStockError):
    return _error_response(409, exc)


@app.exception_handler(BaseServiceError)
async def service_error_handler(request: Request, exc: BaseServiceError):
    logger.error(f"Unhandled service error on {request.url.path}: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(shipping.router)
app.include_router(products.router)
app.include_router(cart.router)
app.include_router(wishlist.router)
app.include_router(tax.router)
app.include_router(health.router)  # Health check should be accessible without auth
