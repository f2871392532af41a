"""
FastAPI Application Entry Point

Mesob Food Ordering - Utility API
Exposes the shared utilities to the marketplace services over HTTP so that
the web, dashboard and driver apps compute estimates, identifiers and
validation the same way.

Endpoints:
    - POST /api/utils/delivery-estimate: Distance and delivery time
    - POST /api/utils/order-number: New order number
    - POST /api/utils/slug: URL slug for a name
    - POST /api/utils/validate: Email/phone/password/ObjectId checks
    - GET /api/utils/loyalty/{lifetime_points}: Loyalty tier standing
    - GET /health: System health check

Author: Mesob Platform Team
Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Path, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mesob.core.config import get_settings, setup_logging
from mesob.schemas import (
    DeliveryEstimateRequest,
    DeliveryEstimateResponse,
    ErrorResponse,
    HealthResponse,
    LoyaltyTierResponse,
    OrderNumberResponse,
    PasswordCheck,
    SlugRequest,
    SlugResponse,
    ValidationRequest,
    ValidationResponse,
)
from mesob.utils import (
    estimate_delivery,
    generate_order_number,
    is_valid_email,
    is_valid_object_id,
    is_valid_phone,
    slugify,
    tier_summary,
    validate_password,
)

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info(f"   Locale: {settings.default_locale} ({settings.default_currency})")
    logger.info(
        f"   Delivery: {settings.delivery_speed_kmh:g} km/h, "
        f"{settings.default_preparation_minutes} min prep"
    )
    logger.info("=" * 60)

    yield  # Application runs

    logger.info("Shutting down...")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Shared utilities for the food ordering marketplace: delivery "
        "estimates, order numbers, slugs, validation and loyalty tiers."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check() -> HealthResponse:
    """The utilities have no external dependencies to probe."""
    return HealthResponse(
        status="operational",
        environment=settings.env_mode.value,
        version=settings.app_version,
        timestamp=datetime.now(),
    )


# =============================================================================
# UTILITY ENDPOINTS
# =============================================================================

@app.post(
    "/api/utils/delivery-estimate",
    response_model=DeliveryEstimateResponse,
    tags=["Delivery"],
    summary="Estimate Delivery Distance and Time",
)
async def delivery_estimate(body: DeliveryEstimateRequest) -> DeliveryEstimateResponse:
    """Great-circle distance plus preparation and travel time."""
    preparation = (
        body.preparation_minutes
        if body.preparation_minutes is not None
        else settings.default_preparation_minutes
    )
    estimate = estimate_delivery(
        body.origin_lat,
        body.origin_lng,
        body.dest_lat,
        body.dest_lng,
        preparation,
        speed_kmh=settings.delivery_speed_kmh,
    )
    logger.info(
        f"Delivery estimate: {estimate.formatted_distance}, "
        f"{estimate.total_minutes} min"
    )
    return DeliveryEstimateResponse(**estimate.to_dict())


@app.post(
    "/api/utils/order-number",
    response_model=OrderNumberResponse,
    tags=["Identifiers"],
    summary="Generate Order Number",
)
async def order_number() -> OrderNumberResponse:
    """
    Generate a candidate order number.

    Uniqueness is enforced when the order is stored, not here.
    """
    return OrderNumberResponse(order_number=generate_order_number())


@app.post(
    "/api/utils/slug",
    response_model=SlugResponse,
    tags=["Identifiers"],
    summary="Slugify Text",
)
async def slug(body: SlugRequest) -> SlugResponse:
    return SlugResponse(slug=slugify(body.text))


@app.post(
    "/api/utils/validate",
    response_model=ValidationResponse,
    tags=["Validation"],
    summary="Validate Form Fields",
)
async def validate_fields(body: ValidationRequest) -> ValidationResponse:
    """Check each submitted field; omitted fields are not checked."""
    result = ValidationResponse()

    if body.email is not None:
        result.email = is_valid_email(body.email)
    if body.phone is not None:
        result.phone = is_valid_phone(body.phone)
    if body.password is not None:
        check = validate_password(body.password)
        result.password = PasswordCheck(**check.to_dict())
    if body.object_id is not None:
        result.object_id = is_valid_object_id(body.object_id)

    result.all_valid = all(
        outcome is not False
        for outcome in (
            result.email,
            result.phone,
            result.object_id,
            result.password.is_valid if result.password else None,
        )
    )
    return result


@app.get(
    "/api/utils/loyalty/{lifetime_points}",
    response_model=LoyaltyTierResponse,
    tags=["Loyalty"],
    summary="Loyalty Tier Standing",
)
async def loyalty_tier(
    lifetime_points: int = Path(..., ge=0),
) -> LoyaltyTierResponse:
    return LoyaltyTierResponse(**tier_summary(lifetime_points).to_dict())


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            detail=str(exc) if settings.debug else "An unexpected error occurred",
        ).model_dump(),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("mesob.main:app", host=settings.api_host, port=settings.api_port)
