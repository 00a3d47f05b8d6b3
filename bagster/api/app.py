"""
FastAPI application factory.
Creates and configures the carrier selection API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from elasticapm.contrib.starlette import make_apm_client, ElasticAPM
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from bagster.config import settings, SERVICE_NAME, STATUS_ERROR
from bagster.modules.carrier_selection import (
    CarrierSelectionError,
    ErrorResponseSchema,
    get_catalogue,
)
from .middleware import CorrelationIdMiddleware, RequestLoggingMiddleware
from .routes import api_router
from .schemas import ServiceInfoResponse

logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    logger.info("Starting application...")

    catalogue = get_catalogue()
    logger.info(
        f"Carrier catalogue loaded: {len(catalogue)} carriers, "
        f"{len(catalogue.approved_carriers())} approved"
    )

    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.app_name,
        description="""
        # Bagster Carrier Selection

        Scores and ranks carriers for a shipment and selects the best one.

        ## Strategies

        - **cheapest**: price only
        - **best_rated**: rating only
        - **balanced**: price and rating first, destination match second (default)
        - **destination_focused**: destination specialization first, requires `destination_country`

        ## Endpoints

        - **Smart selection**: ranked recommendations with scoring breakdown
        - **Rates**: per-carrier rate quotes
        - **Carriers**: carrier directory lookup
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging runs inside the correlation context
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    # Elastic APM integration
    if settings.apm_enabled:
        apm_client = make_apm_client({
            'SERVICE_NAME': SERVICE_NAME,
            'SERVER_URL': settings.apm_server_url,
            'ENVIRONMENT': settings.environment,
            'CAPTURE_BODY': 'all',
            'TRANSACTION_SAMPLE_RATE': 1.0,
        })
        app.add_middleware(ElasticAPM, client=apm_client)

    @app.exception_handler(CarrierSelectionError)
    async def carrier_selection_error_handler(request: Request, exc: CarrierSelectionError):
        logger.warning(f"Rejected request {request.url.path}: {exc.error_code} {exc.message}")
        body = ErrorResponseSchema(status=STATUS_ERROR, **exc.to_dict())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(mode="json"),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        body = ErrorResponseSchema(
            status=STATUS_ERROR,
            error_code="INTERNAL_ERROR",
            error_message=str(exc) if settings.debug else "An error occurred",
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json"),
        )

    # Include API router
    app.include_router(api_router, prefix=settings.api_prefix)

    # Root endpoint
    @app.get("/", tags=["Root"], response_model=ServiceInfoResponse)
    async def root():
        return ServiceInfoResponse(
            name=settings.app_name,
            version=settings.app_version,
            docs="/docs",
            health=f"{settings.api_prefix}/health",
        )

    return app


# Application instance
app = create_app()
