"""
Health Check API endpoints.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from bagster.config import settings
from bagster.api.schemas import HealthResponse
from bagster.api.dependencies import get_catalogue_dep, get_orchestrator_dep
from bagster.modules.carrier_selection import CarrierCatalogue, Orchestrator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check that the selection engine and carrier catalogue are operational.",
)
async def health_check(
    orchestrator: Orchestrator = Depends(get_orchestrator_dep),
    catalogue: CarrierCatalogue = Depends(get_catalogue_dep),
):
    """
    Health check of the carrier selection components.

    Checks:
    - Rate calculator, strategy resolver, eligibility filter, scoring engine
    - Carrier catalogue has at least one approved carrier
    """
    approved = len(catalogue.approved_carriers())

    components = {
        "rate_calculator": orchestrator.rate_calculator is not None,
        "strategy_resolver": orchestrator.strategy_resolver is not None,
        "eligibility_filter": orchestrator.eligibility_filter is not None,
        "scoring_engine": orchestrator.scoring_engine is not None,
        "carrier_catalogue": approved > 0,
    }

    overall_status = "healthy" if all(components.values()) else "degraded"
    if overall_status != "healthy":
        logger.warning(f"Health check degraded: {components}")

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        components=components,
        carriers_loaded=len(catalogue),
        approved_carriers=approved,
        version=settings.app_version,
    )


@router.get(
    "/live",
    summary="Liveness probe",
)
async def liveness():
    """Simple liveness probe - returns 200 if server is running."""
    return {"status": "alive"}


@router.get(
    "/ready",
    summary="Readiness probe",
)
async def readiness(catalogue: CarrierCatalogue = Depends(get_catalogue_dep)):
    """Ready once the catalogue holds approved carriers."""
    if not catalogue.approved_carriers():
        return {"status": "not_ready", "reason": "No approved carriers loaded"}

    return {"status": "ready"}
