"""
Rate quote API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bagster.api.dependencies import get_catalogue_dep, get_orchestrator_dep
from bagster.modules.carrier_selection import (
    CarrierCatalogue,
    CarrierSelectionError,
    ErrorResponseSchema,
    Orchestrator,
    RatesResponseSchema,
    ShipmentRequestSchema,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=RatesResponseSchema,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
    summary="Quote shipping rates",
    description="Rates of every approved carrier serving the destination, cheapest first.",
)
async def get_rates(
    origin: str = Query(..., min_length=1),
    destination: str = Query(..., min_length=1),
    weight_kg: float = Query(..., description="Package weight in kg"),
    transport_mode: Optional[str] = Query(None, description="Required transport mode"),
    orchestrator: Orchestrator = Depends(get_orchestrator_dep),
    catalogue: CarrierCatalogue = Depends(get_catalogue_dep),
) -> RatesResponseSchema:
    """Quote rates for a shipment."""
    try:
        shipment = ShipmentRequestSchema(
            origin=origin,
            destination=destination,
            weight_kg=weight_kg,
        )
        quotes = orchestrator.quote_rates(
            carriers=catalogue.approved_carriers(),
            shipment=shipment,
            transport_mode=transport_mode,
        )

        return RatesResponseSchema(
            origin=origin,
            destination=destination,
            weight_kg=weight_kg,
            transport_mode=transport_mode,
            carriers=quotes,
            total_carriers=len(quotes),
        )

    except CarrierSelectionError:
        raise
    except Exception as e:
        logger.error(f"Rate calculation error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate rates"
        )
