"""
Smart carrier selection API endpoints.

Stateless scoring service: ranks the carriers able to take a shipment and
picks the best one for the requested strategy.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bagster.api.dependencies import get_catalogue_dep, get_orchestrator_dep
from bagster.config import settings
from bagster.modules.carrier_selection import (
    CarrierCatalogue,
    CarrierSelectionError,
    ErrorResponseSchema,
    Orchestrator,
    SelectionCriteriaSchema,
    SelectionResponseSchema,
    ShipmentRequestSchema,
    SmartSelectionRequestSchema,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _effective_top_n(top_n: Optional[int]) -> int:
    return min(top_n or settings.default_top_n, settings.max_top_n)


@router.post(
    "",
    response_model=SelectionResponseSchema,
    responses={
        200: {"description": "Selection computed (possibly with no eligible carrier)"},
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        500: {"model": ErrorResponseSchema, "description": "Internal error"},
    },
    summary="Select the best carrier for a shipment",
    description="""
    Ranks carriers for a shipment and selects the top one.

    **Process:**
    1. **Eligibility**: approved carriers serving the destination that pass
       the hard filters (max_price, min_rating, required_services,
       transport_mode, insurance_required, capacity)
    2. **Scoring**: price, rating and destination sub-scores in [0, 1]
    3. **Weighting**: per strategy (cheapest, best_rated, balanced,
       destination_focused)
    4. **Ranking**: total score desc, total cost asc, carrier id asc

    When `carriers` is omitted the approved carriers of the catalogue are
    used. No eligible carrier is a successful response with
    `selected_carrier = null`.
    """,
)
async def select_carrier(
    request: SmartSelectionRequestSchema,
    orchestrator: Orchestrator = Depends(get_orchestrator_dep),
    catalogue: CarrierCatalogue = Depends(get_catalogue_dep),
) -> SelectionResponseSchema:
    """Run smart carrier selection for a JSON request body."""
    logger.info(
        f"Smart selection request {request.origin} -> {request.destination} "
        f"({request.weight_kg} kg)"
    )

    try:
        carriers = request.carriers if request.carriers is not None else catalogue.approved_carriers()

        return orchestrator.select_carrier(
            carriers=carriers,
            shipment=request.to_shipment(),
            criteria=request.selection_criteria.with_default_strategy(settings.default_strategy),
            top_n=_effective_top_n(request.top_n),
        )

    except CarrierSelectionError:
        raise
    except Exception as e:
        logger.error(f"Smart selection error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to perform smart carrier selection"
        )


@router.get(
    "",
    response_model=SelectionResponseSchema,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
    summary="Quick carrier selection with query parameters",
)
async def select_carrier_quick(
    origin: str = Query(..., min_length=1, description="Origin location"),
    destination: str = Query(..., min_length=1, description="Destination location"),
    weight_kg: float = Query(..., description="Package weight in kg"),
    strategy: Optional[str] = Query(None, description="Selection strategy (default: configured strategy)"),
    destination_country: Optional[str] = Query(None, description="Target country"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum total cost"),
    min_rating: Optional[float] = Query(None, ge=0, le=5, description="Minimum rating"),
    required_services: List[str] = Query(default=[], description="Required services"),
    transport_mode: Optional[str] = Query(None, description="Required transport mode"),
    insurance_required: bool = Query(default=False),
    top_n: Optional[int] = Query(None, ge=1, description="Number of recommendations"),
    orchestrator: Orchestrator = Depends(get_orchestrator_dep),
    catalogue: CarrierCatalogue = Depends(get_catalogue_dep),
) -> SelectionResponseSchema:
    """Run smart carrier selection against the catalogue."""
    try:
        shipment = ShipmentRequestSchema(
            origin=origin,
            destination=destination,
            weight_kg=weight_kg,
        )
        criteria = SelectionCriteriaSchema(
            strategy=strategy or settings.default_strategy,
            destination_country=destination_country,
            max_price=max_price,
            min_rating=min_rating,
            required_services=required_services,
            transport_mode=transport_mode,
            insurance_required=insurance_required,
        )

        return orchestrator.select_carrier(
            carriers=catalogue.approved_carriers(),
            shipment=shipment,
            criteria=criteria,
            top_n=_effective_top_n(top_n),
        )

    except CarrierSelectionError:
        raise
    except Exception as e:
        logger.error(f"Smart selection GET error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to perform smart carrier selection"
        )
