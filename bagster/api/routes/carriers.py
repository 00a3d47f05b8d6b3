"""
Carrier directory API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bagster.api.dependencies import get_catalogue_dep
from bagster.modules.carrier_selection import (
    CarrierCatalogue,
    CarrierListResponseSchema,
    CarrierSchema,
)
from bagster.modules.carrier_selection.constants import CarrierStatus, CoverageType

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=CarrierListResponseSchema,
    summary="List carriers",
    description="Carrier directory, highest rated first.",
)
async def list_carriers(
    service_area: Optional[str] = Query(None, description="Location the carrier must serve"),
    transport_mode: Optional[str] = Query(None),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    insurance_required: bool = Query(default=False),
    verified_only: bool = Query(default=False),
    max_weight: Optional[float] = Query(None, gt=0, description="Weight the carrier must accept (kg)"),
    special_handling: Optional[str] = Query(None),
    coverage: Optional[CoverageType] = Query(None),
    delivery_country: Optional[str] = Query(None),
    carrier_status: Optional[CarrierStatus] = Query(None, alias="status"),
    catalogue: CarrierCatalogue = Depends(get_catalogue_dep),
) -> CarrierListResponseSchema:
    """Filter the carrier directory."""
    filters = {
        "service_area": service_area,
        "transport_mode": transport_mode,
        "min_rating": min_rating,
        "insurance_required": insurance_required,
        "verified_only": verified_only,
        "max_weight": max_weight,
        "special_handling": special_handling,
        "coverage": coverage,
        "delivery_country": delivery_country,
        "status": carrier_status,
    }

    carriers = catalogue.search(**filters)

    logger.info(f"Carrier search returned {len(carriers)} carriers")

    return CarrierListResponseSchema(
        carriers=carriers,
        total_count=len(carriers),
        filters_applied={
            key: (value.value if hasattr(value, "value") else value)
            for key, value in filters.items()
            if value not in (None, False)
        },
    )


@router.get(
    "/{carrier_id}",
    response_model=CarrierSchema,
    summary="Get a carrier",
)
async def get_carrier(
    carrier_id: str,
    catalogue: CarrierCatalogue = Depends(get_catalogue_dep),
) -> CarrierSchema:
    """Return a single carrier record."""
    carrier = catalogue.get(carrier_id)

    if carrier is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Carrier {carrier_id} not found"
        )

    return carrier
