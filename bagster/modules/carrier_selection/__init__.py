"""
Carrier Selection

Weighted multi-criteria carrier selection for Bagster shipments.

This module provides:
- Rate calculation (per-kg rate, pickup fee, minimum charge)
- Strategy resolution (cheapest / best_rated / balanced / destination_focused)
- Eligibility filtering (status, service area, hard filters)
- Scoring and deterministic ranking of eligible carriers
"""

from .orchestrator import Orchestrator, get_orchestrator
from .catalogue import CarrierCatalogue, get_catalogue
from .errors import CarrierSelectionError, InvalidInput, UnknownStrategy
from .schemas import (
    CarrierSchema,
    ShipmentRequestSchema,
    SelectionCriteriaSchema,
    SmartSelectionRequestSchema,
    CarrierScoreSchema,
    SelectionResponseSchema,
    RateQuoteSchema,
    RatesResponseSchema,
    CarrierListResponseSchema,
    ErrorResponseSchema,
)

__all__ = [
    "Orchestrator",
    "get_orchestrator",
    "CarrierCatalogue",
    "get_catalogue",
    "CarrierSelectionError",
    "InvalidInput",
    "UnknownStrategy",
    "CarrierSchema",
    "ShipmentRequestSchema",
    "SelectionCriteriaSchema",
    "SmartSelectionRequestSchema",
    "CarrierScoreSchema",
    "SelectionResponseSchema",
    "RateQuoteSchema",
    "RatesResponseSchema",
    "CarrierListResponseSchema",
    "ErrorResponseSchema",
]
