"""
Orchestrator - Main coordinator for the Carrier Selection module

Coordinates the smart selection workflow:
1. Validation of the shipment and selection criteria
2. Eligibility filtering
3. Strategy weight resolution
4. Scoring and ranking
5. Response assembly (top pick, top-N recommendations, breakdown)
"""

import logging
import time
from typing import List, Optional

from .schemas import (
    CarrierSchema,
    CarrierScoreSchema,
    ShipmentRequestSchema,
    SelectionCriteriaSchema,
    SelectionResponseSchema,
    ScoringBreakdownSchema,
    WeightsSchema,
    RouteInfoSchema,
    SelectionMetadataSchema,
    FilterStatisticsSchema,
    RejectedCarrierSchema,
    RateQuoteSchema,
)
from .rate_calculator import RateCalculator
from .strategy_resolver import StrategyResolver
from .eligibility_filter import EligibilityFilter
from .scoring_engine import ScoringEngine
from .constants import DEFAULT_TOP_N

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Orchestrates carrier selection.

    The orchestrator holds no carrier data: candidates are passed with every
    call, which keeps it safe to share between concurrent requests.
    """

    def __init__(
        self,
        default_top_n: int = DEFAULT_TOP_N,
        require_origin_coverage: bool = False
    ):
        """
        Initialize orchestrator with all required components.

        Args:
            default_top_n: Recommendations returned when the caller gives none
            require_origin_coverage: Also match the origin against service areas
        """
        self.default_top_n = default_top_n
        self.rate_calculator = RateCalculator()
        self.strategy_resolver = StrategyResolver()
        self.eligibility_filter = EligibilityFilter(
            rate_calculator=self.rate_calculator,
            require_origin_coverage=require_origin_coverage,
        )
        self.scoring_engine = ScoringEngine(
            rate_calculator=self.rate_calculator,
            strategy_resolver=self.strategy_resolver,
            eligibility_filter=self.eligibility_filter,
        )

    def select_carrier(
        self,
        carriers: List[CarrierSchema],
        shipment: ShipmentRequestSchema,
        criteria: Optional[SelectionCriteriaSchema] = None,
        top_n: Optional[int] = None
    ) -> SelectionResponseSchema:
        """
        Complete smart selection workflow.

        Args:
            carriers: Candidate carriers
            shipment: Shipment request
            criteria: Selection criteria (None = balanced, no filters)
            top_n: Number of recommendations (None = default_top_n)

        Returns:
            SelectionResponseSchema; selected_carrier is None when no carrier
            is eligible

        Raises:
            InvalidInput: Malformed request
            UnknownStrategy: Unrecognized strategy
        """
        start_time = time.perf_counter()
        criteria = criteria or SelectionCriteriaSchema()
        top_n = top_n or self.default_top_n

        logger.info(
            f"Starting carrier selection {shipment.origin} -> {shipment.destination} "
            f"({shipment.weight_kg} kg, strategy={criteria.strategy.value}) "
            f"with {len(carriers)} candidates"
        )

        scores, rejected, weights = self.scoring_engine.evaluate(carriers, shipment, criteria)

        recommendations = scores[:top_n]
        selected = recommendations[0] if recommendations else None

        warnings = None
        if selected is None:
            explanation = (
                f"No eligible carrier matched the {criteria.strategy.value} "
                f"strategy and filters."
            )
            warnings = ["No eligible carriers found; try different parameters"]
        else:
            explanation = (
                f"Selected based on {criteria.strategy.value} strategy. "
                f"{selected.selection_reason}"
            )

        processing_time_ms = (time.perf_counter() - start_time) * 1000

        response = SelectionResponseSchema(
            selected_carrier=selected,
            recommendations=recommendations,
            total_evaluated=len(scores),
            scoring_breakdown=ScoringBreakdownSchema(
                strategy=criteria.strategy,
                weights_used=WeightsSchema(**self.strategy_resolver.as_dict(weights)),
                explanation=explanation,
            ),
            route_info=RouteInfoSchema(
                origin=shipment.origin,
                destination=shipment.destination,
                weight_kg=shipment.weight_kg,
            ),
            metadata=SelectionMetadataSchema(
                filter_statistics=self._build_statistics(carriers, scores, rejected),
                processing_time_ms=round(processing_time_ms, 3),
            ),
            warnings=warnings,
        )

        logger.info(
            f"Carrier selection complete: selected="
            f"{selected.carrier_id if selected else None}, "
            f"{len(scores)} evaluated in {processing_time_ms:.1f}ms"
        )

        return response

    def quote_rates(
        self,
        carriers: List[CarrierSchema],
        shipment: ShipmentRequestSchema,
        transport_mode: Optional[str] = None
    ) -> List[RateQuoteSchema]:
        """
        Quote every carrier able to take the shipment, cheapest first.

        Args:
            carriers: Candidate carriers
            shipment: Shipment request
            transport_mode: Restrict to carriers offering this mode

        Returns:
            List of RateQuoteSchema sorted by total cost, then carrier id
        """
        self.rate_calculator.validate_weight(shipment.weight_kg)
        criteria = SelectionCriteriaSchema(transport_mode=transport_mode)

        eligible, _ = self.eligibility_filter.filter(carriers, shipment, criteria)

        quotes = []
        for carrier in eligible:
            quote = self.rate_calculator.quote(carrier, shipment.weight_kg)
            quotes.append(RateQuoteSchema(
                carrier_id=carrier.id,
                carrier_name=carrier.name,
                rating=carrier.rating,
                currency=carrier.currency,
                transport_modes=carrier.transport_modes,
                services=carrier.services,
                insurance_available=carrier.insurance_available,
                **quote,
            ))

        quotes.sort(key=lambda q: (q.total_cost, q.carrier_id))

        logger.info(f"Quoted {len(quotes)} carriers for {shipment.destination}")

        return quotes

    @staticmethod
    def _build_statistics(
        carriers: List[CarrierSchema],
        scores: List[CarrierScoreSchema],
        rejected: List[RejectedCarrierSchema]
    ) -> FilterStatisticsSchema:
        return FilterStatisticsSchema(
            total_candidates=len(carriers),
            eligible_candidates=len(scores),
            rejected_candidates=len(rejected),
            rejected_carriers=rejected,
        )


# ============================================================
# DEPENDENCY INJECTION / FACTORY
# ============================================================

_orchestrator_instance: Optional[Orchestrator] = None


def get_orchestrator() -> Orchestrator:
    """
    Get the shared Orchestrator instance.

    Used for dependency injection in FastAPI routes and the CLI. The
    instance is stateless, so sharing it is safe.
    """
    global _orchestrator_instance

    if _orchestrator_instance is None:
        from bagster.config import settings

        _orchestrator_instance = Orchestrator(
            default_top_n=settings.default_top_n,
            require_origin_coverage=settings.require_origin_coverage,
        )
        logger.info("Orchestrator instance created")

    return _orchestrator_instance
