"""
Scoring Engine

Normalizes price, rating and destination fit into [0, 1] sub-scores,
combines them with the strategy weights and ranks the eligible carriers.
"""

import logging
import numpy as np
from typing import List, Dict, Tuple, Optional

from .schemas import (
    CarrierSchema,
    CarrierScoreSchema,
    ShipmentRequestSchema,
    SelectionCriteriaSchema,
    RejectedCarrierSchema,
)
from .constants import (
    MAX_RATING,
    NEUTRAL_DESTINATION_SCORE,
    HIGHLIGHT_THRESHOLD,
    CRITERIA_NAMES,
    SCORE_TIE_PRECISION,
)
from .rate_calculator import RateCalculator
from .strategy_resolver import StrategyResolver
from .eligibility_filter import EligibilityFilter
from .utils import check_unique_ids, contains_ignore_case

logger = logging.getLogger(__name__)


class ScoringEngine:
    """
    Weighted multi-criteria scoring of carriers.

    Steps:
    1. Validate the request and resolve strategy weights (fail fast)
    2. Filter out ineligible carriers
    3. Compute the total cost of every eligible carrier
    4. Build the sub-score matrix (price, rating, destination)
    5. Apply weights to obtain total scores
    6. Rank by total score desc, total cost asc, carrier id asc
    7. Attach a selection reason to every carrier

    Sub-scores are relative to the eligible set: the cheapest eligible carrier
    always gets price_score = 1.0.
    """

    def __init__(
        self,
        rate_calculator: Optional[RateCalculator] = None,
        strategy_resolver: Optional[StrategyResolver] = None,
        eligibility_filter: Optional[EligibilityFilter] = None
    ):
        """Initialize scoring engine with its collaborators."""
        self.rate_calculator = rate_calculator or RateCalculator()
        self.strategy_resolver = strategy_resolver or StrategyResolver()
        self.eligibility_filter = eligibility_filter or EligibilityFilter(
            rate_calculator=self.rate_calculator
        )

    def build_decision_matrix(
        self,
        carriers: List[CarrierSchema],
        costs: Dict[str, float],
        destination_country: Optional[str]
    ) -> np.ndarray:
        """
        Build the raw criteria matrix.

        Matrix structure (m x 3):
        - column 0: total cost
        - column 1: rating (0-5)
        - column 2: destination fit (1 = specializes in the destination
          country, 0 = does not, NaN = no destination requested)
        """
        matrix = np.zeros((len(carriers), len(CRITERIA_NAMES)))

        for i, carrier in enumerate(carriers):
            matrix[i, 0] = costs[carrier.id]
            matrix[i, 1] = carrier.rating

            if destination_country:
                matrix[i, 2] = 1.0 if contains_ignore_case(
                    carrier.delivery_countries, destination_country
                ) else 0.0
            else:
                matrix[i, 2] = np.nan

        logger.debug(f"Decision matrix:\n{matrix}")

        return matrix

    def normalize_matrix(self, matrix: np.ndarray) -> np.ndarray:
        """
        Convert the raw matrix into sub-scores in [0, 1].

        - price_score = 1 - (cost - min) / (max - min), 1.0 when all costs are equal
        - rating_score = rating / 5
        - destination_score = fit, or 0.5 (neutral) when no destination requested
        """
        costs = matrix[:, 0]
        min_cost = costs.min()
        cost_range = costs.max() - min_cost

        if cost_range == 0:
            price_scores = np.ones_like(costs)
        else:
            price_scores = 1.0 - (costs - min_cost) / cost_range

        rating_scores = matrix[:, 1] / MAX_RATING
        destination_scores = np.where(
            np.isnan(matrix[:, 2]), NEUTRAL_DESTINATION_SCORE, matrix[:, 2]
        )

        normalized = np.column_stack([price_scores, rating_scores, destination_scores])
        normalized = np.clip(normalized, 0.0, 1.0)

        logger.debug(f"Sub-score matrix:\n{normalized}")

        return normalized

    def apply_weights(
        self,
        normalized_matrix: np.ndarray,
        weights: Tuple[float, float, float]
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Weight the sub-scores.

        Returns:
            Tuple of (weighted matrix m x 3, total scores of length m)
        """
        weight_vector = np.array(weights)
        weighted = normalized_matrix * weight_vector
        totals = np.clip(weighted.sum(axis=1), 0.0, 1.0)

        logger.debug(f"Weight vector: {weight_vector}")
        logger.debug(f"Total scores: {totals}")

        return weighted, totals

    def explain(
        self,
        carrier: CarrierSchema,
        sub_scores: np.ndarray,
        contributions: np.ndarray,
        min_cost: float,
        max_rating: float,
        total_cost: float,
        destination_country: Optional[str],
        weights: Tuple[float, float, float]
    ) -> str:
        """
        Build the selection reason of a carrier.

        The dominant factor is the one contributing most to the total score
        (ties resolved in price, rating, destination order). When nothing
        contributes, the most heavily weighted factor is dominant. Other
        factors with a sub-score above the highlight threshold are appended.
        """
        if np.max(contributions) > 0:
            dominant = int(np.argmax(contributions))
        else:
            dominant = int(np.argmax(weights))
        price_score, rating_score, destination_score = sub_scores

        if dominant == 0:
            if total_cost <= min_cost:
                reason = "Selected for lowest cost"
            else:
                reason = f"Selected for competitive cost ({total_cost:.2f} {carrier.currency})"
        elif dominant == 1:
            if carrier.rating >= max_rating:
                reason = "Selected for top rating"
            else:
                reason = f"Selected for strong rating ({carrier.rating:.1f}/5)"
        elif destination_score == 1.0:
            reason = f"Selected for {destination_country} delivery specialization"
        else:
            reason = "Selected for destination coverage"

        highlights = []
        if dominant != 0 and price_score >= HIGHLIGHT_THRESHOLD:
            highlights.append("Excellent price.")
        if dominant != 1 and rating_score >= HIGHLIGHT_THRESHOLD:
            highlights.append("Top-rated carrier.")
        if dominant != 2 and destination_country and destination_score == 1.0:
            highlights.append(f"Specializes in {destination_country} deliveries.")

        return " ".join([reason + "."] + highlights)

    def rank(
        self,
        carriers: List[CarrierSchema],
        shipment: ShipmentRequestSchema,
        criteria: SelectionCriteriaSchema,
        weights: Tuple[float, float, float]
    ) -> List[CarrierScoreSchema]:
        """
        Score and rank already-eligible carriers.

        Args:
            carriers: Eligible carriers
            shipment: Shipment request
            criteria: Selection criteria
            weights: (price, rating, destination) weights

        Returns:
            CarrierScoreSchema list, best first
        """
        if not carriers:
            return []

        costs = {
            carrier.id: self.rate_calculator.calculate_cost(carrier, shipment.weight_kg)
            for carrier in carriers
        }

        matrix = self.build_decision_matrix(carriers, costs, criteria.destination_country)
        normalized = self.normalize_matrix(matrix)
        weighted, totals = self.apply_weights(normalized, weights)

        min_cost = float(matrix[:, 0].min())
        max_rating = float(matrix[:, 1].max())

        order = sorted(
            range(len(carriers)),
            key=lambda i: (
                -round(float(totals[i]), SCORE_TIE_PRECISION),
                matrix[i, 0],
                carriers[i].id,
            )
        )

        results = []
        for rank, i in enumerate(order, start=1):
            carrier = carriers[i]
            results.append(CarrierScoreSchema(
                rank=rank,
                carrier_id=carrier.id,
                carrier_name=carrier.name,
                total_cost=costs[carrier.id],
                currency=carrier.currency,
                price_score=float(normalized[i, 0]),
                rating_score=float(normalized[i, 1]),
                destination_score=float(normalized[i, 2]),
                total_score=float(totals[i]),
                selection_reason=self.explain(
                    carrier=carrier,
                    sub_scores=normalized[i],
                    contributions=weighted[i],
                    min_cost=min_cost,
                    max_rating=max_rating,
                    total_cost=costs[carrier.id],
                    destination_country=criteria.destination_country,
                    weights=weights,
                ),
            ))

        logger.info(
            f"Scoring complete. Top: {results[0].carrier_id} "
            f"({results[0].total_score:.4f}), lowest: {results[-1].carrier_id} "
            f"({results[-1].total_score:.4f})"
        )

        return results

    def evaluate(
        self,
        carriers: List[CarrierSchema],
        shipment: ShipmentRequestSchema,
        criteria: SelectionCriteriaSchema
    ) -> Tuple[List[CarrierScoreSchema], List[RejectedCarrierSchema], Tuple[float, float, float]]:
        """
        Complete scoring process, keeping the filter outcome.

        Returns:
            Tuple of (ranked scores, rejected carriers, weights used)

        Raises:
            InvalidInput: Invalid weight, duplicate carrier ids or missing
                strategy requirement
            UnknownStrategy: Unrecognized strategy
        """
        self.rate_calculator.validate_weight(shipment.weight_kg)
        check_unique_ids(carriers)
        weights = self.strategy_resolver.resolve(criteria)

        eligible, rejected = self.eligibility_filter.filter(carriers, shipment, criteria)

        if not eligible:
            logger.warning("No eligible carriers after filtering")
            return [], rejected, weights

        return self.rank(eligible, shipment, criteria, weights), rejected, weights

    def score(
        self,
        carriers: List[CarrierSchema],
        shipment: ShipmentRequestSchema,
        criteria: SelectionCriteriaSchema
    ) -> List[CarrierScoreSchema]:
        """
        Score carriers for a shipment.

        Args:
            carriers: Candidate carriers (any status, any order)
            shipment: Shipment request
            criteria: Selection criteria

        Returns:
            Ranked CarrierScoreSchema list (empty if none is eligible)
        """
        scores, _, _ = self.evaluate(carriers, shipment, criteria)
        return scores
