"""
Selection Strategy Resolver

Maps a named selection strategy onto the weight triple used to combine the
price, rating and destination sub-scores.
"""

import logging
import math
from typing import Optional, Tuple, Union, Dict

from .constants import (
    SelectionStrategy,
    STRATEGY_WEIGHTS,
    STRATEGIES_REQUIRING_DESTINATION,
    WEIGHT_SUM_TOLERANCE,
    CRITERIA_NAMES,
)
from .errors import InvalidInput
from .schemas import SelectionCriteriaSchema
from .utils import parse_strategy

logger = logging.getLogger(__name__)


class StrategyResolver:
    """
    Resolves selection strategies to weights.

    | strategy            | price | rating | destination |
    |---------------------|-------|--------|-------------|
    | cheapest            | 1.0   | 0.0    | 0.0         |
    | best_rated          | 0.0   | 1.0    | 0.0         |
    | balanced (default)  | 0.4   | 0.4    | 0.2         |
    | destination_focused | 0.2   | 0.2    | 0.6         |
    """

    def __init__(self, weights: Optional[Dict[SelectionStrategy, Tuple[float, float, float]]] = None):
        """
        Initialize resolver.

        Args:
            weights: Per-strategy overrides, merged over STRATEGY_WEIGHTS

        Raises:
            InvalidInput: If a weight triple is negative or does not sum to 1
        """
        self.weights = dict(STRATEGY_WEIGHTS)
        for strategy, triple in (weights or {}).items():
            self.weights[parse_strategy(strategy)] = tuple(triple)

        for strategy, triple in self.weights.items():
            self.check_conservation(strategy, triple)

    @staticmethod
    def check_conservation(strategy: SelectionStrategy, triple: Tuple[float, float, float]) -> None:
        """Ensure a weight triple is a convex combination."""
        if len(triple) != len(CRITERIA_NAMES) or any(w < 0 for w in triple):
            raise InvalidInput(f"Invalid weights for strategy {strategy}: {triple}")

        if not math.isclose(sum(triple), 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
            raise InvalidInput(
                f"Weights for strategy {strategy} sum to {sum(triple)}, expected 1.0"
            )

    def resolve_weights(
        self,
        strategy: Union[str, SelectionStrategy, None]
    ) -> Tuple[float, float, float]:
        """
        Resolve a strategy to its (price, rating, destination) weights.

        Args:
            strategy: Strategy name or enum member (None = balanced)

        Returns:
            Weight triple summing to 1.0

        Raises:
            UnknownStrategy: If the strategy is not recognized
        """
        parsed = parse_strategy(strategy)
        return self.weights[parsed]

    def resolve(self, criteria: SelectionCriteriaSchema) -> Tuple[float, float, float]:
        """
        Resolve the weights for full selection criteria.

        Besides the strategy lookup this enforces the per-strategy
        requirements (destination_focused needs a destination country).

        Raises:
            InvalidInput: If a required field for the strategy is missing
        """
        strategy = parse_strategy(criteria.strategy)

        if strategy in STRATEGIES_REQUIRING_DESTINATION and not criteria.destination_country:
            raise InvalidInput(
                f"Strategy '{strategy.value}' requires destination_country",
                details={"field": "destination_country"},
            )

        weights = self.weights[strategy]
        logger.info(f"Resolved strategy {strategy.value} to weights {weights}")

        return weights

    @staticmethod
    def as_dict(weights: Tuple[float, float, float]) -> Dict[str, float]:
        """Name the components of a weight triple."""
        return dict(zip(CRITERIA_NAMES, weights))
