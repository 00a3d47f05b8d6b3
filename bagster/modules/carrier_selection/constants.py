"""
Constants for the Carrier Selection module
"""

from enum import Enum
from typing import Dict, Tuple

# Ratings are expressed on a 0-5 scale
MAX_RATING = 5.0

# Destination score when no destination country was requested
NEUTRAL_DESTINATION_SCORE = 0.5

# Service area entries of the form "All <Country>" cover every location
WILDCARD_AREA_PREFIX = "all "

# Tolerance used when checking that strategy weights sum to 1
WEIGHT_SUM_TOLERANCE = 1e-9

DEFAULT_TOP_N = 3
DEFAULT_CURRENCY = "USD"

# Sub-score threshold above which a factor is highlighted in the reason
HIGHLIGHT_THRESHOLD = 0.8


class SelectionStrategy(str, Enum):
    """Named weighting policies for combining sub-scores."""
    CHEAPEST = "cheapest"
    BEST_RATED = "best_rated"
    BALANCED = "balanced"
    DESTINATION_FOCUSED = "destination_focused"


class CarrierStatus(str, Enum):
    """Carrier onboarding status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CoverageType(str, Enum):
    """Coverage flags advertised in the carrier directory."""
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"
    SAME_DAY = "same_day"
    NEXT_DAY = "next_day"


class RejectionReason(str, Enum):
    """Why a carrier was excluded before scoring."""
    STATUS_NOT_APPROVED = "status_not_approved"
    OUTSIDE_SERVICE_AREA = "outside_service_area"
    BELOW_MIN_RATING = "below_min_rating"
    MISSING_REQUIRED_SERVICES = "missing_required_services"
    TRANSPORT_MODE_UNAVAILABLE = "transport_mode_unavailable"
    INSURANCE_UNAVAILABLE = "insurance_unavailable"
    EXCEEDS_CAPACITY = "exceeds_capacity"
    ABOVE_MAX_PRICE = "above_max_price"


# Criteria names, in the column order used by the scoring matrix
CRITERIA_NAMES = [
    "price",        # Total cost (cost criterion - lower is better)
    "rating",       # Carrier rating (benefit criterion)
    "destination",  # Destination country specialization (benefit criterion)
]

# Weight triples (price, rating, destination) per strategy
STRATEGY_WEIGHTS: Dict[SelectionStrategy, Tuple[float, float, float]] = {
    SelectionStrategy.CHEAPEST: (1.0, 0.0, 0.0),
    SelectionStrategy.BEST_RATED: (0.0, 1.0, 0.0),
    SelectionStrategy.BALANCED: (0.4, 0.4, 0.2),
    SelectionStrategy.DESTINATION_FOCUSED: (0.2, 0.2, 0.6),
}

DEFAULT_STRATEGY = SelectionStrategy.BALANCED

# Strategies that cannot run without a destination country
STRATEGIES_REQUIRING_DESTINATION = {
    SelectionStrategy.DESTINATION_FOCUSED,
}

# Decimals kept on total scores when ranking; closer totals are ties
SCORE_TIE_PRECISION = 9
