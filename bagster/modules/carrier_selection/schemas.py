"""
Pydantic schemas for the Carrier Selection module
"""

from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from pydantic import BaseModel, Field, field_validator, model_validator

from bagster.config.constants import STATUS_SUCCESS, STATUS_ERROR

from .constants import (
    CarrierStatus,
    RejectionReason,
    SelectionStrategy,
    DEFAULT_CURRENCY,
    DEFAULT_STRATEGY,
    MAX_RATING,
    STRATEGIES_REQUIRING_DESTINATION,
)
from .errors import InvalidInput
from .utils import check_unique_ids, check_weight, parse_strategy


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoverageSchema(BaseModel):
    """Coverage flags of a carrier."""
    domestic: bool = Field(default=True, description="Domestic deliveries")
    international: bool = Field(default=False, description="Cross-border deliveries")
    same_day: bool = Field(default=False, description="Same-day service")
    next_day: bool = Field(default=False, description="Next-day service")


class CarrierSchema(BaseModel):
    """Carrier record as supplied by the carrier source."""
    id: str = Field(..., min_length=1, description="Unique carrier identifier")
    name: str = Field(..., description="Display name")
    rating: float = Field(..., ge=0, le=MAX_RATING, description="Rating on a 0-5 scale")
    base_price_per_kg: float = Field(..., ge=0, description="Base rate per kilogram")
    pickup_fee: float = Field(default=0.0, ge=0, description="Flat pickup fee")
    minimum_charge: float = Field(default=0.0, ge=0, description="Minimum total charge")
    currency: str = Field(default=DEFAULT_CURRENCY, description="Pricing currency")
    service_areas: List[str] = Field(default_factory=list, description="Served locations ('All <Country>' = wildcard)")
    delivery_countries: List[str] = Field(default_factory=list, description="Countries the carrier specializes in")
    transport_modes: List[str] = Field(default_factory=list, description="Transport modes (air/road/sea/...)")
    services: List[str] = Field(default_factory=list, description="Service capability tags")
    status: CarrierStatus = Field(default=CarrierStatus.PENDING, description="Onboarding status")
    insurance_available: bool = Field(default=False, description="Carrier offers insurance")
    verified: bool = Field(default=False, description="Carrier identity verified")
    max_weight_kg: Optional[float] = Field(None, gt=0, description="Maximum shipment weight (None = unlimited)")
    special_handling: List[str] = Field(default_factory=list, description="Special handling capabilities")
    coverage: CoverageSchema = Field(default_factory=CoverageSchema, description="Coverage flags")

    @property
    def is_approved(self) -> bool:
        return self.status == CarrierStatus.APPROVED


class ShipmentRequestSchema(BaseModel):
    """Shipment to be placed with a carrier."""
    origin: str = Field(..., min_length=1, description="Origin location (free text)")
    destination: str = Field(..., min_length=1, description="Destination location (free text)")
    weight_kg: float = Field(..., description="Package weight in kilograms (> 0)")

    @field_validator("weight_kg")
    @classmethod
    def validate_weight(cls, v):
        """Rejects non-positive and non-finite weights with a typed error."""
        check_weight(v)
        return v


class SelectionCriteriaSchema(BaseModel):
    """Strategy and hard filters for a selection request."""
    strategy: SelectionStrategy = Field(
        default=DEFAULT_STRATEGY,
        description="cheapest / best_rated / balanced / destination_focused"
    )
    destination_country: Optional[str] = Field(
        None,
        description="Target country (required for destination_focused)"
    )
    max_price: Optional[float] = Field(None, ge=0, description="Maximum total cost")
    min_rating: Optional[float] = Field(None, ge=0, le=MAX_RATING, description="Minimum rating")
    required_services: List[str] = Field(default_factory=list, description="Services the carrier must offer")
    transport_mode: Optional[str] = Field(None, description="Transport mode the carrier must offer")
    insurance_required: bool = Field(default=False, description="Carrier must offer insurance")

    @field_validator("strategy", mode="before")
    @classmethod
    def validate_strategy(cls, v):
        """Maps the strategy name onto the enum, rejecting unknown names."""
        return parse_strategy(v)

    @field_validator("destination_country", "transport_mode")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v

    @model_validator(mode="after")
    def validate_destination_requirement(self):
        if self.strategy in STRATEGIES_REQUIRING_DESTINATION and not self.destination_country:
            raise InvalidInput(
                f"Strategy '{self.strategy.value}' requires destination_country",
                details={"field": "destination_country"},
            )
        return self

    def with_default_strategy(self, strategy) -> "SelectionCriteriaSchema":
        """
        Apply a configured default strategy.

        Returns self when the caller chose a strategy explicitly, otherwise
        a validated copy using the given strategy.
        """
        if "strategy" in self.model_fields_set:
            return self
        return SelectionCriteriaSchema(
            **self.model_dump(exclude={"strategy"}),
            strategy=strategy,
        )


class SmartSelectionRequestSchema(ShipmentRequestSchema):
    """Body of a smart selection request."""
    selection_criteria: SelectionCriteriaSchema = Field(
        default_factory=SelectionCriteriaSchema,
        description="Strategy and filters"
    )
    top_n: Optional[int] = Field(None, ge=1, description="Number of recommendations (None = default)")
    carriers: Optional[List[CarrierSchema]] = Field(
        None,
        description="Candidate carriers (None = use the carrier catalogue)"
    )

    @field_validator("carriers")
    @classmethod
    def validate_unique_ids(cls, v):
        if v is not None:
            check_unique_ids(v)
        return v

    def to_shipment(self) -> ShipmentRequestSchema:
        return ShipmentRequestSchema(
            origin=self.origin,
            destination=self.destination,
            weight_kg=self.weight_kg,
        )


class CarrierScoreSchema(BaseModel):
    """Score of one evaluated carrier."""
    rank: int = Field(..., ge=1, description="Position in the ranking")
    carrier_id: str = Field(..., description="Carrier identifier")
    carrier_name: str = Field(..., description="Carrier display name")
    total_cost: float = Field(..., ge=0, description="Total shipping cost")
    currency: str = Field(default=DEFAULT_CURRENCY)
    price_score: float = Field(..., ge=0, le=1)
    rating_score: float = Field(..., ge=0, le=1)
    destination_score: float = Field(..., ge=0, le=1)
    total_score: float = Field(..., ge=0, le=1, description="Weighted total (0-1)")
    selection_reason: str = Field(..., description="Human-readable explanation")


class WeightsSchema(BaseModel):
    """Weights applied to the three sub-scores."""
    price: float
    rating: float
    destination: float


class ScoringBreakdownSchema(BaseModel):
    strategy: SelectionStrategy
    weights_used: WeightsSchema
    explanation: str


class RouteInfoSchema(BaseModel):
    origin: str
    destination: str
    weight_kg: float


class RejectedCarrierSchema(BaseModel):
    """Carrier excluded by the eligibility filter."""
    carrier_id: str
    carrier_name: str
    reason: RejectionReason
    detail: Optional[str] = None


class FilterStatisticsSchema(BaseModel):
    """Statistics of the eligibility filter."""
    total_candidates: int = Field(..., description="Carriers received")
    eligible_candidates: int = Field(..., description="Carriers left after filtering")
    rejected_candidates: int = Field(..., description="Carriers excluded")
    rejected_carriers: List[RejectedCarrierSchema] = Field(default_factory=list)


class SelectionMetadataSchema(BaseModel):
    filter_statistics: FilterStatisticsSchema
    processing_time_ms: float = Field(..., ge=0)


class SelectionResponseSchema(BaseModel):
    """Smart selection result."""
    status: str = Field(default=STATUS_SUCCESS)
    timestamp: datetime = Field(default_factory=_utcnow)
    selected_carrier: Optional[CarrierScoreSchema] = Field(None, description="Top pick (None = no eligible carrier)")
    recommendations: List[CarrierScoreSchema] = Field(default_factory=list, description="Top-N ranked carriers")
    total_evaluated: int = Field(..., ge=0, description="Number of carriers scored")
    scoring_breakdown: ScoringBreakdownSchema
    route_info: RouteInfoSchema
    metadata: SelectionMetadataSchema
    warnings: Optional[List[str]] = None


class RateQuoteSchema(BaseModel):
    """Rate quote of one carrier for a shipment."""
    carrier_id: str
    carrier_name: str
    rating: float
    total_cost: float
    price_per_kg: float = Field(..., description="Effective price per kg (total / weight)")
    minimum_charge_applied: bool
    currency: str = Field(default=DEFAULT_CURRENCY)
    transport_modes: List[str] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)
    insurance_available: bool = False


class RatesResponseSchema(BaseModel):
    status: str = Field(default=STATUS_SUCCESS)
    origin: str
    destination: str
    weight_kg: float
    transport_mode: Optional[str] = None
    carriers: List[RateQuoteSchema]
    total_carriers: int


class CarrierListResponseSchema(BaseModel):
    status: str = Field(default=STATUS_SUCCESS)
    carriers: List[CarrierSchema]
    total_count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponseSchema(BaseModel):
    """Error response."""
    status: str = Field(default=STATUS_ERROR)
    timestamp: datetime = Field(default_factory=_utcnow)
    error_code: str
    error_message: str
    details: Optional[Dict[str, Any]] = None
