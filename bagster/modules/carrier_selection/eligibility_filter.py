"""
Eligibility Filter

Applies the hard constraints a carrier must satisfy before it is scored:
approval status, service area coverage and the optional filters carried by
the selection criteria.
"""

import logging
from typing import List, Tuple, Optional

from .schemas import (
    CarrierSchema,
    ShipmentRequestSchema,
    SelectionCriteriaSchema,
    RejectedCarrierSchema,
)
from .rate_calculator import RateCalculator
from .constants import RejectionReason
from .utils import serves_location, contains_ignore_case, missing_tags

logger = logging.getLogger(__name__)


class EligibilityFilter:
    """
    Filters candidate carriers.

    A carrier is eligible if, in order:
    1. its status is approved
    2. one of its service areas covers the destination (and the origin when
       require_origin_coverage is set)
    3. its rating is at least min_rating
    4. it offers every required service
    5. it offers the requested transport mode
    6. it offers insurance when insurance is required
    7. its capacity (max_weight_kg) accommodates the package
    8. its total cost does not exceed max_price

    The first failing check is reported as the rejection reason.
    """

    def __init__(
        self,
        rate_calculator: Optional[RateCalculator] = None,
        require_origin_coverage: bool = False
    ):
        """
        Initialize eligibility filter.

        Args:
            rate_calculator: Calculator used for the max_price check
            require_origin_coverage: Also require the origin to be served
        """
        self.rate_calculator = rate_calculator or RateCalculator()
        self.require_origin_coverage = require_origin_coverage

    def check(
        self,
        carrier: CarrierSchema,
        shipment: ShipmentRequestSchema,
        criteria: SelectionCriteriaSchema
    ) -> Optional[Tuple[RejectionReason, Optional[str]]]:
        """
        Check one carrier against all constraints.

        Returns:
            None if eligible, otherwise (reason, detail)
        """
        if not carrier.is_approved:
            return RejectionReason.STATUS_NOT_APPROVED, f"status={carrier.status.value}"

        if not serves_location(carrier.service_areas, shipment.destination):
            return RejectionReason.OUTSIDE_SERVICE_AREA, f"destination={shipment.destination}"

        if self.require_origin_coverage and not serves_location(carrier.service_areas, shipment.origin):
            return RejectionReason.OUTSIDE_SERVICE_AREA, f"origin={shipment.origin}"

        if criteria.min_rating is not None and carrier.rating < criteria.min_rating:
            return (
                RejectionReason.BELOW_MIN_RATING,
                f"rating={carrier.rating} < {criteria.min_rating}"
            )

        missing = missing_tags(carrier.services, criteria.required_services)
        if missing:
            return RejectionReason.MISSING_REQUIRED_SERVICES, f"missing={','.join(missing)}"

        if criteria.transport_mode and not contains_ignore_case(
            carrier.transport_modes, criteria.transport_mode
        ):
            return (
                RejectionReason.TRANSPORT_MODE_UNAVAILABLE,
                f"transport_mode={criteria.transport_mode}"
            )

        if criteria.insurance_required and not carrier.insurance_available:
            return RejectionReason.INSURANCE_UNAVAILABLE, None

        if carrier.max_weight_kg is not None and shipment.weight_kg > carrier.max_weight_kg:
            return (
                RejectionReason.EXCEEDS_CAPACITY,
                f"weight_kg={shipment.weight_kg} > {carrier.max_weight_kg}"
            )

        if criteria.max_price is not None:
            total_cost = self.rate_calculator.calculate_cost(carrier, shipment.weight_kg)
            if total_cost > criteria.max_price:
                return (
                    RejectionReason.ABOVE_MAX_PRICE,
                    f"total_cost={total_cost} > {criteria.max_price}"
                )

        return None

    def filter(
        self,
        carriers: List[CarrierSchema],
        shipment: ShipmentRequestSchema,
        criteria: SelectionCriteriaSchema
    ) -> Tuple[List[CarrierSchema], List[RejectedCarrierSchema]]:
        """
        Split carriers into eligible and rejected.

        Args:
            carriers: Candidate carriers
            shipment: Shipment request
            criteria: Selection criteria (hard filters)

        Returns:
            Tuple of:
            - List of eligible carriers (input order preserved)
            - List of rejected carriers with reasons
        """
        logger.info(
            f"Filtering {len(carriers)} carriers for "
            f"{shipment.origin} -> {shipment.destination}"
        )

        eligible = []
        rejected = []

        for carrier in carriers:
            outcome = self.check(carrier, shipment, criteria)

            if outcome is None:
                eligible.append(carrier)
                logger.debug(f"Carrier {carrier.id} ELIGIBLE")
                continue

            reason, detail = outcome
            rejected.append(RejectedCarrierSchema(
                carrier_id=carrier.id,
                carrier_name=carrier.name,
                reason=reason,
                detail=detail,
            ))
            logger.debug(f"Carrier {carrier.id} REJECTED: {reason.value} ({detail})")

        logger.info(
            f"Eligibility filtering complete: {len(eligible)} eligible, "
            f"{len(rejected)} rejected"
        )

        return eligible, rejected
