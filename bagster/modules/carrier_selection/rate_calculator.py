"""
Rate Calculator

Derives the total shipping cost charged by a carrier for a package.
"""

import logging
from typing import Dict, Any

from .schemas import CarrierSchema
from .utils import check_weight

logger = logging.getLogger(__name__)


class RateCalculator:
    """
    Computes carrier charges.

    Formula:
        total_cost = max(minimum_charge, base_price_per_kg × weight_kg + pickup_fee)

    Costs are rounded to cents.
    """

    def __init__(self, precision: int = 2):
        """
        Initialize rate calculator.

        Args:
            precision: Number of decimals kept on monetary values
        """
        self.precision = precision

    @staticmethod
    def validate_weight(weight_kg: float) -> None:
        """Raise InvalidInput unless weight_kg is finite and strictly positive."""
        check_weight(weight_kg)

    def calculate_cost(self, carrier: CarrierSchema, weight_kg: float) -> float:
        """
        Calculate the total cost of shipping weight_kg with a carrier.

        Args:
            carrier: Carrier record
            weight_kg: Package weight in kilograms

        Returns:
            Total cost in the carrier's currency

        Raises:
            InvalidInput: If weight_kg is not a finite positive number
        """
        self.validate_weight(weight_kg)

        variable_cost = carrier.base_price_per_kg * weight_kg + carrier.pickup_fee
        total_cost = max(carrier.minimum_charge, variable_cost)

        return round(total_cost, self.precision)

    def quote(self, carrier: CarrierSchema, weight_kg: float) -> Dict[str, Any]:
        """
        Build a rate quote for a carrier.

        Returns:
            Dict with total_cost, price_per_kg (effective) and
            minimum_charge_applied
        """
        total_cost = self.calculate_cost(carrier, weight_kg)
        variable_cost = carrier.base_price_per_kg * weight_kg + carrier.pickup_fee

        quote = {
            "total_cost": total_cost,
            "price_per_kg": round(total_cost / weight_kg, self.precision),
            "minimum_charge_applied": carrier.minimum_charge > variable_cost,
        }

        logger.debug(f"Quote for carrier {carrier.id} at {weight_kg} kg: {quote}")

        return quote
