"""Tests for the Rate Calculator."""

import pytest

from bagster.modules.carrier_selection.rate_calculator import RateCalculator
from bagster.modules.carrier_selection.schemas import CarrierSchema
from bagster.modules.carrier_selection.errors import InvalidInput
from bagster.modules.carrier_selection.constants import CarrierStatus


class TestRateCalculator:
    """Test suite for RateCalculator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.calculator = RateCalculator()

    def create_carrier(self, base=2.5, pickup=15.0, minimum=25.0):
        """Helper to create a carrier with a given tariff."""
        return CarrierSchema(
            id="C1",
            name="Carrier 1",
            rating=4.0,
            base_price_per_kg=base,
            pickup_fee=pickup,
            minimum_charge=minimum,
            service_areas=["Lagos"],
            status=CarrierStatus.APPROVED,
        )

    def test_calculate_cost_above_minimum(self):
        """Variable cost wins when it exceeds the minimum charge."""
        carrier = self.create_carrier()

        # 2.5 * 10 + 15 = 40
        assert self.calculator.calculate_cost(carrier, 10) == 40.0

    def test_calculate_cost_minimum_charge_floor(self):
        """Minimum charge applies to light packages."""
        carrier = self.create_carrier(base=1.0, pickup=2.0, minimum=25.0)

        assert self.calculator.calculate_cost(carrier, 1) == 25.0

    def test_calculate_cost_rounded_to_cents(self):
        """Costs are rounded to two decimals."""
        carrier = self.create_carrier(base=1.111, pickup=0.0, minimum=0.0)

        assert self.calculator.calculate_cost(carrier, 3) == 3.33

    def test_calculate_cost_zero_weight_raises(self):
        """Zero weight is rejected."""
        with pytest.raises(InvalidInput):
            self.calculator.calculate_cost(self.create_carrier(), 0)

    def test_calculate_cost_negative_weight_raises(self):
        """Negative weight is rejected."""
        with pytest.raises(InvalidInput) as exc_info:
            self.calculator.calculate_cost(self.create_carrier(), -1)

        assert exc_info.value.error_code == "INVALID_INPUT"

    def test_cost_increases_with_weight(self):
        """Above the floor, cost grows with weight."""
        carrier = self.create_carrier(minimum=0.0)

        costs = [self.calculator.calculate_cost(carrier, w) for w in (1, 5, 10, 50)]

        assert costs == sorted(costs)

    def test_quote(self):
        """Quote exposes total, effective per-kg price and floor flag."""
        carrier = self.create_carrier()

        quote = self.calculator.quote(carrier, 10)

        assert quote["total_cost"] == 40.0
        assert quote["price_per_kg"] == 4.0
        assert quote["minimum_charge_applied"] is False

    def test_quote_minimum_charge_applied(self):
        """Floor flag is set when the minimum charge wins."""
        carrier = self.create_carrier(base=1.0, pickup=2.0, minimum=25.0)

        quote = self.calculator.quote(carrier, 2)

        assert quote["total_cost"] == 25.0
        assert quote["minimum_charge_applied"] is True

    @pytest.mark.parametrize("weight", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_weight_raises(self, weight):
        """NaN and infinite weights are rejected, not priced."""
        with pytest.raises(InvalidInput):
            self.calculator.calculate_cost(self.create_carrier(), weight)

        with pytest.raises(InvalidInput):
            self.calculator.quote(self.create_carrier(), weight)
