"""Tests for the Scoring Engine."""

import random

import pytest
import numpy as np

from bagster.modules.carrier_selection.scoring_engine import ScoringEngine
from bagster.modules.carrier_selection.eligibility_filter import EligibilityFilter
from bagster.modules.carrier_selection.catalogue import CarrierCatalogue
from bagster.modules.carrier_selection.schemas import (
    CarrierSchema,
    ShipmentRequestSchema,
    SelectionCriteriaSchema,
)
from bagster.modules.carrier_selection.errors import InvalidInput
from bagster.modules.carrier_selection.constants import (
    CarrierStatus,
    RejectionReason,
    SelectionStrategy,
)


class TestScoringEngine:
    """Test suite for ScoringEngine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = ScoringEngine()
        self.shipment = ShipmentRequestSchema(
            origin="Lagos",
            destination="Accra, Ghana",
            weight_kg=5,
        )

    def create_carrier(
        self,
        carrier_id,
        total_cost=40.0,
        rating=4.0,
        status=CarrierStatus.APPROVED,
        delivery_countries=None,
    ):
        """Helper to create a carrier whose total cost at 5 kg is total_cost."""
        return CarrierSchema(
            id=carrier_id,
            name=f"Carrier {carrier_id}",
            rating=rating,
            base_price_per_kg=total_cost / 5,
            pickup_fee=0.0,
            minimum_charge=0.0,
            service_areas=["Accra", "Lagos"],
            delivery_countries=delivery_countries or [],
            status=status,
        )

    def criteria(self, strategy, **kwargs):
        return SelectionCriteriaSchema(strategy=strategy, **kwargs)

    def test_cheapest_picks_lowest_cost(self):
        """Cheapest strategy ranks the lower total cost first."""
        carriers = [
            self.create_carrier("A", total_cost=50, rating=4.0),
            self.create_carrier("B", total_cost=30, rating=3.0),
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("cheapest"))

        assert [s.carrier_id for s in scores] == ["B", "A"]
        assert scores[0].total_cost == 30.0
        assert scores[0].price_score == 1.0
        assert scores[1].price_score == 0.0
        assert scores[0].selection_reason.startswith("Selected for lowest cost")

    def test_best_rated_picks_highest_rating(self):
        """Best-rated strategy ranks the higher rating first."""
        carriers = [
            self.create_carrier("A", total_cost=50, rating=4.0),
            self.create_carrier("B", total_cost=30, rating=3.0),
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("best_rated"))

        assert [s.carrier_id for s in scores] == ["A", "B"]
        assert scores[0].rating_score == pytest.approx(0.8)
        assert scores[0].total_score == pytest.approx(0.8)
        assert scores[0].selection_reason.startswith("Selected for top rating")

    def test_pending_carrier_never_ranked(self):
        """Non-approved carriers never appear, whatever the strategy."""
        carriers = [
            self.create_carrier("A", total_cost=50),
            self.create_carrier("C", total_cost=1, rating=5.0, status=CarrierStatus.PENDING),
        ]

        for strategy in ("cheapest", "best_rated", "balanced"):
            scores = self.engine.score(carriers, self.shipment, self.criteria(strategy))
            assert "C" not in [s.carrier_id for s in scores]

        scores = self.engine.score(
            carriers,
            self.shipment,
            self.criteria("destination_focused", destination_country="Ghana"),
        )
        assert "C" not in [s.carrier_id for s in scores]

    def test_destination_focused(self):
        """Specialized carrier gets destination_score 1 and outranks the other."""
        carriers = [
            self.create_carrier("E", total_cost=40, rating=4.0, delivery_countries=["Nigeria"]),
            self.create_carrier("D", total_cost=42, rating=4.0, delivery_countries=["Ghana"]),
        ]

        scores = self.engine.score(
            carriers,
            self.shipment,
            self.criteria("destination_focused", destination_country="ghana"),
        )

        by_id = {s.carrier_id: s for s in scores}
        assert by_id["D"].destination_score == 1.0
        assert by_id["E"].destination_score == 0.0
        assert scores[0].carrier_id == "D"
        assert "delivery specialization" in scores[0].selection_reason

    def test_neutral_destination_score_without_country(self):
        """Without a destination country every carrier scores 0.5."""
        carriers = [
            self.create_carrier("A", delivery_countries=["Ghana"]),
            self.create_carrier("B"),
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("balanced"))

        assert all(s.destination_score == 0.5 for s in scores)

    def test_no_eligible_carriers(self):
        """min_rating excluding everyone yields an empty ranking."""
        carriers = [
            self.create_carrier("A", rating=4.0),
            self.create_carrier("B", rating=4.9),
        ]

        scores, rejected, weights = self.engine.evaluate(
            carriers, self.shipment, self.criteria("balanced", min_rating=5.0)
        )

        assert scores == []
        assert len(rejected) == 2
        assert all(r.reason == RejectionReason.BELOW_MIN_RATING for r in rejected)
        assert weights == (0.4, 0.4, 0.2)

    def test_negative_weight_raises_before_evaluation(self):
        """Invalid weight fails before any carrier is looked at."""
        checked = []

        class RecordingFilter(EligibilityFilter):
            def check(self, carrier, shipment, criteria):
                checked.append(carrier.id)
                return super().check(carrier, shipment, criteria)

        engine = ScoringEngine(eligibility_filter=RecordingFilter())
        shipment = ShipmentRequestSchema.model_construct(
            origin="Lagos", destination="Accra", weight_kg=-1
        )

        with pytest.raises(InvalidInput):
            engine.score([self.create_carrier("A")], shipment, self.criteria("balanced"))

        assert checked == []

    def test_negative_weight_rejected_by_schema(self):
        with pytest.raises(InvalidInput):
            ShipmentRequestSchema(origin="Lagos", destination="Accra", weight_kg=-1)

    def test_equal_costs_give_full_price_score(self):
        carriers = [
            self.create_carrier("A", total_cost=40),
            self.create_carrier("B", total_cost=40),
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("cheapest"))

        assert all(s.price_score == 1.0 for s in scores)

    def test_tie_broken_by_cost_then_id(self):
        """Equal totals are ordered by cost, then carrier id."""
        carriers = [
            self.create_carrier("Z", total_cost=40, rating=4.0),
            self.create_carrier("Y", total_cost=45, rating=4.0),
            self.create_carrier("X", total_cost=40, rating=4.0),
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("best_rated"))

        assert [s.carrier_id for s in scores] == ["X", "Z", "Y"]
        assert [s.rank for s in scores] == [1, 2, 3]

    def test_monotonicity_cheapest(self):
        """Under cheapest, lower cost always ranks higher."""
        carriers = [
            self.create_carrier(f"C{i}", total_cost=cost, rating=4.0)
            for i, cost in enumerate([70, 20, 55, 35, 90])
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("cheapest"))

        costs = [s.total_cost for s in scores]
        assert costs == sorted(costs)

    def test_min_rating_filter_correctness(self):
        """No carrier below min_rating is ever in the output."""
        carriers = [
            self.create_carrier(f"C{i}", rating=r)
            for i, r in enumerate([3.0, 3.9, 4.0, 4.5, 5.0])
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("balanced", min_rating=4.0))

        assert {s.carrier_id for s in scores} == {"C2", "C3", "C4"}

    def test_determinism(self):
        """Repeated runs produce identical output."""
        carriers = CarrierCatalogue.default().list_carriers()
        shipment = ShipmentRequestSchema(origin="Lagos", destination="Lagos, Nigeria", weight_kg=12)
        criteria = self.criteria("balanced", destination_country="Nigeria")

        first = [s.model_dump() for s in self.engine.score(carriers, shipment, criteria)]
        second = [s.model_dump() for s in self.engine.score(carriers, shipment, criteria)]

        assert first == second

    def test_shuffle_invariance(self):
        """Input order does not change the ranking."""
        carriers = [
            self.create_carrier("A", total_cost=40, rating=4.0),
            self.create_carrier("B", total_cost=40, rating=4.0),
            self.create_carrier("C", total_cost=35, rating=3.5),
            self.create_carrier("D", total_cost=60, rating=4.9),
        ]
        criteria = self.criteria("balanced")
        expected = [s.carrier_id for s in self.engine.score(carriers, self.shipment, criteria)]

        rng = random.Random(7)
        for _ in range(5):
            shuffled = carriers[:]
            rng.shuffle(shuffled)
            ranked = [s.carrier_id for s in self.engine.score(shuffled, self.shipment, criteria)]
            assert ranked == expected

    def test_scores_within_bounds(self):
        """All sub-scores and totals lie in [0, 1]."""
        carriers = CarrierCatalogue.default().list_carriers()
        shipment = ShipmentRequestSchema(origin="Lagos", destination="Lagos", weight_kg=3)

        for strategy in SelectionStrategy:
            criteria = self.criteria(strategy, destination_country="Ghana")
            for s in self.engine.score(carriers, shipment, criteria):
                for value in (s.price_score, s.rating_score, s.destination_score, s.total_score):
                    assert 0.0 <= value <= 1.0

    def test_normalize_matrix(self):
        """Raw matrix is converted to sub-scores."""
        matrix = np.array([
            [30.0, 5.0, 1.0],
            [50.0, 2.5, 0.0],
            [40.0, 0.0, np.nan],
        ])

        normalized = self.engine.normalize_matrix(matrix)

        assert np.allclose(normalized[:, 0], [1.0, 0.0, 0.5])
        assert np.allclose(normalized[:, 1], [1.0, 0.5, 0.0])
        assert np.allclose(normalized[:, 2], [1.0, 0.0, 0.5])

    def test_apply_weights(self):
        normalized = np.array([[1.0, 0.5, 0.5], [0.0, 1.0, 0.5]])

        weighted, totals = self.engine.apply_weights(normalized, (0.4, 0.4, 0.2))

        assert np.allclose(weighted[0], [0.4, 0.2, 0.1])
        assert np.allclose(totals, [0.7, 0.5])

    def test_explain_highlights(self):
        """Non-dominant strong factors are highlighted."""
        carriers = [
            self.create_carrier("A", total_cost=30, rating=4.5, delivery_countries=["Ghana"]),
            self.create_carrier("B", total_cost=50, rating=3.0),
        ]

        scores = self.engine.score(
            carriers,
            self.shipment,
            self.criteria("destination_focused", destination_country="Ghana"),
        )

        reason = scores[0].selection_reason
        assert reason.startswith("Selected for Ghana delivery specialization.")
        assert "Excellent price." in reason
        assert "Top-rated carrier." in reason

    @pytest.mark.parametrize("weight", [float("nan"), float("inf")])
    def test_non_finite_weight_rejected_by_schema(self, weight):
        with pytest.raises(InvalidInput):
            ShipmentRequestSchema(origin="Lagos", destination="Accra", weight_kg=weight)

    @pytest.mark.parametrize("weight", [float("nan"), float("inf")])
    def test_non_finite_weight_raises_in_engine(self, weight):
        """Unvalidated NaN or infinite weights never produce a ranking."""
        shipment = ShipmentRequestSchema.model_construct(
            origin="Lagos", destination="Accra", weight_kg=weight
        )

        with pytest.raises(InvalidInput):
            self.engine.score([self.create_carrier("A")], shipment, self.criteria("balanced"))

    def test_duplicate_carrier_ids_raise(self):
        """Two carriers sharing an id are refused."""
        carriers = [
            self.create_carrier("X", total_cost=10),
            self.create_carrier("X", total_cost=50),
            self.create_carrier("Y", total_cost=30),
        ]

        with pytest.raises(InvalidInput) as exc_info:
            self.engine.score(carriers, self.shipment, self.criteria("cheapest"))

        assert exc_info.value.details["duplicates"] == ["X"]

    def test_near_equal_totals_tie_on_cost(self):
        """Totals equal up to float noise are ties and fall back to cost."""
        shipment = ShipmentRequestSchema(origin="Lagos", destination="Accra", weight_kg=5)
        carriers = [
            self.create_carrier("A", total_cost=11.2, rating=0.3),
            self.create_carrier("C", total_cost=30, rating=0.0),
            self.create_carrier("B", total_cost=10, rating=0.0),
        ]

        scores = self.engine.score(carriers, shipment, self.criteria("balanced"))

        # B: 0.4 * 1 + 0 + 0.1, A: 0.4 * 0.94 + 0.4 * 0.06 + 0.1
        assert scores[0].total_score == pytest.approx(scores[1].total_score)
        assert [s.carrier_id for s in scores] == ["B", "A", "C"]

    def test_all_zero_contributions_use_largest_weight(self):
        """With nothing contributing, the reason follows the strategy's main weight."""
        carriers = [
            self.create_carrier("A", total_cost=10, rating=0.0),
            self.create_carrier("B", total_cost=20, rating=0.0),
        ]

        scores = self.engine.score(carriers, self.shipment, self.criteria("best_rated"))

        assert scores[0].total_score == 0.0
        assert scores[0].selection_reason.startswith("Selected for top rating")
