"""Tests for the Carrier Catalogue."""

import json

import pytest

from bagster.modules.carrier_selection.catalogue import CarrierCatalogue, DEFAULT_CARRIERS
from bagster.modules.carrier_selection.constants import CarrierStatus, CoverageType


class TestCarrierCatalogue:
    """Test suite for CarrierCatalogue."""

    def setup_method(self):
        """Set up test fixtures."""
        self.catalogue = CarrierCatalogue.default()

    def test_default_catalogue(self):
        assert len(self.catalogue) == len(DEFAULT_CARRIERS)
        assert "carrier_001" in self.catalogue
        assert self.catalogue.get("carrier_003").name == "Pan-African Freight"
        assert self.catalogue.get("unknown") is None

    def test_approved_carriers(self):
        approved = self.catalogue.approved_carriers()

        assert all(c.status == CarrierStatus.APPROVED for c in approved)
        assert "carrier_006" not in [c.id for c in approved]

    def test_duplicate_ids_rejected(self):
        record = dict(DEFAULT_CARRIERS[0])

        with pytest.raises(ValueError):
            CarrierCatalogue([record, record])

    def test_from_json_list(self, tmp_path):
        path = tmp_path / "carriers.json"
        path.write_text(json.dumps(list(DEFAULT_CARRIERS[:2])), encoding="utf-8")

        catalogue = CarrierCatalogue.from_json(path)

        assert len(catalogue) == 2

    def test_from_json_object(self, tmp_path):
        path = tmp_path / "carriers.json"
        path.write_text(json.dumps({"carriers": list(DEFAULT_CARRIERS[:3])}), encoding="utf-8")

        catalogue = CarrierCatalogue.from_json(str(path))

        assert [c.id for c in catalogue.list_carriers()] == ["carrier_001", "carrier_002", "carrier_003"]

    def test_search_sorted_by_rating(self):
        results = self.catalogue.search()
        ratings = [c.rating for c in results]

        assert len(results) == len(DEFAULT_CARRIERS)
        assert ratings == sorted(ratings, reverse=True)
        assert results[0].id == "carrier_003"

    def test_search_service_area(self):
        ids = {c.id for c in self.catalogue.search(service_area="Kano")}

        # carrier_003 serves "All Nigeria"
        assert ids == {"carrier_001", "carrier_003", "carrier_004"}

    def test_search_filters(self):
        assert {c.id for c in self.catalogue.search(transport_mode="air")} == {"carrier_001", "carrier_003"}
        assert all(c.rating >= 4.7 for c in self.catalogue.search(min_rating=4.7))
        assert "carrier_004" not in {c.id for c in self.catalogue.search(insurance_required=True)}
        assert "carrier_006" not in {c.id for c in self.catalogue.search(verified_only=True)}
        assert {c.id for c in self.catalogue.search(max_weight=20000)} == {"carrier_003", "carrier_005"}
        assert {c.id for c in self.catalogue.search(special_handling="Container")} == {"carrier_005"}
        assert {c.id for c in self.catalogue.search(delivery_country="ghana")} == {
            "carrier_003", "carrier_005", "carrier_006"
        }

    def test_search_coverage_and_status(self):
        same_day = {c.id for c in self.catalogue.search(coverage=CoverageType.SAME_DAY)}
        pending = self.catalogue.search(status=CarrierStatus.PENDING)

        assert same_day == {"carrier_001", "carrier_003", "carrier_006"}
        assert [c.id for c in pending] == ["carrier_006"]
