"""
Carrier Catalogue

In-memory carrier directory acting as the carrier source of the selection
engine. A catalogue is built explicitly (from records, a JSON file or the
built-in directory) and handed to whoever needs it; the engine never reads
carriers from module state.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .schemas import CarrierSchema
from .constants import CarrierStatus, CoverageType
from .utils import serves_location, contains_ignore_case

logger = logging.getLogger(__name__)


# Built-in carrier directory
DEFAULT_CARRIERS = (
    {
        "id": "carrier_001",
        "name": "Express Logistics Nigeria",
        "rating": 4.8,
        "base_price_per_kg": 2.50,
        "pickup_fee": 15.00,
        "minimum_charge": 25.00,
        "service_areas": ["Lagos", "Abuja", "Kano", "Port Harcourt", "Ibadan"],
        "delivery_countries": ["Nigeria"],
        "transport_modes": ["air", "road"],
        "services": ["pickup", "packaging", "customs_clearance", "insurance", "warehousing"],
        "status": "approved",
        "insurance_available": True,
        "verified": True,
        "max_weight_kg": 10000,
        "special_handling": ["fragile", "hazardous", "perishable"],
        "coverage": {"domestic": True, "international": True, "same_day": True, "next_day": True},
    },
    {
        "id": "carrier_002",
        "name": "Swift Cargo Services",
        "rating": 4.6,
        "base_price_per_kg": 2.20,
        "pickup_fee": 12.00,
        "minimum_charge": 20.00,
        "service_areas": ["Lagos", "Ibadan", "Benin City", "Warri", "Asaba"],
        "delivery_countries": ["Nigeria", "Benin"],
        "transport_modes": ["road", "sea"],
        "services": ["pickup", "delivery", "warehousing", "customs_clearance"],
        "status": "approved",
        "insurance_available": True,
        "verified": True,
        "max_weight_kg": 5000,
        "special_handling": ["fragile", "perishable"],
        "coverage": {"domestic": True, "international": False, "same_day": False, "next_day": True},
    },
    {
        "id": "carrier_003",
        "name": "Pan-African Freight",
        "rating": 4.9,
        "base_price_per_kg": 3.00,
        "pickup_fee": 25.00,
        "minimum_charge": 50.00,
        "service_areas": ["All Nigeria", "Ghana", "Kenya", "South Africa", "Egypt"],
        "delivery_countries": ["Nigeria", "Ghana", "Kenya", "South Africa", "Egypt"],
        "transport_modes": ["air", "sea", "road"],
        "services": ["pickup", "packaging", "customs_clearance", "insurance", "warehousing", "white_glove"],
        "status": "approved",
        "insurance_available": True,
        "verified": True,
        "max_weight_kg": 50000,
        "special_handling": ["fragile", "hazardous", "perishable", "oversized", "high_value"],
        "coverage": {"domestic": True, "international": True, "same_day": True, "next_day": True},
    },
    {
        "id": "carrier_004",
        "name": "Northern Express",
        "rating": 4.4,
        "base_price_per_kg": 1.80,
        "pickup_fee": 10.00,
        "minimum_charge": 15.00,
        "service_areas": ["Kano", "Kaduna", "Jos", "Maiduguri", "Abuja"],
        "delivery_countries": ["Nigeria", "Niger"],
        "transport_modes": ["road"],
        "services": ["pickup", "delivery", "customs_clearance"],
        "status": "approved",
        "insurance_available": False,
        "verified": True,
        "max_weight_kg": 2000,
        "special_handling": ["fragile"],
        "coverage": {"domestic": True, "international": False, "same_day": False, "next_day": False},
    },
    {
        "id": "carrier_005",
        "name": "Coastal Logistics",
        "rating": 4.7,
        "base_price_per_kg": 2.80,
        "pickup_fee": 20.00,
        "minimum_charge": 40.00,
        "service_areas": ["Lagos", "Port Harcourt", "Calabar", "Warri", "Uyo"],
        "delivery_countries": ["Nigeria", "Cameroon", "Ghana"],
        "transport_modes": ["sea", "road"],
        "services": ["pickup", "delivery", "warehousing", "customs_clearance", "container_shipping"],
        "status": "approved",
        "insurance_available": True,
        "verified": True,
        "max_weight_kg": 25000,
        "special_handling": ["hazardous", "oversized", "container"],
        "coverage": {"domestic": True, "international": True, "same_day": False, "next_day": False},
    },
    {
        "id": "carrier_006",
        "name": "Accra Swift Couriers",
        "rating": 4.2,
        "base_price_per_kg": 1.60,
        "pickup_fee": 8.00,
        "minimum_charge": 12.00,
        "service_areas": ["Accra", "Kumasi", "Lagos"],
        "delivery_countries": ["Ghana", "Togo"],
        "transport_modes": ["road"],
        "services": ["pickup", "delivery"],
        "status": "pending",
        "insurance_available": False,
        "verified": False,
        "max_weight_kg": 500,
        "special_handling": [],
        "coverage": {"domestic": True, "international": True, "same_day": True, "next_day": True},
    },
)


class CarrierCatalogue:
    """
    Read-only collection of carrier records.

    Records are validated on construction; lookups never mutate them.
    """

    def __init__(self, carriers: Iterable[Union[CarrierSchema, Dict[str, Any]]]):
        """
        Initialize catalogue.

        Args:
            carriers: Carrier records (schemas or raw dicts)

        Raises:
            ValueError: If two carriers share an id
        """
        self._carriers: Dict[str, CarrierSchema] = {}

        for record in carriers:
            carrier = record if isinstance(record, CarrierSchema) else CarrierSchema.model_validate(record)
            if carrier.id in self._carriers:
                raise ValueError(f"Duplicate carrier id: {carrier.id}")
            self._carriers[carrier.id] = carrier

        logger.info(f"Carrier catalogue loaded with {len(self._carriers)} carriers")

    @classmethod
    def default(cls) -> "CarrierCatalogue":
        """Catalogue holding the built-in carrier directory."""
        return cls(DEFAULT_CARRIERS)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "CarrierCatalogue":
        """
        Load a catalogue from a JSON file.

        The file holds either a list of carriers or an object with a
        "carriers" list.
        """
        path = Path(path)
        logger.info(f"Loading carriers from {path}")

        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)

        if isinstance(data, dict):
            data = data.get("carriers", [])

        return cls(data)

    def __len__(self) -> int:
        return len(self._carriers)

    def __contains__(self, carrier_id: str) -> bool:
        return carrier_id in self._carriers

    def get(self, carrier_id: str) -> Optional[CarrierSchema]:
        return self._carriers.get(carrier_id)

    def list_carriers(self) -> List[CarrierSchema]:
        """All carriers, in insertion order."""
        return list(self._carriers.values())

    def approved_carriers(self) -> List[CarrierSchema]:
        """Carriers eligible to be offered to shippers."""
        return [c for c in self._carriers.values() if c.status == CarrierStatus.APPROVED]

    def search(
        self,
        service_area: Optional[str] = None,
        transport_mode: Optional[str] = None,
        min_rating: Optional[float] = None,
        insurance_required: bool = False,
        verified_only: bool = False,
        max_weight: Optional[float] = None,
        special_handling: Optional[str] = None,
        coverage: Optional[CoverageType] = None,
        delivery_country: Optional[str] = None,
        status: Optional[CarrierStatus] = None,
    ) -> List[CarrierSchema]:
        """
        Filter the directory.

        Args:
            service_area: Location the carrier must serve
            transport_mode: Transport mode the carrier must offer
            min_rating: Minimum rating
            insurance_required: Only carriers offering insurance
            verified_only: Only verified carriers
            max_weight: Weight (kg) the carrier must be able to take
            special_handling: Special handling capability required
            coverage: Coverage flag that must be set
            delivery_country: Country the carrier must specialize in
            status: Onboarding status

        Returns:
            Matching carriers sorted by rating (highest first), then id
        """
        results = []

        for carrier in self._carriers.values():
            if service_area and not serves_location(carrier.service_areas, service_area):
                continue
            if transport_mode and not contains_ignore_case(carrier.transport_modes, transport_mode):
                continue
            if min_rating is not None and carrier.rating < min_rating:
                continue
            if insurance_required and not carrier.insurance_available:
                continue
            if verified_only and not carrier.verified:
                continue
            if max_weight is not None and carrier.max_weight_kg is not None and carrier.max_weight_kg < max_weight:
                continue
            if special_handling and not contains_ignore_case(carrier.special_handling, special_handling):
                continue
            if coverage and not getattr(carrier.coverage, CoverageType(coverage).value):
                continue
            if delivery_country and not contains_ignore_case(carrier.delivery_countries, delivery_country):
                continue
            if status and carrier.status != status:
                continue
            results.append(carrier)

        results.sort(key=lambda c: (-c.rating, c.id))
        return results


_catalogue_instance: Optional[CarrierCatalogue] = None


def get_catalogue() -> CarrierCatalogue:
    """
    Get the catalogue configured for this process.

    Loads settings.carriers_file when set, the built-in directory otherwise.
    """
    global _catalogue_instance

    if _catalogue_instance is None:
        from bagster.config import settings

        if settings.carriers_file:
            _catalogue_instance = CarrierCatalogue.from_json(settings.carriers_file)
        else:
            _catalogue_instance = CarrierCatalogue.default()

    return _catalogue_instance
