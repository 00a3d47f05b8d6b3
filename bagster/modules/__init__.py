# Modules package
from .carrier_selection import Orchestrator, CarrierCatalogue

__all__ = [
    "Orchestrator",
    "CarrierCatalogue",
]
