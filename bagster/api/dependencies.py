"""
FastAPI dependencies for dependency injection.
"""

from bagster.modules.carrier_selection import (
    CarrierCatalogue,
    Orchestrator,
    get_catalogue,
    get_orchestrator,
)


def get_orchestrator_dep() -> Orchestrator:
    """Dependency for the carrier selection orchestrator."""
    return get_orchestrator()


def get_catalogue_dep() -> CarrierCatalogue:
    """Dependency for the carrier catalogue."""
    return get_catalogue()
