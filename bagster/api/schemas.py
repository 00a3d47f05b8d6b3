"""
API schemas for service-level endpoints.

Carrier selection payloads live in bagster.modules.carrier_selection.schemas.
"""

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health check."""

    status: str
    timestamp: datetime
    components: Dict[str, bool]
    carriers_loaded: int = Field(..., ge=0)
    approved_carriers: int = Field(..., ge=0)
    version: str


class ServiceInfoResponse(BaseModel):
    """Response of the root endpoint."""

    name: str
    version: str
    docs: str
    health: str
