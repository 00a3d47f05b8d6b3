"""
Typed errors raised by the carrier selection engine.

They must not derive from ValueError: when raised inside a pydantic
validator they have to reach the caller as-is, not wrapped in a
ValidationError.
"""

from typing import Any, Dict, Optional


class CarrierSelectionError(Exception):
    """Base class for request validation failures."""

    error_code = "CARRIER_SELECTION_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details or None,
        }


class InvalidInput(CarrierSelectionError):
    """Malformed request: non-positive weight, missing required field, ..."""

    error_code = "INVALID_INPUT"


class UnknownStrategy(CarrierSelectionError):
    """Strategy name outside the recognized set."""

    error_code = "UNKNOWN_STRATEGY"
