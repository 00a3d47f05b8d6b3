"""
Request context management.

Keeps per-request identifiers (correlation ID, shipper, API client) in
context variables so they can be attached to every log record emitted while
a selection request is being served.
"""

import logging
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

logger = logging.getLogger(__name__)

correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    'correlation_id',
    default=None
)

# Shipper on whose behalf the selection runs (optional)
shipper_id_var: ContextVar[Optional[str]] = ContextVar(
    'shipper_id',
    default=None
)

# API client (integration key holder) issuing the request (optional)
api_client_id_var: ContextVar[Optional[str]] = ContextVar(
    'api_client_id',
    default=None
)


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context.

    Returns:
        Current correlation ID or None if not set
    """
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID in context.

    Args:
        correlation_id: Correlation ID to set
    """
    if not correlation_id:
        logger.warning("Attempted to set empty correlation_id")
        return

    correlation_id_var.set(correlation_id)


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4) and set it in context."""
    correlation_id = str(uuid4())
    set_correlation_id(correlation_id)
    return correlation_id


def get_shipper_id() -> Optional[str]:
    return shipper_id_var.get()


def set_shipper_id(shipper_id: str) -> None:
    shipper_id_var.set(shipper_id)


def get_api_client_id() -> Optional[str]:
    return api_client_id_var.get()


def set_api_client_id(api_client_id: str) -> None:
    api_client_id_var.set(api_client_id)


def clear_all_context() -> None:
    """Clear all request context variables."""
    correlation_id_var.set(None)
    shipper_id_var.set(None)
    api_client_id_var.set(None)


def get_request_context() -> dict:
    """
    Get the populated request context as a dictionary.

    Returns:
        Dictionary containing only the context variables that are set
    """
    context = {
        "correlation_id": get_correlation_id(),
        "shipper_id": get_shipper_id(),
        "api_client_id": get_api_client_id(),
    }
    return {key: value for key, value in context.items() if value}
