"""Utility modules."""

from .context import (
    get_correlation_id,
    set_correlation_id,
    generate_correlation_id,
    get_request_context,
    clear_all_context,
)

__all__ = [
    "get_correlation_id",
    "set_correlation_id",
    "generate_correlation_id",
    "get_request_context",
    "clear_all_context",
]
