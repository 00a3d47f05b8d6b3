"""
Application-wide constants.
"""

from enum import Enum

# Service identification
SERVICE_NAME = "bagster-carrier-selection"

# Response status values
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

# Request context headers
HEADER_CORRELATION_ID = "X-Correlation-ID"
HEADER_SHIPPER_ID = "X-Shipper-ID"
HEADER_API_CLIENT_ID = "X-API-Client-ID"

# Requests slower than this are logged as warnings
SLOW_REQUEST_SECONDS = 2.0


class LogFormat(str, Enum):
    """Supported log output formats."""
    JSON = "json"
    CONSOLE = "console"
