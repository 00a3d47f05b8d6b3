"""
Custom middleware for the API.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bagster.config.constants import (
    HEADER_API_CLIENT_ID,
    HEADER_CORRELATION_ID,
    HEADER_SHIPPER_ID,
    SLOW_REQUEST_SECONDS,
)
from bagster.utils.context import (
    set_correlation_id,
    generate_correlation_id,
    set_shipper_id,
    set_api_client_id,
    clear_all_context,
)

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every HTTP request with its timing.

    Logged fields: method, path, query, status code, duration, client IP and
    slow/error flags. The correlation ID is attached by the log formatter.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_seconds = time.perf_counter() - start_time
        duration_ms = duration_seconds * 1000
        is_slow = duration_seconds > SLOW_REQUEST_SECONDS

        logger.log(
            logging.WARNING if is_slow else logging.INFO,
            f"Request completed: {request.method} {request.url.path} - "
            f"{response.status_code} ({duration_ms:.0f}ms)",
            extra={
                "event": "request_completed",
                "method": request.method,
                "path": request.url.path,
                "query": str(request.query_params) if request.query_params else None,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
                "is_slow_request": is_slow,
                "is_error": response.status_code >= 400,
            },
        )

        response.headers["X-Process-Time-Ms"] = f"{duration_ms:.0f}"

        return response


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Manages the request context.

    - Reads or generates the correlation ID
    - Reads the shipper and API client IDs from headers
    - Echoes the correlation ID in the response
    - Clears the context once the request is done
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            correlation_id = request.headers.get(HEADER_CORRELATION_ID)
            if correlation_id:
                set_correlation_id(correlation_id)
            else:
                correlation_id = generate_correlation_id()
            request.state.correlation_id = correlation_id

            shipper_id = request.headers.get(HEADER_SHIPPER_ID)
            if shipper_id:
                set_shipper_id(shipper_id)

            api_client_id = request.headers.get(HEADER_API_CLIENT_ID)
            if api_client_id:
                set_api_client_id(api_client_id)

            response = await call_next(request)
            response.headers[HEADER_CORRELATION_ID] = correlation_id

            return response

        finally:
            clear_all_context()
