"""
Structured logging configuration.
Logs go to stderr; stdout is reserved for command output.
Supports JSON output for log shippers and a console format for development.
"""

import logging
import sys
from typing import Optional

import structlog
from pythonjsonlogger import jsonlogger

from bagster.config import settings, LogFormat, SERVICE_NAME
from bagster.utils.context import get_request_context


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Override log level from settings
        log_format: Override log format from settings ("json" or "console")
    """
    level = (log_level or settings.log_level).upper()
    fmt = log_format or settings.log_format

    if fmt == LogFormat.JSON.value:
        configure_json_logging(level)
    else:
        configure_console_logging(level)


def add_context_to_log(logger, method_name, event_dict):
    """
    Structlog processor adding the request context (correlation_id,
    shipper_id, api_client_id) to every log entry.
    """
    event_dict.update(get_request_context())
    return event_dict


class BagsterJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping service name and request context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = record.created
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = SERVICE_NAME
        log_record.update(get_request_context())


def configure_json_logging(level: str) -> None:
    """Configure JSON logging for production."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        BagsterJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    )

    logging.root.handlers = [handler]
    logging.root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_context_to_log,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_console_logging(level: str) -> None:
    """Configure human-readable logging for development."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_context_to_log,
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
