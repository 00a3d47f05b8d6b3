from .settings import settings, get_settings
from .constants import (
    SERVICE_NAME,
    STATUS_SUCCESS,
    STATUS_ERROR,
    LogFormat,
)

__all__ = [
    "settings",
    "get_settings",
    "SERVICE_NAME",
    "STATUS_SUCCESS",
    "STATUS_ERROR",
    "LogFormat",
]
