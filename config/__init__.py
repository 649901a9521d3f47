"""Application configuration utilities."""

from .log_config import configure_logging, get_logger
from .settings import (
    DEFAULT_CURRENCY,
    DEFAULT_MAX_RECURRENCE_STEPS,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_MAX_RECURRENCE_STEPS",
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
]
