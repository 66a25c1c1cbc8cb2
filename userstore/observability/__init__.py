"""
Observability module.

Provides logging configuration and structured logging helpers.
"""

from userstore.observability.logger import configure_logging, get_logger
from userstore.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    redact_url,
    safe_log_value,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_with_context",
    "log_exception_with_context",
    "redact_url",
    "safe_log_value",
]
