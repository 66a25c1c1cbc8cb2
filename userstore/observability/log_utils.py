"""
Logging utilities for safe structured logging.

Values passed as log context are flattened to short strings so that a
whole insert batch or a settings document never ends up in a log line,
and connection URLs are logged without their password.

Dependencies: logging (stdlib), sqlalchemy.engine.make_url
System role: Logging helper functions
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError


def redact_url(url: str) -> str:
    """
    Render a database URL with the password masked.

    Args:
        url: SQLAlchemy connection URL

    Returns:
        str: URL safe to write to logs
    """
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable url>"


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Convert any value to a bounded string for logging.

    Sequences and mappings are summarized by size instead of dumped.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, (str, bytes)):
        val_str = value if isinstance(value, str) else value.decode("utf-8", "replace")
    elif isinstance(value, Mapping):
        val_str = f"{type(value).__name__}({len(value)} keys)"
    elif isinstance(value, Sequence):
        val_str = f"{type(value).__name__}({len(value)} items)"
    else:
        try:
            val_str = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(val_str) > max_length:
        return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
    return val_str


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs attached as record attributes
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with its type, message and context.

    Call from inside an ``except`` block so the traceback is attached.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = _safe_context(context)
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=safe_context)
