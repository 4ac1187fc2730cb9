"""
Logging helpers for values that come from outside the process.

Agent replies and request payloads can be arbitrarily large, so they are
summarised or truncated before they go into a log record's extra fields.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_LOGGED_CHARS = 500


def safe_log_value(value: Any, max_length: int = MAX_LOGGED_CHARS) -> str:
    """
    Render value as a bounded string for log records.

    Mappings are reported by their keys and sequences by their length;
    everything else is stringified and cut at max_length characters.

    Examples:
        {"name": "x", "budget": 1} -> "dict(keys=budget,name)"
        [1, 2, 3] -> "list(3 items)"
    """
    if value is None:
        return "None"
    if isinstance(value, dict):
        return f"dict(keys={','.join(sorted(str(key) for key in value)[:20])})"
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}({len(value)} items)"

    try:
        text = value if isinstance(value, str) else str(value)
    except Exception as e:
        return f"<unprintable {type(value).__name__}: {type(e).__name__}>"
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... ({len(text)} chars)"


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context: Any,
) -> None:
    """
    Log exc with its traceback plus bounded context fields.

    Args:
        logger: Logger to write to
        message: Log message
        exc: Exception being reported
        **context: Extra fields, e.g. endpoint=...
    """
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
