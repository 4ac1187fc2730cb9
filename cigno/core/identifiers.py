"""
Object identifier helpers.

Records are keyed by 24-character hexadecimal identifiers laid out like
document-database object ids: a 4-byte big-endian timestamp, 5 random
bytes fixed per process, and a 3-byte incrementing counter.

Every identifier that arrives from a client (path, query or body) goes
through ensure_object_id before it reaches the persistence layer.

Dependencies: None
System role: Identifier generation and validation
"""

import itertools
import os
import re
import threading
import time
from typing import Any

from cigno.core.exceptions import InvalidIdentifierError

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

_PROCESS_RANDOM = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_counter_lock = threading.Lock()


def generate_object_id() -> str:
    """
    Generate a new 24-hex object identifier.

    Returns:
        str: Lower-case hexadecimal identifier
    """
    with _counter_lock:
        count = next(_counter) % 0xFFFFFF
    timestamp = int(time.time()).to_bytes(4, "big")
    return (timestamp + _PROCESS_RANDOM + count.to_bytes(3, "big")).hex()


def is_valid_object_id(value: Any) -> bool:
    """Return True only for strings of exactly 24 hexadecimal characters."""
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.match(value))


def ensure_object_id(value: Any, field: str = "id") -> str:
    """
    Validate a client-supplied identifier.

    Booleans, numbers, mappings, None and malformed strings are rejected
    with a validation error instead of being handed to the database.

    Args:
        value: Candidate identifier
        field: Name reported in the error

    Returns:
        str: The identifier, lower-cased

    Raises:
        InvalidIdentifierError: If value is not a well-formed identifier string
    """
    if not is_valid_object_id(value):
        raise InvalidIdentifierError(field, value)
    return value.lower()


def ensure_optional_object_id(value: Any, field: str) -> str | None:
    """Like ensure_object_id, but None and empty strings pass through as None."""
    if value is None or value == "":
        return None
    return ensure_object_id(value, field)
