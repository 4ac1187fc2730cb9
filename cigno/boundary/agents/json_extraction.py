"""
Recover JSON objects from custom agent replies.

Agents answer with free text that usually, but not always, contains a
JSON object. These helpers never raise: an unusable reply yields None.

Dependencies: json (stdlib), cigno.core.project_parser
System role: Agent response normalisation
"""

import json
from typing import Any

from cigno.core.project_parser import iter_embedded_objects

RESPONSE_TEXT_KEYS = ("response", "output", "result", "data")


def extract_agent_text(result: Any) -> Any:
    """
    Pick the payload out of an agent result envelope.

    Args:
        result: Decoded JSON body returned by the execute endpoint

    Returns:
        The first non-empty of response/output/result/data, or the result itself
    """
    if isinstance(result, dict):
        for key in RESPONSE_TEXT_KEYS:
            value = result.get(key)
            if value:
                return value
    return result


def extract_json_object(payload: Any) -> dict | None:
    """
    Return the JSON object carried by payload, or None.

    A mapping is returned as-is. A string is parsed directly first; when
    that fails (or yields a non-object) the first object embedded in the
    surrounding text is returned. Input nested too deeply to decode yields
    None.

    Args:
        payload: Agent reply text or already-decoded value

    Returns:
        dict | None: Parsed object, None when nothing can be recovered
    """
    if isinstance(payload, dict):
        return payload
    if not isinstance(payload, str) or not payload.strip():
        return None

    try:
        parsed = json.loads(payload)
    except (ValueError, RecursionError):
        parsed = None
    if isinstance(parsed, dict):
        return parsed

    return next(iter_embedded_objects(payload), None)
