"""Parse the statusline JSON payload that Claude Code writes to stdin."""

import json
import logging
import math
import os
from typing import Any

from ctxbar.models import (
    DEFAULT_CONTEXT_WINDOW_SIZE,
    DEFAULT_MODEL_NAME,
    DEFAULT_SESSION_ID,
    RawUsage,
    SessionSnapshot,
)

logger = logging.getLogger(__name__)


def parse_payload(text: str) -> dict[str, Any]:
    """Decode the payload, returning an empty dict for anything unusable.

    Args:
        text: Raw stdin contents.

    Returns:
        The decoded JSON object, or {} if the text is not a JSON object.
    """
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, ValueError, RecursionError):
        logger.debug("payload is not valid JSON, using defaults")
        return {}

    if not isinstance(doc, dict):
        logger.debug("payload is %s, not an object, using defaults", type(doc).__name__)
        return {}
    return doc


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_number(value: Any) -> int | float | None:
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def _as_count(value: Any) -> int:
    number = _as_number(value)
    if number is None or number < 0:
        return 0
    return int(number)


def _parse_usage(current_usage: Any) -> RawUsage | None:
    # Presence of input_tokens marks a usable breakdown, even when it is 0 or null.
    if not isinstance(current_usage, dict) or "input_tokens" not in current_usage:
        return None

    return RawUsage(
        input_tokens=_as_count(current_usage.get("input_tokens")),
        cache_creation_input_tokens=_as_count(current_usage.get("cache_creation_input_tokens")),
        cache_read_input_tokens=_as_count(current_usage.get("cache_read_input_tokens")),
        output_tokens=_as_count(current_usage.get("output_tokens")),
    )


def snapshot_from_payload(doc: dict[str, Any]) -> SessionSnapshot:
    """Build a SessionSnapshot, applying defaults for missing or malformed fields."""
    model = _as_dict(doc.get("model")).get("display_name")
    context_window = _as_dict(doc.get("context_window"))

    size = _as_number(context_window.get("context_window_size"))
    if size is None or size <= 0:
        size = DEFAULT_CONTEXT_WINDOW_SIZE

    cwd = doc.get("cwd") or _as_dict(doc.get("workspace")).get("current_dir")
    if not isinstance(cwd, str) or not cwd:
        cwd = os.getcwd()

    session_id = doc.get("session_id")
    if not isinstance(session_id, str) or not session_id:
        session_id = DEFAULT_SESSION_ID

    return SessionSnapshot(
        model=model if isinstance(model, str) and model else DEFAULT_MODEL_NAME,
        context_window_size=int(size),
        cwd=cwd,
        session_id=session_id,
        used_percentage=_as_number(context_window.get("used_percentage")),
        usage=_parse_usage(context_window.get("current_usage")),
    )
