"""Best-effort JSON recovery from free-text model output."""

import json
import logging
import re

import json_repair

from diet_assistant.domain.errors import MenuStructureError

_FENCE_RE = re.compile(r"```[a-zA-Z0-9_-]*\s*")

_logger = logging.getLogger(__name__)


def extract_clean_json(text: str) -> str:
    """Strip code fences and surrounding prose, keeping the JSON object text."""
    cleaned = _FENCE_RE.sub("", text or "").strip()
    start = cleaned.find("{")
    if start == -1:
        return cleaned
    end = _matching_brace(cleaned, start)
    if end is None:
        # Truncated output: keep everything after the opening brace for repair.
        return cleaned[start:]
    return cleaned[start : end + 1]


def parse_partial_json(text: str) -> dict[str, object]:
    """Parse a JSON object, repairing truncated or malformed text when needed.

    Never raises; returns an empty dict when no object can be recovered.
    """
    try:
        parsed = json.loads(text)
    except (ValueError, TypeError, RecursionError):
        try:
            parsed = json_repair.repair_json(text or "", return_objects=True)
        except Exception:
            _logger.warning("Unable to repair model JSON output")
            return {}
    if isinstance(parsed, dict):
        return parsed
    return {}


def parse_json_object(text: str) -> dict[str, object]:
    """Strictly parse fenced or bare JSON text into an object."""
    try:
        parsed = json.loads(extract_clean_json(text))
    except (ValueError, RecursionError) as exc:
        raise MenuStructureError("Response is not valid JSON") from exc
    if not isinstance(parsed, dict):
        raise MenuStructureError("Response is not a JSON object")
    return parsed


def _matching_brace(text: str, start: int) -> int | None:
    """Return the index of the brace closing the object opened at start."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None
