"""Recover a JSON object from free-form model output."""

import json
from typing import Any, Dict

from app.services.errors import ParseError


def extract_json(text: str) -> Dict[str, Any]:
    """Parse the span between the first ``{`` and the last ``}`` of *text*.

    Models routinely wrap the payload in prose or Markdown fences, so the
    outermost braces are taken as the object boundaries.  Braces inside the
    surrounding prose will confuse this; that is accepted.

    Raises:
        ParseError: if no brace pair is found, or the span is not a JSON object
            (including numbers past the integer digit limit and nesting too
            deep to decode).
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or start > end:
        raise ParseError("JSON not found in AI response")

    try:
        data = json.loads(text[start : end + 1])
    except (ValueError, RecursionError) as exc:
        raise ParseError("Failed to parse JSON from AI response") from exc

    if not isinstance(data, dict):
        raise ParseError("Failed to parse JSON from AI response")
    return data
