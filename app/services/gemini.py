"""Request building and envelope parsing for the Gemini ``generateContent`` API."""

from typing import Any, Dict, List, Optional

from app.services.errors import ParseError

SAFETY_SETTINGS: List[Dict[str, str]] = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_ONLY_HIGH"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_ONLY_HIGH"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_ONLY_HIGH"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_ONLY_HIGH"},
]

_PROMPT_TEMPLATE = """
You are an expert web developer.
Generate a modern single-page website for: "{topic}"

Return ONLY valid JSON:
{{"html":"...","css":"...","js":"..."}}
"""


def build_prompt(topic: str) -> str:
    return _PROMPT_TEMPLATE.format(topic=topic)


def model_url(base_url: str, model: str) -> str:
    return f"{base_url.rstrip('/')}/models/{model}:generateContent"


def build_payload(
    prompt: str, safety_settings: Optional[List[Dict[str, str]]] = None
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
    if safety_settings:
        payload["safetySettings"] = safety_settings
    return payload


def candidate_text(envelope: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` from a response envelope.

    Raises:
        ParseError: if any link of the path is missing or has the wrong type.
    """
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ParseError("Unexpected response envelope from Gemini") from exc

    if not isinstance(text, str):
        raise ParseError("Unexpected response envelope from Gemini")
    return text
