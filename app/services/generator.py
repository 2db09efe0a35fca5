"""Model fallback orchestration: tries each configured Gemini model in turn."""

import logging
from typing import List, Tuple

import httpx
from pydantic import ValidationError

from app.config import Settings
from app.models.site import GeneratedSite
from app.services.errors import (
    AllModelsExhaustedError,
    ConfigurationError,
    GenerationError,
    ParseError,
)
from app.services.fetcher import fetch_with_retry
from app.services.gemini import (
    SAFETY_SETTINGS,
    build_payload,
    build_prompt,
    candidate_text,
    model_url,
)
from app.services.json_extractor import extract_json

logger = logging.getLogger(__name__)


async def _generate_with_model(
    client: httpx.AsyncClient,
    settings: Settings,
    model: str,
    payload: dict,
) -> GeneratedSite:
    """Run one model end to end: request, envelope, embedded JSON, shape."""
    response = await fetch_with_retry(
        client,
        model_url(settings.gemini_api_base_url, model),
        json=payload,
        params={"key": settings.google_api_key},
        max_retries=settings.retry_attempts,
        delay=settings.retry_delay_seconds,
    )

    try:
        envelope = response.json()
    except ValueError as exc:
        raise ParseError("Gemini response body is not JSON") from exc

    data = extract_json(candidate_text(envelope))
    try:
        return GeneratedSite.model_validate(data)
    except ValidationError as exc:
        raise ParseError("AI response is missing html/css/js fields") from exc


async def generate_site(
    topic: str,
    settings: Settings,
    client: httpx.AsyncClient,
) -> GeneratedSite:
    """Generate a website for *topic*, falling back across ``settings.gemini_models``.

    Models are tried in configured order and the first fully parsed result
    is returned; later models are not called.  A failing model is logged and
    skipped.

    Raises:
        ConfigurationError: if no API key is configured.
        AllModelsExhaustedError: if every model failed.
    """
    if not settings.google_api_key:
        raise ConfigurationError("GOOGLE_API_KEY missing")

    safety = SAFETY_SETTINGS if settings.safety_settings_enabled else None
    payload = build_payload(build_prompt(topic), safety)
    failures: List[Tuple[str, str]] = []

    for model in settings.gemini_models:
        try:
            site = await _generate_with_model(client, settings, model, payload)
        except (GenerationError, httpx.HTTPError) as exc:
            logger.warning("Model %s failed: %s", model, exc)
            failures.append((model, str(exc) or type(exc).__name__))
            continue

        logger.info("Model %s produced a site", model, extra={"model": model})
        return site

    logger.error(
        "All models failed",
        extra={"failures": failures},
    )
    raise AllModelsExhaustedError(failures)
