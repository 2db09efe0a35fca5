"""Website generation endpoint."""

import logging
from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.models.error_response import ErrorResponse
from app.models.generate_request import GenerateRequest
from app.models.site import GeneratedSite
from app.services.errors import ConfigurationError, TopicRequiredError
from app.services.generator import generate_site

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield an outbound client scoped to a single request."""
    async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as client:
        yield client


@router.post(
    "/generate",
    response_model=GeneratedSite,
    summary="Generate a single-page website for a topic",
    description=(
        "Asks Gemini for a website about `topic` (or `prompt`) and returns it as "
        "separate `html`, `css` and `js` strings.\n\n"
        "Configured models are tried in order; a model answering 503 is retried "
        "with a fixed delay, while quota errors and unparseable answers move on "
        "to the next model."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Topic or prompt missing."},
        503: {"model": ErrorResponse, "description": "No model could produce a site."},
    },
)
async def generate(
    body: Optional[GenerateRequest] = None,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> GeneratedSite:
    if not settings.google_api_key:
        logger.error("GOOGLE_API_KEY is not configured")
        raise ConfigurationError("GOOGLE_API_KEY missing")

    topic = body.resolved_topic if body is not None else None
    if topic is None:
        raise TopicRequiredError()

    logger.info("Generate request received", extra={"topic": topic})
    return await generate_site(topic, settings, client)
