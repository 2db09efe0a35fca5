import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from app.services.errors import (
    QuotaExceededError,
    TransientExhaustedError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

QUOTA_EXCEEDED = 429
OVERLOADED = 503


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    json: Dict[str, Any],
    params: Optional[Dict[str, str]] = None,
    max_retries: int = 3,
    delay: float = 2.0,
) -> httpx.Response:
    """POST *json* to *url*, retrying while the provider reports overload.

    A 503 sleeps *delay* seconds and uses up one of *max_retries* attempts.
    Quota exhaustion (429) is not retried since waiting a few seconds will not
    restore quota.

    Raises:
        QuotaExceededError: on HTTP 429.
        UpstreamError: on any other non-2xx status.
        TransientExhaustedError: if every attempt returned 503.
        httpx.RequestError: on network errors.
    """
    for attempt in range(1, max_retries + 1):
        response = await client.post(url, json=json, params=params)

        if response.is_success:
            return response

        if response.status_code == QUOTA_EXCEEDED:
            raise QuotaExceededError(response.status_code, response.text)

        if response.status_code == OVERLOADED:
            logger.warning(
                "Upstream overloaded (attempt %d/%d), retrying in %.1fs",
                attempt,
                max_retries,
                delay,
            )
            await asyncio.sleep(delay)
            continue

        raise UpstreamError(response.status_code, response.text)

    raise TransientExhaustedError(max_retries)
