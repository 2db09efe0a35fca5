"""Tests for app.services.fetcher.fetch_with_retry.

Outbound calls go through ``httpx.MockTransport`` and ``asyncio.sleep`` is
replaced with an ``AsyncMock`` so retries are instant and countable.
"""

import asyncio
import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.services.errors import (
    QuotaExceededError,
    TransientExhaustedError,
    UpstreamError,
)
from app.services.fetcher import fetch_with_retry

_URL = "https://gemini.test/v1beta/models/m:generateContent"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _scripted_transport(statuses):
    """Transport answering with *statuses* in order; records every request."""
    requests = []
    remaining = list(statuses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        status = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        return httpx.Response(status, json={"status": status})

    return httpx.MockTransport(handler), requests


def _fetch(transport, max_retries=3, delay=2.0, sleep=None):
    """Run fetch_with_retry to completion; returns (response, sleep_mock)."""
    if sleep is None:
        sleep = AsyncMock()

    async def _run():
        with patch("app.services.fetcher.asyncio.sleep", new=sleep):
            async with httpx.AsyncClient(transport=transport) as client:
                return await fetch_with_retry(
                    client, _URL, json={"q": 1}, max_retries=max_retries, delay=delay
                )

    return asyncio.run(_run()), sleep


# ---------------------------------------------------------------------------
# Success paths
# ---------------------------------------------------------------------------

class TestFetchSuccess:
    def test_first_attempt_success(self):
        transport, requests = _scripted_transport([200])
        response, sleep = _fetch(transport)

        assert response.status_code == 200
        assert len(requests) == 1
        sleep.assert_not_awaited()

    def test_recovers_after_two_overloads(self):
        transport, requests = _scripted_transport([503, 503, 200])
        response, sleep = _fetch(transport, max_retries=3, delay=2.0)

        assert response.status_code == 200
        assert len(requests) == 3
        assert sleep.await_count == 2
        sleep.assert_awaited_with(2.0)

    def test_sends_json_body(self):
        transport, requests = _scripted_transport([200])
        _fetch(transport)

        assert requests[0].method == "POST"
        assert json.loads(requests[0].content) == {"q": 1}


# ---------------------------------------------------------------------------
# Failure paths
# ---------------------------------------------------------------------------

class TestFetchFailures:
    def test_quota_exceeded_is_not_retried(self):
        transport, requests = _scripted_transport([429, 200])
        with pytest.raises(QuotaExceededError) as exc_info:
            _fetch(transport)

        assert len(requests) == 1
        assert exc_info.value.status == 429

    def test_always_overloaded_exhausts_retries(self):
        transport, requests = _scripted_transport([503])
        sleep = AsyncMock()
        with pytest.raises(TransientExhaustedError):
            _fetch(transport, max_retries=3, sleep=sleep)

        assert len(requests) == 3
        assert sleep.await_count == 3

    def test_other_status_fails_immediately(self):
        transport, requests = _scripted_transport([500, 200])
        with pytest.raises(UpstreamError) as exc_info:
            _fetch(transport)

        assert len(requests) == 1
        assert exc_info.value.status == 500
        assert '"status"' in exc_info.value.body

    def test_network_error_propagates(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(httpx.ConnectError):
            _fetch(httpx.MockTransport(handler))
