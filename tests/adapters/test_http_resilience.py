from __future__ import annotations

import asyncio

import httpx
import pytest

from cinesync.adapters.http_resilience import ResilientClient, build_retry, classify_http_error
from cinesync.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from cinesync.domain.errors import NotFoundError, RateLimitedError, ServiceUnavailableError


def _status_error(status: int, headers: dict[str, str] | None = None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.example/thing")
    response = httpx.Response(status, headers=headers, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.mark.parametrize(
    ("status", "expected"),
    [(404, NotFoundError), (429, RateLimitedError), (500, ServiceUnavailableError)],
)
def test_classify_http_error_by_status(status: int, expected: type[Exception]) -> None:
    error = classify_http_error(_status_error(status), service="example")

    assert type(error) is expected
    assert error.status_code == status
    assert error.service == "example"


def test_classify_rate_limit_reads_retry_after() -> None:
    error = classify_http_error(_status_error(429, {"Retry-After": "12"}), service="example")

    assert isinstance(error, RateLimitedError)
    assert error.retry_after == 12.0


def test_classify_transport_error_is_unavailable() -> None:
    error = classify_http_error(httpx.ConnectError("refused"), service="example")

    assert isinstance(error, ServiceUnavailableError)
    assert error.status_code is None


def test_build_retry_excludes_post_by_default() -> None:
    retry = build_retry(RetryPolicy())

    assert retry.is_retryable_method("PATCH")
    assert not retry.is_retryable_method("POST")


def test_resilient_client_applies_base_url_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="example",
        base_url="https://api.example/v1/",
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"X-Token": "abc"},
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("things")

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    assert seen[0].url == "https://api.example/v1/things"
    assert seen[0].headers["X-Token"] == "abc"
