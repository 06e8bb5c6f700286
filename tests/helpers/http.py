"""Mock-transport plumbing for HTTP adapter tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

import httpx

from cinesync.adapters.http_resilience import ClientFactory, ResilientClient
from cinesync.config.http_resilience import ResilienceConfig, RetryPolicy

Handler = Callable[[httpx.Request], httpx.Response]


def make_client_factory(
    handler: Handler,
    *,
    retry: RetryPolicy | None = None,
    keep_cache: bool = False,
) -> ClientFactory:
    """Build clients that answer from ``handler`` without retries.

    The configured response cache is dropped unless ``keep_cache`` is set.
    """

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        config = replace(
            resilience,
            retry=retry or RetryPolicy(total=0),
            cache=resilience.cache if keep_cache else None,
        )
        return ResilientClient(config, transport=httpx.MockTransport(handler))

    return factory


class RecordingHandler:
    """Replay canned responses in order and keep every request."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response
