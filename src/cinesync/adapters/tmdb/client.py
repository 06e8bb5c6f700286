"""TMDB API client for catalog lookups."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from cinesync.adapters.http_resilience import ResilientClient, classify_http_error
from cinesync.domain.errors import (
    CatalogNotFoundError,
    CatalogRateLimitedError,
    CatalogUnavailableError,
)

from .schema import ErrorResponse, MovieDetails
from .translator import translate_movie

if TYPE_CHECKING:
    from types import TracebackType

    from cinesync.adapters.http_resilience import ClientFactory
    from cinesync.config.tmdb import TmdbConfig
    from cinesync.domain.errors import ExternalServiceError
    from cinesync.domain.model import EnrichedMetadata

log = getLogger(__name__)


class TmdbClient:
    """Look up movie metadata by IMDb id."""

    def __init__(
        self,
        *,
        config: TmdbConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> TmdbClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def verify(self) -> None:
        """Check the API key is accepted."""

        try:
            await self._get("configuration")
        except httpx.HTTPError as exc:
            raise self._classify(exc) from exc
        log.info("TMDB API key accepted")

    async def lookup(self, external_ref: str) -> EnrichedMetadata:
        movie = await self.fetch_movie(external_ref)
        return translate_movie(movie, image_base_url=self._config.image_base_url)

    async def fetch_movie(self, external_ref: str) -> MovieDetails:
        try:
            payload = await self._get(f"movie/{external_ref}")
        except httpx.HTTPError as exc:
            raise self._classify(exc) from exc
        except ValueError as exc:
            raise CatalogUnavailableError(
                f"TMDB returned a non-JSON body for {external_ref}", service="tmdb"
            ) from exc
        try:
            return MovieDetails.model_validate(payload)
        except ValidationError as exc:
            raise CatalogUnavailableError(
                f"Unexpected TMDB payload for {external_ref}: {exc}", service="tmdb"
            ) from exc

    async def _get(self, path: str) -> object:
        client = self._http()
        response = await client.get(path, params={"api_key": self._config.api_key})
        if response.is_error:
            log.debug("TMDB API error %s: %s", response.status_code, _error_detail(response))
        response.raise_for_status()
        return response.json()

    def _classify(self, exc: httpx.HTTPError) -> ExternalServiceError:
        return classify_http_error(
            exc,
            service="tmdb",
            not_found=CatalogNotFoundError,
            rate_limited=CatalogRateLimitedError,
            unavailable=CatalogUnavailableError,
        )

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client


def _error_detail(response: httpx.Response) -> str:
    try:
        error = ErrorResponse.model_validate(response.json())
    except ValueError:
        return response.text[:200]
    return f"{error.status_code}: {error.status_message}"
