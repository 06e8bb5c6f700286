"""Notion API client for the screening schedule database."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from cinesync.adapters.http_resilience import ResilientClient, classify_http_error
from cinesync.domain.errors import SourceQueryError

from .schema import DatabaseQueryResponse, ErrorResponse, Page
from .translator import NotionPayloadError, parse_source_record

if TYPE_CHECKING:
    from datetime import datetime
    from types import TracebackType

    from cinesync.adapters.http_resilience import ClientFactory
    from cinesync.config.notion import NotionConfig
    from cinesync.domain.model import SourceRecord

log = getLogger(__name__)

NOTION_PAGE_SIZE = 100


class NotionClient:
    """Read the schedule database, filtered server-side to eligible screenings."""

    def __init__(
        self,
        *,
        config: NotionConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> NotionClient:
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
        """Check the token can read the configured database."""

        try:
            await self._perform_request("GET", f"databases/{self._config.database_id}")
        except httpx.HTTPError as exc:
            raise classify_http_error(exc, service="notion") from exc
        log.info("Notion database %s is reachable", self._config.database_id)

    async def fetch_eligible(self, *, now: datetime) -> list[SourceRecord]:
        try:
            pages = await self._query_all(self.eligibility_filter(now))
        except (httpx.HTTPError, ValueError) as exc:
            raise SourceQueryError(f"Notion database query failed: {exc}") from exc

        records: list[SourceRecord] = []
        for page in pages:
            if page.archived or page.in_trash:
                continue
            try:
                records.append(parse_source_record(page, self._config.properties))
            except NotionPayloadError as exc:
                log.warning("Ignoring Notion page %s: %s", page.id, exc)
        log.debug("Notion returned %s eligible pages", len(records))
        return records

    def eligibility_filter(self, now: datetime) -> dict[str, Any]:
        properties = self._config.properties
        return {
            "and": [
                {"property": properties.date, "date": {"on_or_after": now.isoformat()}},
                {"property": properties.host, "people": {"is_not_empty": True}},
            ]
        }

    async def _query_all(self, query_filter: dict[str, Any]) -> list[Page]:
        pages: list[Page] = []
        cursor: str | None = None
        while True:
            body: dict[str, Any] = {
                "filter": query_filter,
                "sorts": [{"property": self._config.properties.date, "direction": "ascending"}],
                "page_size": NOTION_PAGE_SIZE,
            }
            if cursor is not None:
                body["start_cursor"] = cursor
            payload = await self._perform_request(
                "POST", f"databases/{self._config.database_id}/query", json=body
            )
            response = DatabaseQueryResponse.model_validate(payload)
            pages.extend(response.results)
            if not response.has_more or response.next_cursor is None:
                return pages
            cursor = response.next_cursor

    async def _perform_request(
        self,
        method: str,
        path: str,
        *,
        json: object | None = None,
    ) -> object:
        client = self._http()
        if json is None:
            response = await client.request(method, path)
        else:
            response = await client.request(method, path, json=json)
        if response.is_error:
            log.error("Notion API error %s: %s", response.status_code, _error_detail(response))
        response.raise_for_status()
        return response.json()

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client


def _error_detail(response: httpx.Response) -> str:
    try:
        error = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return response.text[:200]
    return f"{error.code}: {error.message}"
