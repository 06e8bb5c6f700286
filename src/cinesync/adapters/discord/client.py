"""Discord REST client for guild scheduled events."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from cinesync.adapters.http_resilience import ResilientClient, classify_http_error
from cinesync.domain.errors import PublishError

from .schema import ErrorResponse, Guild, ScheduledEvent, ScheduledEventPayload

if TYPE_CHECKING:
    from types import TracebackType

    from cinesync.adapters.http_resilience import ClientFactory
    from cinesync.config.discord import DiscordConfig
    from cinesync.domain.model import PublishRequest

log = getLogger(__name__)


class DiscordClient:
    """Create and edit scheduled events in the configured guild."""

    def __init__(
        self,
        *,
        config: DiscordConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> DiscordClient:
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

    @property
    def events_path(self) -> str:
        return f"guilds/{self._config.guild_id}/scheduled-events"

    async def verify(self) -> Guild:
        """Check the bot is a member of the configured guild."""

        try:
            response = await self._http().get(f"guilds/{self._config.guild_id}")
            _raise_for_status(response)
            guild = Guild.model_validate(response.json())
        except httpx.HTTPError as exc:
            raise classify_http_error(exc, service="discord") from exc
        log.info("Connected to Discord guild %s (%s)", guild.name, guild.id)
        return guild

    async def create(self, request: PublishRequest) -> str:
        payload = ScheduledEventPayload.from_request(request).to_json()
        event = await self._send("POST", self.events_path, payload)
        return event.id

    async def update(self, target_event_id: str, request: PublishRequest) -> None:
        payload = ScheduledEventPayload.from_request(request).to_json()
        await self._send("PATCH", f"{self.events_path}/{target_event_id}", payload)

    async def _send(self, method: str, path: str, payload: dict[str, object]) -> ScheduledEvent:
        try:
            response = await self._http().request(method, path, json=payload)
            _raise_for_status(response)
            return ScheduledEvent.model_validate(response.json())
        except httpx.HTTPError as exc:
            classified = classify_http_error(exc, service="discord")
            raise PublishError(str(classified)) from exc
        except ValueError as exc:
            raise PublishError(f"Unexpected Discord response to {method} {path}: {exc}") from exc

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_error:
        log.error("Discord API error %s: %s", response.status_code, _error_detail(response))
    response.raise_for_status()


def _error_detail(response: httpx.Response) -> str:
    try:
        error = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return response.text[:200]
    return f"{error.code}: {error.message}"
