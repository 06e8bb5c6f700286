"""Discord publishing adapter."""

from __future__ import annotations

from .client import DiscordClient
from .schema import ScheduledEvent, ScheduledEventPayload

__all__ = ["DiscordClient", "ScheduledEvent", "ScheduledEventPayload"]
