"""Value types flowing through a reconciliation tick."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import IntEnum

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MILLISECOND = timedelta(milliseconds=1)


def epoch_millis(value: datetime) -> int:
    """Return ``value`` as integer milliseconds since the Unix epoch."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (value - _EPOCH) // _MILLISECOND


def from_epoch_millis(value: int) -> datetime:
    return _EPOCH + value * _MILLISECOND


@dataclass(frozen=True, slots=True)
class SourceRecord:
    """One scheduled screening as read from the source database."""

    id: str
    external_link: str | None
    scheduled_at: datetime
    has_host: bool

    def is_eligible(self, now: datetime) -> bool:
        return self.has_host and self.scheduled_at >= now


@dataclass(frozen=True, slots=True)
class SyncState:
    """Last-known mapping from a source record to its target event."""

    external_ref: str
    scheduled_at: datetime
    target_event_id: str | None = None

    @property
    def scheduled_at_ms(self) -> int:
        return epoch_millis(self.scheduled_at)


@dataclass(frozen=True, slots=True)
class EnrichedMetadata:
    title: str
    overview: str = ""
    genres: tuple[str, ...] = field(default_factory=tuple)
    adult: bool = False
    release_year: int | None = None
    runtime_minutes: int | None = None
    backdrop_url: str | None = None

    @property
    def display_name(self) -> str:
        if self.release_year is None:
            return self.title
        return f"{self.title} ({self.release_year})"

    @property
    def runtime(self) -> timedelta | None:
        if self.runtime_minutes is None:
            return None
        return timedelta(minutes=self.runtime_minutes)


@dataclass(frozen=True, slots=True)
class ImageAsset:
    """An image encoded for inline embedding."""

    data_uri: str
    content_type: str
    size: int


class PrivacyLevel(IntEnum):
    GUILD_ONLY = 2


class EventEntityType(IntEnum):
    VOICE = 2


@dataclass(frozen=True, slots=True)
class PublishRequest:
    channel_id: str
    name: str
    description: str
    start: datetime
    end: datetime | None
    privacy_level: PrivacyLevel = PrivacyLevel.GUILD_ONLY
    entity_type: EventEntityType = EventEntityType.VOICE
    image: str | None = None
