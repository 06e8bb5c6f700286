"""Pydantic models for the Discord guild scheduled-event API."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict

from cinesync.domain.model import EventEntityType, PrivacyLevel, PublishRequest


class DiscordBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ScheduledEventPayload(DiscordBaseModel):
    channel_id: str
    name: str
    description: str
    scheduled_start_time: datetime
    scheduled_end_time: datetime | None = None
    privacy_level: PrivacyLevel = PrivacyLevel.GUILD_ONLY
    entity_type: EventEntityType = EventEntityType.VOICE
    image: str | None = None

    @classmethod
    def from_request(cls, request: PublishRequest) -> ScheduledEventPayload:
        return cls(
            channel_id=request.channel_id,
            name=request.name,
            description=request.description,
            scheduled_start_time=request.start,
            scheduled_end_time=request.end,
            privacy_level=request.privacy_level,
            entity_type=request.entity_type,
            image=request.image,
        )

    def to_json(self) -> dict[str, object]:
        # Absent optional fields are left out rather than sent as null, which would
        # clear an existing cover image on update.
        return self.model_dump(mode="json", exclude_none=True)


class ScheduledEvent(DiscordBaseModel):
    id: str
    guild_id: str | None = None
    name: str | None = None


class Guild(DiscordBaseModel):
    id: str
    name: str


class ErrorResponse(DiscordBaseModel):
    code: int
    message: str
