"""Translate Notion pages into source records."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from cinesync.domain.model import SourceRecord

if TYPE_CHECKING:
    from cinesync.config.notion import NotionProperties

    from .schema import DateValue, Page, PropertyValue


class NotionPayloadError(ValueError):
    """Raised when a page lacks the properties needed to schedule it."""


def parse_source_record(page: Page, properties: NotionProperties) -> SourceRecord:
    date_value = _property(page, properties.date).date
    if date_value is None:
        raise NotionPayloadError(f"Page {page.id} has no {properties.date!r} value")

    link_value = page.properties.get(properties.link)
    link = link_value.url if link_value is not None else None
    people = _property(page, properties.host).people or []
    return SourceRecord(
        id=page.id,
        external_link=link.strip() if link else None,
        scheduled_at=parse_start(date_value),
        has_host=bool(people),
    )


def parse_start(value: DateValue) -> datetime:
    """Resolve a Notion date start into an aware UTC datetime.

    Date-only values mean midnight. Naive datetimes take the property's ``time_zone``
    and fall back to UTC.
    """

    raw = value.start.strip()
    try:
        if len(raw) == len("YYYY-MM-DD"):
            parsed = datetime.combine(date.fromisoformat(raw), time.min)
        else:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise NotionPayloadError(f"Invalid date start: {raw!r}") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_zone(value.time_zone))
    return parsed.astimezone(UTC)


def _zone(name: str | None) -> tzinfo:
    if not name:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return UTC


def _property(page: Page, name: str) -> PropertyValue:
    value = page.properties.get(name)
    if value is None:
        raise NotionPayloadError(f"Page {page.id} has no {name!r} property")
    return value
