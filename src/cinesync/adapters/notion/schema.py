"""Pydantic models describing the Notion database query payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NotionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DateValue(NotionBaseModel):
    start: str
    end: str | None = None
    time_zone: str | None = None


class PersonRef(NotionBaseModel):
    id: str
    object: str = "user"


class PropertyValue(NotionBaseModel):
    """A single page property; only the fields the schedule uses are modelled."""

    type: str
    url: str | None = None
    date: DateValue | None = None
    people: list[PersonRef] | None = None


class Page(NotionBaseModel):
    id: str
    object: str = "page"
    archived: bool = False
    in_trash: bool = False
    properties: dict[str, PropertyValue] = Field(default_factory=dict[str, PropertyValue])


class DatabaseQueryResponse(NotionBaseModel):
    results: list[Page] = Field(default_factory=list[Page])
    has_more: bool = False
    next_cursor: str | None = None


class ErrorResponse(NotionBaseModel):
    object: str = "error"
    status: int
    code: str
    message: str
