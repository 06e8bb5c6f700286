"""Notion source adapter."""

from __future__ import annotations

from .client import NotionClient
from .schema import DatabaseQueryResponse, Page
from .translator import NotionPayloadError, parse_source_record, parse_start

__all__ = [
    "DatabaseQueryResponse",
    "NotionClient",
    "NotionPayloadError",
    "Page",
    "parse_source_record",
    "parse_start",
]
