"""Notion configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

NOTION_BASE_URL = "https://api.notion.com/v1/"
NOTION_API_VERSION = "2022-06-28"
NOTION_TIMEOUT_SECONDS = 20.0

DEFAULT_LINK_PROPERTY = "IMDb"
DEFAULT_DATE_PROPERTY = "Date"
DEFAULT_HOST_PROPERTY = "Host (primary)"


@dataclass(frozen=True, slots=True)
class NotionProperties:
    """Column names of the schedule database."""

    link: str = DEFAULT_LINK_PROPERTY
    date: str = DEFAULT_DATE_PROPERTY
    host: str = DEFAULT_HOST_PROPERTY


@dataclass(frozen=True)
class NotionConfig:
    token: str
    database_id: str
    resilience: ResilienceConfig
    properties: NotionProperties = NotionProperties()


def notion_resilience(token: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="notion",
        base_url=NOTION_BASE_URL,
        timeout_seconds=NOTION_TIMEOUT_SECONDS,
        # Notion allows an average of three requests per second per integration.
        ratelimit=RateLimit(max_calls=3, per_seconds=1.0),
        default_headers={
            "Authorization": f"Bearer {token}",
            "Notion-Version": NOTION_API_VERSION,
        },
    )


def get_notion_config(*, resilience: ResilienceConfig | None = None) -> NotionConfig:
    values = require_env_vars(("NOTION_TOKEN", "NOTION_DATABASE_ID"))
    token = values["NOTION_TOKEN"]
    return NotionConfig(
        token=token,
        database_id=values["NOTION_DATABASE_ID"],
        resilience=resilience or notion_resilience(token),
    )
