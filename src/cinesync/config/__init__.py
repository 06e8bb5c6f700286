"""Application configuration helpers."""

from __future__ import annotations

from .discord import DiscordConfig, get_discord_config
from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .notion import NotionConfig, NotionProperties, get_notion_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config
from .tmdb import TmdbConfig, get_tmdb_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "DiscordConfig",
    "MissingConfigurationError",
    "NotionConfig",
    "NotionProperties",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "TmdbConfig",
    "configure_logging",
    "get_database_config",
    "get_discord_config",
    "get_notion_config",
    "get_storage_config",
    "get_sync_config",
    "get_tmdb_config",
    "require_env_vars",
]
