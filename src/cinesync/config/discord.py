"""Discord configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import IDEMPOTENT_METHODS, RateLimit, ResilienceConfig, RetryPolicy

DISCORD_BASE_URL = "https://discord.com/api/v10/"
DISCORD_TIMEOUT_SECONDS = 30.0
DEFAULT_AUDIT_LOG_REASON = "Synced from Notion"


@dataclass(frozen=True)
class DiscordConfig:
    token: str
    guild_id: str
    channel_id: str
    resilience: ResilienceConfig
    audit_log_reason: str = DEFAULT_AUDIT_LOG_REASON


def discord_resilience(token: str, *, audit_log_reason: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="discord",
        base_url=DISCORD_BASE_URL,
        timeout_seconds=DISCORD_TIMEOUT_SECONDS,
        # POST creates a new scheduled event on every call, so it is never replayed.
        retry=RetryPolicy(allowed_methods=IDEMPOTENT_METHODS),
        ratelimit=RateLimit(max_calls=5, per_seconds=5.0),
        default_headers={
            "Authorization": f"Bot {token}",
            "X-Audit-Log-Reason": audit_log_reason,
        },
    )


def get_discord_config(*, resilience: ResilienceConfig | None = None) -> DiscordConfig:
    values = require_env_vars(
        ("DISCORD_TOKEN", "DISCORD_SERVER_ID", "DISCORD_CINEMA_CHANNEL_ID")
    )
    token = values["DISCORD_TOKEN"]
    return DiscordConfig(
        token=token,
        guild_id=values["DISCORD_SERVER_ID"],
        channel_id=values["DISCORD_CINEMA_CHANNEL_ID"],
        resilience=resilience
        or discord_resilience(token, audit_log_reason=DEFAULT_AUDIT_LOG_REASON),
    )
