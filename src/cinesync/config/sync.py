"""Reconciliation loop defaults."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from .env import optional_number_env_var

DEFAULT_INTERVAL_SECONDS = 5 * 60
DEFAULT_RECORD_TIMEOUT_SECONDS = 120.0
DEFAULT_CONCURRENCY = 1


@dataclass(frozen=True, slots=True)
class SyncConfig:
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS
    record_timeout_seconds: float = DEFAULT_RECORD_TIMEOUT_SECONDS
    concurrency: int = DEFAULT_CONCURRENCY

    @property
    def interval(self) -> timedelta:
        return timedelta(seconds=self.interval_seconds)


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        interval_seconds=optional_number_env_var(
            "CINESYNC_INTERVAL_SECONDS", float(DEFAULT_INTERVAL_SECONDS), kind=float
        ),
        record_timeout_seconds=optional_number_env_var(
            "CINESYNC_RECORD_TIMEOUT_SECONDS", DEFAULT_RECORD_TIMEOUT_SECONDS, kind=float
        ),
        concurrency=optional_number_env_var(
            "CINESYNC_CONCURRENCY", DEFAULT_CONCURRENCY, kind=int
        ),
    )
