"""TMDB configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ShouldCacheHook

TMDB_BASE_URL = "https://api.themoviedb.org/3/"
TMDB_IMAGE_BASE_URL = "https://www.themoviedb.org/t/p/w1920_and_h800_multi_faces"
TMDB_TIMEOUT_SECONDS = 10.0
TMDB_CACHE_TTL_SECONDS = 6 * 60 * 60


@dataclass(frozen=True)
class TmdbConfig:
    api_key: str
    resilience: ResilienceConfig
    image_base_url: str = TMDB_IMAGE_BASE_URL


def _is_successful_payload(payload: object) -> bool:
    # TMDB error bodies carry "success": false alongside a status code.
    if isinstance(payload, dict):
        return payload.get("success") is not False
    return True


def get_tmdb_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> TmdbConfig:
    values = require_env_vars(("TMDB_KEY",))
    return TmdbConfig(
        api_key=values["TMDB_KEY"],
        resilience=resilience
        or ResilienceConfig(
            name="tmdb",
            base_url=TMDB_BASE_URL,
            timeout_seconds=TMDB_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            cache=CacheConfig(
                default_ttl_seconds=TMDB_CACHE_TTL_SECONDS,
                should_cache=cache_predicate or _is_successful_payload,
            ),
        ),
    )
