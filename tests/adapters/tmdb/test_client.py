from __future__ import annotations

import asyncio

import httpx
import pytest

from cinesync.adapters.tmdb import TmdbClient
from cinesync.config.http_resilience import ResilienceConfig
from cinesync.config.tmdb import TMDB_BASE_URL, TmdbConfig, get_tmdb_config
from cinesync.domain.errors import (
    CatalogError,
    CatalogNotFoundError,
    CatalogRateLimitedError,
    CatalogUnavailableError,
    NotFoundError,
)
from tests.helpers.http import RecordingHandler, make_client_factory

MOVIE = {
    "id": 278,
    "imdb_id": "tt0111161",
    "title": "The Shawshank Redemption",
    "overview": "Imprisoned in the 1940s for the double murder of his wife.",
    "genres": [{"id": 18, "name": "Drama"}, {"id": 80, "name": "Crime"}],
    "adult": False,
    "release_date": "1994-09-23",
    "runtime": 142,
    "backdrop_path": "/kXfqcdQKsToO0OUXHcrrNCHDBzO.jpg",
}


def _client(handler: RecordingHandler) -> TmdbClient:
    config = TmdbConfig(
        api_key="tmdb-key",
        resilience=ResilienceConfig(name="tmdb", base_url=TMDB_BASE_URL),
    )
    return TmdbClient(config=config, client_factory=make_client_factory(handler))


def test_lookup_translates_movie() -> None:
    handler = RecordingHandler(httpx.Response(200, json=MOVIE))

    metadata = asyncio.run(_client(handler).lookup("tt0111161"))

    assert metadata.title == "The Shawshank Redemption"
    assert metadata.display_name == "The Shawshank Redemption (1994)"
    assert metadata.genres == ("Drama", "Crime")
    assert metadata.runtime_minutes == 142
    assert metadata.backdrop_url == (
        "https://www.themoviedb.org/t/p/w1920_and_h800_multi_faces"
        "/kXfqcdQKsToO0OUXHcrrNCHDBzO.jpg"
    )
    request = handler.requests[0]
    assert request.url.path == "/3/movie/tt0111161"
    assert request.url.params["api_key"] == "tmdb-key"


def test_lookup_handles_sparse_payload() -> None:
    sparse = {
        "id": 1,
        "title": "Unknown",
        "overview": None,
        "release_date": "",
        "runtime": 0,
        "backdrop_path": None,
    }
    handler = RecordingHandler(httpx.Response(200, json=sparse))

    metadata = asyncio.run(_client(handler).lookup("tt1"))

    assert metadata.overview == ""
    assert metadata.release_year is None
    assert metadata.runtime_minutes is None
    assert metadata.backdrop_url is None
    assert metadata.display_name == "Unknown"


def test_lookup_not_found() -> None:
    handler = RecordingHandler(
        httpx.Response(
            404,
            json={"status_code": 34, "status_message": "Not found.", "success": False},
        )
    )

    with pytest.raises(CatalogNotFoundError) as excinfo:
        asyncio.run(_client(handler).lookup("tt404"))

    assert isinstance(excinfo.value, CatalogError)
    assert isinstance(excinfo.value, NotFoundError)
    assert excinfo.value.status_code == 404


def test_lookup_rate_limited_carries_retry_after() -> None:
    handler = RecordingHandler(httpx.Response(429, headers={"Retry-After": "3"}, json={}))

    with pytest.raises(CatalogRateLimitedError) as excinfo:
        asyncio.run(_client(handler).lookup("tt1"))

    assert excinfo.value.retry_after == 3.0


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="maintenance"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"id": 1}),
        httpx.ReadTimeout("slow"),
    ],
)
def test_lookup_unavailable(response: httpx.Response | Exception) -> None:
    handler = RecordingHandler(response)

    with pytest.raises(CatalogUnavailableError):
        asyncio.run(_client(handler).lookup("tt1"))


def test_verify_hits_configuration() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"images": {}}))

    asyncio.run(_client(handler).verify())

    assert handler.requests[0].url.path == "/3/configuration"


def _cached_client(handler: RecordingHandler, monkeypatch: pytest.MonkeyPatch) -> TmdbClient:
    monkeypatch.setenv("TMDB_KEY", "tmdb-key")
    return TmdbClient(
        config=get_tmdb_config(),
        client_factory=make_client_factory(handler, keep_cache=True),
    )


def _lookup_twice(client: TmdbClient) -> list[str]:
    async def run() -> list[str]:
        outcomes: list[str] = []
        async with client:
            for _ in range(2):
                try:
                    metadata = await client.lookup("tt0111161")
                except CatalogError as exc:
                    outcomes.append(type(exc).__name__)
                else:
                    outcomes.append(metadata.title)
        return outcomes

    return asyncio.run(run())


def test_successful_lookup_is_served_from_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = RecordingHandler(httpx.Response(200, json=MOVIE))

    outcomes = _lookup_twice(_cached_client(handler, monkeypatch))

    assert outcomes == ["The Shawshank Redemption", "The Shawshank Redemption"]
    assert len(handler.requests) == 1


def test_not_found_payload_is_not_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = RecordingHandler(
        httpx.Response(
            404,
            json={"status_code": 34, "status_message": "Not found.", "success": False},
        ),
        httpx.Response(200, json=MOVIE),
    )

    outcomes = _lookup_twice(_cached_client(handler, monkeypatch))

    assert outcomes == ["CatalogNotFoundError", "The Shawshank Redemption"]
    assert len(handler.requests) == 2


def test_server_error_is_not_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = RecordingHandler(
        httpx.Response(502, text="<html>bad gateway</html>"),
        httpx.Response(200, json=MOVIE),
    )

    outcomes = _lookup_twice(_cached_client(handler, monkeypatch))

    assert outcomes == ["CatalogUnavailableError", "The Shawshank Redemption"]
    assert len(handler.requests) == 2
