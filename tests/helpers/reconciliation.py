"""Reusable fakes for reconciliation engine tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from cinesync.domain.errors import (
    AssetError,
    CatalogNotFoundError,
    PublishError,
    SourceQueryError,
    StoreError,
)
from cinesync.domain.model import (
    EnrichedMetadata,
    ImageAsset,
    PublishRequest,
    SourceRecord,
    SyncState,
)
from cinesync.domain.ports.unit_of_work import SyncStateRepositories

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

NOW = datetime(2025, 3, 1, 12, tzinfo=UTC)


def make_record(
    record_id: str = "page-1",
    *,
    link: str | None = "https://www.imdb.com/title/tt0111161/",
    scheduled_at: datetime | None = None,
    has_host: bool = True,
) -> SourceRecord:
    return SourceRecord(
        id=record_id,
        external_link=link,
        scheduled_at=scheduled_at or NOW + timedelta(days=2),
        has_host=has_host,
    )


def make_metadata(**overrides: object) -> EnrichedMetadata:
    values: dict[str, object] = {
        "title": "The Shawshank Redemption",
        "overview": "Two imprisoned men bond over a number of years.",
        "genres": ("Drama", "Crime"),
        "release_year": 1994,
        "runtime_minutes": 142,
        "backdrop_url": "https://images.example/backdrop.jpg",
    }
    values.update(overrides)
    return EnrichedMetadata(**values)  # type: ignore[arg-type]


@dataclass
class FakeSource:
    records: list[SourceRecord] = field(default_factory=list[SourceRecord])
    fail: bool = False
    calls: int = 0

    async def fetch_eligible(self, *, now: datetime) -> Sequence[SourceRecord]:  # noqa: ARG002
        self.calls += 1
        if self.fail:
            raise SourceQueryError("source offline")
        return list(self.records)


@dataclass
class FakeCatalog:
    metadata: dict[str, EnrichedMetadata] = field(default_factory=dict[str, EnrichedMetadata])
    default: EnrichedMetadata | None = field(default_factory=make_metadata)
    lookups: list[str] = field(default_factory=list[str])

    async def lookup(self, external_ref: str) -> EnrichedMetadata:
        self.lookups.append(external_ref)
        found = self.metadata.get(external_ref, self.default)
        if found is None:
            raise CatalogNotFoundError(
                f"{external_ref} not found", service="tmdb", status_code=404
            )
        return found


@dataclass
class FakeAssets:
    fail: bool = False
    urls: list[str] = field(default_factory=list[str])

    async def materialize(self, url: str) -> ImageAsset:
        self.urls.append(url)
        if self.fail:
            raise AssetError("download failed")
        return ImageAsset(data_uri="data:image/jpeg;base64,AAAA", content_type="image/jpeg", size=3)


@dataclass
class FakePublisher:
    fail: bool = False
    created: list[PublishRequest] = field(default_factory=list[PublishRequest])
    updated: list[tuple[str, PublishRequest]] = field(
        default_factory=list[tuple[str, PublishRequest]]
    )
    _next_id: int = 1000

    async def create(self, request: PublishRequest) -> str:
        if self.fail:
            raise PublishError("discord rejected the event")
        self.created.append(request)
        self._next_id += 1
        return str(self._next_id)

    async def update(self, target_event_id: str, request: PublishRequest) -> None:
        if self.fail:
            raise PublishError("discord rejected the event")
        self.updated.append((target_event_id, request))

    @property
    def calls(self) -> int:
        return len(self.created) + len(self.updated)


class FakeSyncStateRepository:
    def __init__(self, *, fail_reads: bool = False, fail_writes: bool = False) -> None:
        self.states: dict[str, SyncState] = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, record_id: str) -> SyncState | None:
        if self.fail_reads:
            raise StoreError("store read failed")
        return self.states.get(record_id)

    def set(self, record_id: str, state: SyncState) -> None:
        if self.fail_writes:
            raise StoreError("store write failed")
        self.states[record_id] = state


class FakeUnitOfWork:
    def __init__(self, repository: FakeSyncStateRepository) -> None:
        self._repositories = SyncStateRepositories(sync_states=repository)
        self.committed = False

    @property
    def repositories(self) -> SyncStateRepositories:
        return self._repositories

    def __enter__(self) -> FakeUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        return None
