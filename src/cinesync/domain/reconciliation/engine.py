"""Orchestrator for one reconciliation tick.

The engine composes the collaborator ports but does not prescribe concrete adapters,
so tests can drive it with in-memory fakes. Sync state is written after the publish
call returns: a crash in between loses the mapping but not the remote event, and the
next tick creates it again.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from cinesync.domain.errors import (
    AssetError,
    CatalogError,
    InvalidReferenceError,
    PublishError,
    SourceQueryError,
    StoreError,
)
from cinesync.domain.model import SyncState
from cinesync.domain.publishing import build_publish_request
from cinesync.domain.references import extract_external_ref

from .plan import PublishAction, RecordOutcome, TickResult, decide_publish, is_unchanged

if TYPE_CHECKING:
    from cinesync.domain.model import EnrichedMetadata, ImageAsset, SourceRecord
    from cinesync.domain.ports import (
        AssetMaterializer,
        CatalogLookup,
        EventPublisher,
        SourceRecordFetcher,
        SyncStateUnitOfWork,
    )

    from .plan import PublishDecision

log = getLogger(__name__)

DEFAULT_RECORD_TIMEOUT_SECONDS = 120.0

UnitOfWorkFactory = Callable[[], "SyncStateUnitOfWork"]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ReconciliationEngine:
    """Mirror eligible source records into target events."""

    source: SourceRecordFetcher
    catalog: CatalogLookup
    assets: AssetMaterializer
    publisher: EventPublisher
    unit_of_work_factory: UnitOfWorkFactory
    channel_id: str
    record_timeout_seconds: float | None = DEFAULT_RECORD_TIMEOUT_SECONDS
    concurrency: int = 1
    clock: Clock = field(default=_utcnow)

    async def run_tick(self) -> TickResult:
        """Run one pass over all eligible source records."""

        result = TickResult()
        now = self.clock()
        log.info("Syncing...")
        try:
            records = await self.source.fetch_eligible(now=now)
        except SourceQueryError:
            log.exception("Fetching source records failed, aborting tick")
            result.aborted = True
            return result

        result.fetched = len(records)
        # Anything the source returns outside the window is ignored, never purged.
        eligible = [record for record in records if record.is_eligible(now)]
        semaphore = asyncio.Semaphore(max(1, self.concurrency))

        async def run(record: SourceRecord) -> None:
            async with semaphore:
                result.outcomes[record.id] = await self._reconcile_guarded(record)

        async with asyncio.TaskGroup() as group:
            for record in eligible:
                group.create_task(run(record))

        log.info("Sync finished: %s", result.summary())
        return result

    async def _reconcile_guarded(self, record: SourceRecord) -> RecordOutcome:
        try:
            return await self.reconcile_record(record)
        except Exception:
            log.exception("Unexpected failure while syncing record %s", record.id)
            return RecordOutcome.FAILED

    async def reconcile_record(self, record: SourceRecord) -> RecordOutcome:
        """Bring the target event for ``record`` up to date."""

        try:
            external_ref = extract_external_ref(record.external_link)
        except InvalidReferenceError as exc:
            log.warning("Skipping record %s: %s", record.id, exc)
            return RecordOutcome.INVALID_REFERENCE

        try:
            state = self._load_state(record.id)
        except StoreError:
            log.exception("Reading sync state for record %s failed", record.id)
            return RecordOutcome.STORE_FAILED

        if is_unchanged(state, record, external_ref):
            log.debug("Record %s (%s) unchanged", record.id, external_ref)
            return RecordOutcome.UNCHANGED

        decision = decide_publish(state)
        try:
            async with asyncio.timeout(self.record_timeout_seconds):
                target_event_id = await self._publish(record, external_ref, decision)
        except CatalogError as exc:
            log.warning(
                "Catalog lookup for %s (record %s) failed: %s", external_ref, record.id, exc
            )
            return RecordOutcome.ENRICHMENT_FAILED
        except PublishError as exc:
            log.error("Publishing record %s failed: %s", record.id, exc)  # noqa: TRY400
            return RecordOutcome.PUBLISH_FAILED
        except TimeoutError:
            log.error(  # noqa: TRY400
                "Record %s timed out after %ss", record.id, self.record_timeout_seconds
            )
            return RecordOutcome.TIMED_OUT

        new_state = SyncState(
            external_ref=external_ref,
            scheduled_at=record.scheduled_at,
            target_event_id=target_event_id,
        )
        try:
            self._save_state(record.id, new_state)
        except StoreError:
            log.exception(
                "Saving sync state for record %s failed; it will be published again", record.id
            )
            return RecordOutcome.STORE_FAILED

        if decision.action is PublishAction.CREATE:
            return RecordOutcome.CREATED
        return RecordOutcome.UPDATED

    async def _publish(
        self,
        record: SourceRecord,
        external_ref: str,
        decision: PublishDecision,
    ) -> str:
        metadata = await self.catalog.lookup(external_ref)
        image = await self._materialize(metadata)
        request = build_publish_request(
            record,
            metadata,
            external_ref=external_ref,
            channel_id=self.channel_id,
            image=image,
        )

        if decision.target_event_id is None:
            log.info('Creating "%s" event', metadata.title)
            return await self.publisher.create(request)

        log.info('Editing "%s" event', metadata.title)
        await self.publisher.update(decision.target_event_id, request)
        return decision.target_event_id

    async def _materialize(self, metadata: EnrichedMetadata) -> ImageAsset | None:
        if metadata.backdrop_url is None:
            return None
        log.info("Downloading cover image for %s...", metadata.title)
        try:
            return await self.assets.materialize(metadata.backdrop_url)
        except AssetError as exc:
            log.warning("Publishing %s without a cover image: %s", metadata.title, exc)
            return None

    def _load_state(self, record_id: str) -> SyncState | None:
        with self.unit_of_work_factory() as uow:
            return uow.repositories.sync_states.get(record_id)

    def _save_state(self, record_id: str, state: SyncState) -> None:
        with self.unit_of_work_factory() as uow:
            uow.repositories.sync_states.set(record_id, state)
            uow.commit()
