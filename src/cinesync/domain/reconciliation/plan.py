"""Per-record decisions and tick reporting.

Staleness is judged from the stored scheduled instant and catalog reference only.
Catalog metadata changes alone never mark a record as changed.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from cinesync.domain.model import epoch_millis

if TYPE_CHECKING:
    from cinesync.domain.model import SourceRecord, SyncState


class PublishAction(StrEnum):
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True, slots=True)
class PublishDecision:
    """Which call to issue for a changed record.

    ``target_event_id`` is set exactly when ``action`` is ``UPDATE``.
    """

    action: PublishAction
    target_event_id: str | None = None

    @classmethod
    def create(cls) -> PublishDecision:
        return cls(PublishAction.CREATE)

    @classmethod
    def update(cls, target_event_id: str) -> PublishDecision:
        return cls(PublishAction.UPDATE, target_event_id)


def decide_publish(state: SyncState | None) -> PublishDecision:
    """Trust local state alone: update only when a target id was stored."""

    if state is None or not state.target_event_id:
        return PublishDecision.create()
    return PublishDecision.update(state.target_event_id)


def is_unchanged(state: SyncState | None, record: SourceRecord, external_ref: str) -> bool:
    if state is None:
        return False
    return (
        state.scheduled_at_ms == epoch_millis(record.scheduled_at)
        and state.external_ref == external_ref
    )


class RecordOutcome(StrEnum):
    UNCHANGED = "unchanged"
    CREATED = "created"
    UPDATED = "updated"
    INVALID_REFERENCE = "invalid_reference"
    ENRICHMENT_FAILED = "enrichment_failed"
    PUBLISH_FAILED = "publish_failed"
    STORE_FAILED = "store_failed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


SUCCESSFUL_OUTCOMES = frozenset(
    {RecordOutcome.UNCHANGED, RecordOutcome.CREATED, RecordOutcome.UPDATED}
)


@dataclass(slots=True)
class TickResult:
    """Outcome of one reconciliation tick."""

    fetched: int = 0
    outcomes: dict[str, RecordOutcome] = field(default_factory=dict[str, RecordOutcome])
    aborted: bool = False

    def count(self, outcome: RecordOutcome) -> int:
        return sum(1 for value in self.outcomes.values() if value is outcome)

    @property
    def created(self) -> int:
        return self.count(RecordOutcome.CREATED)

    @property
    def updated(self) -> int:
        return self.count(RecordOutcome.UPDATED)

    @property
    def unchanged(self) -> int:
        return self.count(RecordOutcome.UNCHANGED)

    @property
    def failed(self) -> int:
        return sum(1 for value in self.outcomes.values() if value not in SUCCESSFUL_OUTCOMES)

    def summary(self) -> str:
        if self.aborted:
            return "aborted"
        counts = Counter(self.outcomes.values())
        parts = [f"fetched={self.fetched}"]
        parts.extend(f"{outcome}={counts[outcome]}" for outcome in RecordOutcome if counts[outcome])
        return ", ".join(parts)
