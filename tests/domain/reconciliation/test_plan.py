from __future__ import annotations

from datetime import timedelta

from cinesync.domain.model import SyncState
from cinesync.domain.reconciliation import (
    PublishAction,
    PublishDecision,
    RecordOutcome,
    TickResult,
    decide_publish,
    is_unchanged,
)
from tests.helpers.reconciliation import make_record


def test_decide_publish_without_state_creates() -> None:
    assert decide_publish(None) == PublishDecision.create()


def test_decide_publish_with_null_target_creates() -> None:
    record = make_record()
    state = SyncState(external_ref="tt0111161", scheduled_at=record.scheduled_at)

    decision = decide_publish(state)

    assert decision.action is PublishAction.CREATE
    assert decision.target_event_id is None


def test_decide_publish_with_target_updates() -> None:
    record = make_record()
    state = SyncState(
        external_ref="tt0111161", scheduled_at=record.scheduled_at, target_event_id="42"
    )

    assert decide_publish(state) == PublishDecision(PublishAction.UPDATE, "42")


def test_is_unchanged_requires_matching_instant_and_reference() -> None:
    record = make_record()
    state = SyncState(external_ref="tt0111161", scheduled_at=record.scheduled_at)

    assert is_unchanged(state, record, "tt0111161")
    assert not is_unchanged(state, record, "tt0068646")
    assert not is_unchanged(None, record, "tt0111161")
    moved = make_record(scheduled_at=record.scheduled_at + timedelta(milliseconds=1))
    assert not is_unchanged(state, moved, "tt0111161")


def test_tick_result_counts_outcomes() -> None:
    result = TickResult(fetched=4)
    result.outcomes.update(
        {
            "a": RecordOutcome.CREATED,
            "b": RecordOutcome.UNCHANGED,
            "c": RecordOutcome.PUBLISH_FAILED,
            "d": RecordOutcome.CREATED,
        }
    )

    assert result.created == 2
    assert result.unchanged == 1
    assert result.updated == 0
    assert result.failed == 1
    assert result.summary() == "fetched=4, unchanged=1, created=2, publish_failed=1"
