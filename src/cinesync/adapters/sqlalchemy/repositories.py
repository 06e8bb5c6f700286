"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from cinesync.adapters.sqlalchemy.mappings import sync_state_table
from cinesync.domain.errors import StoreError
from cinesync.domain.model import SyncState, from_epoch_millis

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.orm import Session


class SqlAlchemySyncStateRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, record_id: str) -> SyncState | None:
        stmt = select(sync_state_table).where(sync_state_table.c.record_id == record_id)
        try:
            row = self.session.execute(stmt).one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not read sync state for {record_id}") from exc
        if row is None:
            return None
        return _to_state(row)

    def set(self, record_id: str, state: SyncState) -> None:
        values = {
            "external_ref": state.external_ref,
            "scheduled_at": state.scheduled_at_ms,
            "target_event_id": state.target_event_id,
        }
        try:
            updated = self.session.execute(
                sync_state_table.update()
                .where(sync_state_table.c.record_id == record_id)
                .values(**values)
            )
            if updated.rowcount == 0:
                self.session.execute(
                    sync_state_table.insert().values(record_id=record_id, **values)
                )
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not write sync state for {record_id}") from exc


def _to_state(row: Row[tuple[object, ...]]) -> SyncState:
    mapping = row._mapping  # noqa: SLF001
    target_event_id = mapping["target_event_id"]
    return SyncState(
        external_ref=str(mapping["external_ref"]),
        scheduled_at=from_epoch_millis(int(mapping["scheduled_at"])),
        target_event_id=str(target_event_id) if target_event_id else None,
    )
