"""Ports for persisting sync state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cinesync.domain.model import SyncState


@runtime_checkable
class SyncStateRepository(Protocol):
    """Key/value store from source-record id to last-known sync state."""

    def get(self, record_id: str) -> SyncState | None: ...

    def set(self, record_id: str, state: SyncState) -> None: ...


__all__ = ["SyncStateRepository"]
