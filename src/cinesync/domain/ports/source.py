"""Port for reading the schedule from the source database."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from cinesync.domain.model import SourceRecord


@runtime_checkable
class SourceRecordFetcher(Protocol):
    """Return records starting at or after ``now`` that have a host assigned.

    Implementations raise :class:`~cinesync.domain.errors.SourceQueryError` when the
    record set cannot be read.
    """

    async def fetch_eligible(self, *, now: datetime) -> Sequence[SourceRecord]: ...


__all__ = ["SourceRecordFetcher"]
