"""Port for the target platform's event API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cinesync.domain.model import PublishRequest


@runtime_checkable
class EventPublisher(Protocol):
    """Create and update target events.

    Not idempotent: every ``create`` call makes a new event.
    """

    async def create(self, request: PublishRequest) -> str: ...

    async def update(self, target_event_id: str, request: PublishRequest) -> None: ...


__all__ = ["EventPublisher"]
