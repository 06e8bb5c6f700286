"""Port for catalog metadata lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cinesync.domain.model import EnrichedMetadata


@runtime_checkable
class CatalogLookup(Protocol):
    """Stateless, read-only lookup of descriptive metadata by catalog reference."""

    async def lookup(self, external_ref: str) -> EnrichedMetadata: ...


__all__ = ["CatalogLookup"]
