"""Port for turning image references into embeddable payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cinesync.domain.model import ImageAsset


@runtime_checkable
class AssetMaterializer(Protocol):
    async def materialize(self, url: str) -> ImageAsset: ...


__all__ = ["AssetMaterializer"]
