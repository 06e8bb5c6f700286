"""Publish request construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .description import render_description
from .model import PublishRequest

if TYPE_CHECKING:
    from .model import EnrichedMetadata, ImageAsset, SourceRecord


def build_publish_request(
    record: SourceRecord,
    metadata: EnrichedMetadata,
    *,
    external_ref: str,
    channel_id: str,
    image: ImageAsset | None = None,
) -> PublishRequest:
    """Derive the target event payload for ``record``.

    The end time is the start plus the catalog runtime, or ``None`` when the catalog
    does not know the runtime.
    """

    runtime = metadata.runtime
    return PublishRequest(
        channel_id=channel_id,
        name=metadata.display_name,
        description=render_description(metadata, external_ref),
        start=record.scheduled_at,
        end=record.scheduled_at + runtime if runtime is not None else None,
        image=image.data_uri if image is not None else None,
    )
