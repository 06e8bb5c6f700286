"""Domain port definitions for adapters."""

from __future__ import annotations

from .assets import AssetMaterializer
from .enrichment import CatalogLookup
from .persistence import SyncStateRepository
from .publishing import EventPublisher
from .source import SourceRecordFetcher
from .unit_of_work import (
    RepositoryCollection,
    SyncStateRepositories,
    SyncStateUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "AssetMaterializer",
    "CatalogLookup",
    "EventPublisher",
    "RepositoryCollection",
    "SourceRecordFetcher",
    "SyncStateRepositories",
    "SyncStateRepository",
    "SyncStateUnitOfWork",
    "UnitOfWork",
]
