"""SQLAlchemy adapter package for cinesync."""

from __future__ import annotations

from .mappings import metadata, sync_state_table
from .repositories import SqlAlchemySyncStateRepository

__all__ = [
    "SqlAlchemySyncStateRepository",
    "metadata",
    "sync_state_table",
]
