"""SQLAlchemy table metadata for persisted sync state."""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, MetaData, String, Table

metadata = MetaData()

# One row per source record. ``scheduled_at`` holds epoch milliseconds.
sync_state_table = Table(
    "sync_state",
    metadata,
    Column("record_id", String, primary_key=True),
    Column("external_ref", String, nullable=False),
    Column("scheduled_at", BigInteger, nullable=False),
    Column("target_event_id", String, nullable=True),
)
