"""Reconciliation of source records against published target events.

Each tick:
1) fetch eligible source records
2) parse the catalog reference from each record's link
3) compare against stored sync state and skip unchanged records
4) enrich, materialise the cover image, and build the publish request
5) create or update the target event
6) persist the new sync state
"""

from __future__ import annotations

from .engine import ReconciliationEngine
from .plan import (
    PublishAction,
    PublishDecision,
    RecordOutcome,
    TickResult,
    decide_publish,
    is_unchanged,
)

__all__ = [
    "PublishAction",
    "PublishDecision",
    "ReconciliationEngine",
    "RecordOutcome",
    "TickResult",
    "decide_publish",
    "is_unchanged",
]
