"""
Ingestion contracts: validation of backend records into engine types.
"""

from .schema import (
    MalformedSnapshotError,
    SnapshotRecord,
    TrackedItemRecord,
    parse_snapshot,
    parse_snapshots,
    parse_tracked_item,
    parse_tracked_items,
)

__all__ = [
    "MalformedSnapshotError",
    "SnapshotRecord",
    "TrackedItemRecord",
    "parse_snapshot",
    "parse_snapshots",
    "parse_tracked_item",
    "parse_tracked_items",
]
