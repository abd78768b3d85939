# readpace - Core Library
"""
Progress reconstruction and pace analytics for reading deadlines.
"""

from .config import EngineConfig, get_config, load_config
from .contracts import MalformedSnapshotError, parse_snapshots, parse_tracked_item
from .models import BookFormat, DailyDelta, DeltaUnit, ItemStatus, ProgressSnapshot, TrackedItem

__all__ = [
    "BookFormat",
    "DailyDelta",
    "DeltaUnit",
    "EngineConfig",
    "ItemStatus",
    "MalformedSnapshotError",
    "ProgressSnapshot",
    "TrackedItem",
    "get_config",
    "load_config",
    "parse_snapshots",
    "parse_tracked_item",
]
