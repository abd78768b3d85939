"""
Builders for ProgressSnapshot and TrackedItem test data.
"""

from datetime import date, datetime, timedelta, timezone
from itertools import count

from readpace.models import BookFormat, ItemStatus, ProgressSnapshot, TrackedItem

_ids = count(1)


def snap(day: date, value: float, item_id: str = "item-1", hour: int = 12, minute: int = 0):
    """Snapshot taken at hour:minute UTC on `day`."""
    return ProgressSnapshot(
        id=f"snap-{next(_ids)}",
        created_at=datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc),
        cumulative_progress=value,
        tracked_item_id=item_id,
    )


def snaps(pairs, item_id: str = "item-1"):
    """[(date, value), ...] -> snapshots at noon UTC."""
    return [snap(d, v, item_id) for d, v in pairs]


def make_item(
    item_id: str = "item-1",
    format: BookFormat = BookFormat.PHYSICAL,
    total_quantity: float = 300,
    deadline_date: date | None = None,
    progress=(),
    status: ItemStatus = ItemStatus.ACTIVE,
    created_at: datetime | None = None,
    title: str | None = None,
):
    """Tracked item with snapshots built from (date, value) pairs."""
    if deadline_date is None:
        deadline_date = date(2026, 3, 20)
    return TrackedItem(
        id=item_id,
        format=format,
        total_quantity=total_quantity,
        deadline_date=deadline_date,
        title=title or f"Book {item_id}",
        status=status,
        created_at=created_at,
        snapshots=snaps(progress, item_id),
    )


def consecutive_days(start: date, n: int):
    return [start + timedelta(days=i) for i in range(n)]
