"""
Core value types for the readpace engine.

- BookFormat: physical / ebook / audio
- ProgressSnapshot: one cumulative progress observation (immutable)
- TrackedItem: a reading or listening deadline with its snapshots
- DailyDelta: reconstructed activity for one item on one UTC day

These are plain dataclasses. Untrusted backend records are validated into
them by readpace.contracts before they reach the engine.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum


class BookFormat(Enum):
    """How a tracked item is consumed, and so which unit its quantity uses."""

    PHYSICAL = "physical"
    EBOOK = "ebook"
    AUDIO = "audio"

    def __str__(self) -> str:
        return self.value


class ItemStatus(Enum):
    ACTIVE = "active"
    COMPLETE = "complete"
    SET_ASIDE = "set_aside"

    def __str__(self) -> str:
        return self.value


class DeltaUnit(Enum):
    """Unit of a reconstructed delta."""

    PAGE_EQUIVALENT = "page_equivalent"
    NATIVE = "native"

    def __str__(self) -> str:
        return self.value


def to_utc(ts: datetime) -> datetime:
    """Naive timestamps are taken as UTC; aware ones are converted."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Cumulative progress recorded at a point in time."""

    id: str
    created_at: datetime
    cumulative_progress: float
    tracked_item_id: str

    @property
    def utc_date(self) -> date:
        """UTC calendar day this snapshot is bucketed into."""
        return to_utc(self.created_at).date()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": to_utc(self.created_at).isoformat(),
            "cumulative_progress": self.cumulative_progress,
            "tracked_item_id": self.tracked_item_id,
        }


@dataclass
class TrackedItem:
    """A reading/listening goal with a target quantity and a due date."""

    id: str
    format: BookFormat
    total_quantity: float
    deadline_date: date
    flexibility: str | None = None
    title: str | None = None
    author: str | None = None
    source: str | None = None
    created_at: datetime | None = None
    status: ItemStatus = ItemStatus.ACTIVE
    snapshots: list[ProgressSnapshot] = field(default_factory=list)

    @property
    def is_archived(self) -> bool:
        return self.status != ItemStatus.ACTIVE

    def sorted_snapshots(self) -> list[ProgressSnapshot]:
        return sorted(self.snapshots, key=lambda s: to_utc(s.created_at))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "format": self.format.value,
            "total_quantity": self.total_quantity,
            "deadline_date": self.deadline_date.isoformat(),
            "flexibility": self.flexibility,
            "title": self.title,
            "author": self.author,
            "source": self.source,
            "created_at": to_utc(self.created_at).isoformat() if self.created_at else None,
            "status": self.status.value,
            "snapshots": [s.to_dict() for s in self.sorted_snapshots()],
        }


@dataclass(frozen=True)
class DailyDelta:
    """Non-negative progress made on one item during one UTC day."""

    date: date
    item_id: str
    delta: float
    unit: DeltaUnit = DeltaUnit.PAGE_EQUIVALENT

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "item_id": self.item_id,
            "delta": self.delta,
            "unit": self.unit.value,
        }
