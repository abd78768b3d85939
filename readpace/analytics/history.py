"""
Reading history: day-by-day log of progress across tracked items.

Each entry lists, for one UTC day, every item that logged progress that
day with the amount read (reconstructed native delta) and the cumulative
total at the end of the day. Days where nothing was gained (corrections,
repeated values) are left out. Items without any progress are listed on the
day they were created.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable

from readpace.analytics.deltas import DateWindow, reconstruct_daily_deltas, representative_values
from readpace.models import BookFormat, DeltaUnit, TrackedItem, to_utc

logger = logging.getLogger(__name__)


class FormatFilter(Enum):
    READING = "reading"
    LISTENING = "listening"
    ALL = "all"

    def formats(self) -> set[BookFormat]:
        if self == FormatFilter.READING:
            return {BookFormat.PHYSICAL, BookFormat.EBOOK}
        if self == FormatFilter.LISTENING:
            return {BookFormat.AUDIO}
        return set(BookFormat)


@dataclass
class HistoryItemEntry:
    item_id: str
    title: str | None
    author: str | None
    format: BookFormat
    progress_made: float
    total_progress: float
    total_quantity: float
    deadline_date: date
    source: str | None
    flexibility: str | None

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "title": self.title,
            "author": self.author,
            "format": self.format.value,
            "progress_made": self.progress_made,
            "total_progress": self.total_progress,
            "total_quantity": self.total_quantity,
            "deadline_date": self.deadline_date.isoformat(),
            "source": self.source,
            "flexibility": self.flexibility,
        }


@dataclass
class DailyHistoryEntry:
    date: date
    items: list[HistoryItemEntry] = field(default_factory=list)

    @property
    def total_progress_made(self) -> float:
        return sum(i.progress_made for i in self.items)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "items": [i.to_dict() for i in self.items],
            "total_progress_made": self.total_progress_made,
        }


@dataclass
class HistorySummary:
    total_days: int
    total_progress_made: float
    average_progress_per_day: float
    active_items: int
    archived_items: int

    def to_dict(self) -> dict:
        return {
            "total_days": self.total_days,
            "total_progress_made": self.total_progress_made,
            "average_progress_per_day": round(self.average_progress_per_day, 2),
            "active_items": self.active_items,
            "archived_items": self.archived_items,
        }


@dataclass
class ReadingHistory:
    entries: list[DailyHistoryEntry]
    summary: HistorySummary

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "summary": self.summary.to_dict(),
        }


def _entry_for(item: TrackedItem, progress_made: float, total_progress: float) -> HistoryItemEntry:
    return HistoryItemEntry(
        item_id=item.id,
        title=item.title,
        author=item.author,
        format=item.format,
        progress_made=progress_made,
        total_progress=total_progress,
        total_quantity=item.total_quantity,
        deadline_date=item.deadline_date,
        source=item.source,
        flexibility=item.flexibility,
    )


def build_reading_history(
    items: Iterable[TrackedItem],
    start: date | None = None,
    format_filter: FormatFilter = FormatFilter.ALL,
) -> ReadingHistory:
    """
    Build the day-by-day history.

    Args:
        items: Tracked items with their snapshots.
        start: First day to include. None includes everything.
        format_filter: Restrict to reading, listening or all formats.

    Returns:
        ReadingHistory with entries newest first.
    """
    allowed = format_filter.formats()
    selected = [i for i in items if i.format in allowed]
    window = DateWindow(start=start)

    by_day: dict[date, DailyHistoryEntry] = {}

    def entry(day: date) -> DailyHistoryEntry:
        if day not in by_day:
            by_day[day] = DailyHistoryEntry(date=day)
        return by_day[day]

    for item in selected:
        if not item.snapshots:
            if item.created_at is not None:
                created = to_utc(item.created_at).date()
                if window.contains(created):
                    entry(created).items.append(_entry_for(item, 0.0, 0.0))
            continue

        made = {
            d.date: d.delta
            for d in reconstruct_daily_deltas(
                item.snapshots, item.format, mode=DeltaUnit.NATIVE, item_id=item.id
            )
        }
        for day, cumulative in representative_values(item.snapshots):
            progress_made = made.get(day, 0.0)
            # Correction days and repeated same-value logs are not reading days
            if progress_made <= 0 or not window.contains(day):
                continue
            entry(day).items.append(_entry_for(item, progress_made, cumulative))

    entries = [by_day[d] for d in sorted(by_day, reverse=True)]
    total_made = sum(e.total_progress_made for e in entries)
    archived = sum(1 for i in selected if i.is_archived)

    summary = HistorySummary(
        total_days=len(entries),
        total_progress_made=total_made,
        average_progress_per_day=total_made / len(entries) if entries else 0.0,
        active_items=len(selected) - archived,
        archived_items=archived,
    )
    logger.debug("Built reading history: %d day(s), %d item(s)", len(entries), len(selected))
    return ReadingHistory(entries=entries, summary=summary)
