"""
Per-deadline calculations used by status cards.

Combines current progress, days left, required pace, urgency, the
pace-based status and the time estimates for one tracked item. "now" is
always passed in.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Iterable

from readpace.analytics.formatting import format_pace_estimate, format_reading_estimate
from readpace.analytics.pace import (
    HistoricalPace,
    PaceStatus,
    pace_based_status,
    pace_status_message,
    required_daily_pace,
    units_per_day,
)
from readpace.analytics.units import unit_for_format
from readpace.analytics.urgency import UrgencyLevel, classify
from readpace.config import EngineConfig
from readpace.models import TrackedItem, to_utc

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class DeadlineSummary:
    item_id: str
    current_progress: float
    total_quantity: float
    remaining: float
    progress_percentage: int
    days_left: int
    units_per_day: int  # native unit
    required_pace: int  # page-equivalents
    unit: str
    urgency: UrgencyLevel
    pace_status: PaceStatus | None
    pace_message: str | None
    reading_estimate: str = ""
    pace_estimate: str = ""

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "current_progress": self.current_progress,
            "total_quantity": self.total_quantity,
            "remaining": self.remaining,
            "progress_percentage": self.progress_percentage,
            "days_left": self.days_left,
            "units_per_day": self.units_per_day,
            "required_pace": self.required_pace,
            "unit": self.unit,
            "urgency": self.urgency.to_dict(),
            "pace_status": self.pace_status.to_dict() if self.pace_status else None,
            "pace_message": self.pace_message,
            "reading_estimate": self.reading_estimate,
            "pace_estimate": self.pace_estimate,
        }


def _deadline_instant(deadline_date: date) -> datetime:
    return datetime.combine(deadline_date, time.min, tzinfo=timezone.utc)


def days_left(deadline_date: date, now: datetime) -> int:
    """Whole days until the deadline (UTC midnight), rounded up. <= 0 when overdue."""
    delta = _deadline_instant(deadline_date) - to_utc(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def current_progress(item: TrackedItem) -> float:
    """Cumulative value of the most recent snapshot, 0 if none."""
    snapshots = item.sorted_snapshots()
    if not snapshots:
        return 0.0
    return snapshots[-1].cumulative_progress


def remaining(item: TrackedItem) -> float:
    return item.total_quantity - current_progress(item)


def progress_percentage(item: TrackedItem) -> int:
    if item.total_quantity <= 0:
        return 0
    return round(current_progress(item) / item.total_quantity * 100)


def _last_activity(item: TrackedItem) -> datetime:
    snapshots = item.sorted_snapshots()
    if snapshots:
        return to_utc(snapshots[-1].created_at)
    if item.created_at is not None:
        return to_utc(item.created_at)
    return datetime.min.replace(tzinfo=timezone.utc)


def sort_deadlines(items: Iterable[TrackedItem]) -> list[TrackedItem]:
    """Soonest deadline first; ties go to the most recently active item."""
    by_activity = sorted(items, key=_last_activity, reverse=True)
    return sorted(by_activity, key=lambda i: i.deadline_date)


def separate_deadlines(
    items: Iterable[TrackedItem], now: datetime
) -> tuple[list[TrackedItem], list[TrackedItem]]:
    """
    Split into (active, overdue).

    An item is overdue once its deadline instant has passed.
    """
    now = to_utc(now)
    active, overdue = [], []
    for item in items:
        if _deadline_instant(item.deadline_date) < now:
            overdue.append(item)
        else:
            active.append(item)
    return sort_deadlines(active), sort_deadlines(overdue)


def deadline_summary(
    item: TrackedItem,
    now: datetime,
    historical: HistoricalPace | None = None,
    config: EngineConfig | None = None,
) -> DeadlineSummary:
    """
    Everything a deadline card shows.

    Args:
        item: The tracked item.
        now: Reference instant.
        historical: The user's historical pace. When given, the pace-based
            status and message are filled in.
        config: Engine constants.
    """
    progress = current_progress(item)
    left = days_left(item.deadline_date, now)
    percentage = progress_percentage(item)
    remaining_quantity = item.total_quantity - progress
    required = required_daily_pace(item.total_quantity, progress, left, item.format, config)

    status = None
    message = None
    if historical is not None:
        status = pace_based_status(historical.value, required, left, percentage)
        message = pace_status_message(historical, required, status)

    return DeadlineSummary(
        item_id=item.id,
        current_progress=progress,
        total_quantity=item.total_quantity,
        remaining=remaining_quantity,
        progress_percentage=percentage,
        days_left=left,
        units_per_day=units_per_day(item.total_quantity, progress, left),
        required_pace=required,
        unit=unit_for_format(item.format),
        urgency=classify(left, config),
        pace_status=status,
        pace_message=message,
        reading_estimate=format_reading_estimate(item.format, remaining_quantity, config),
        pace_estimate=format_pace_estimate(item.format, left, remaining_quantity),
    )
