"""
Portfolio-wide aggregation across tracked items.

- Heatmap: reading sessions per day over the last 12 weeks, bucketed into
  five intensity levels.
- Total-progress ring: page-equivalent progress over page-equivalent target
  for every item that has started.
- Format velocity: average progress per observed day for each format,
  reported in the format's own unit.
- Reading stats: totals and streaks for the stat cards.
- Active deadline totals: items per format and the daily time needed to
  finish everything on time.
"""

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from readpace.analytics.deadlines import current_progress, days_left, separate_deadlines
from readpace.analytics.deltas import reconstruct_daily_deltas
from readpace.analytics.formatting import format_audio_time, format_minutes_per_day_needed
from readpace.analytics.pace import units_per_day
from readpace.analytics.streaks import active_dates_from_deltas, compute_streaks
from readpace.analytics.units import to_page_equivalent
from readpace.config import EngineConfig, get_config
from readpace.models import BookFormat, DailyDelta, DeltaUnit, TrackedItem

logger = logging.getLogger(__name__)

# (minimum sessions, intensity), highest first
INTENSITY_LEVELS = [(6, 4), (4, 3), (2, 2), (1, 1)]

FORMAT_LABELS = {
    BookFormat.PHYSICAL: "Physical",
    BookFormat.EBOOK: "E-book",
    BookFormat.AUDIO: "Audiobook",
}


# =====================================================================
# DATA CLASSES
# =====================================================================


@dataclass
class HeatmapDay:
    date: date
    day_of_week: int  # 0 = Sunday
    week_number: int  # ISO week
    session_count: int
    intensity: int  # 0-4

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data


@dataclass
class ProgressRing:
    total_progress: float  # page-equivalents
    total_target: float  # page-equivalents
    percentage: int
    remaining_percentage: int
    item_count: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_progress"] = round(self.total_progress, 2)
        data["total_target"] = round(self.total_target, 2)
        return data


@dataclass
class FormatVelocity:
    format: BookFormat
    label: str
    total_progress: float  # native units
    total_days: int
    avg_per_day: float  # native units
    page_equivalent_per_day: float
    unit: str
    item_count: int
    display_value: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["format"] = self.format.value
        return data


@dataclass
class FormatCount:
    format: BookFormat
    label: str
    count: int
    percentage: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["format"] = self.format.value
        return data


@dataclass
class ReadingStats:
    total_pages: int  # page-equivalents, audio included
    total_audio_minutes: float
    total_time_display: str
    current_streak: int
    longest_streak: int
    has_data: bool

    def to_dict(self) -> dict:
        return asdict(self)


# =====================================================================
# HELPERS
# =====================================================================


def portfolio_deltas(
    items: Iterable[TrackedItem], config: EngineConfig | None = None
) -> list[DailyDelta]:
    """Page-equivalent deltas of every item, flattened."""
    deltas = []
    for item in items:
        deltas.extend(
            reconstruct_daily_deltas(
                item.snapshots,
                item.format,
                mode=DeltaUnit.PAGE_EQUIVALENT,
                item_id=item.id,
                config=config,
            )
        )
    return deltas


def intensity_for(session_count: int) -> int:
    for minimum, level in INTENSITY_LEVELS:
        if session_count >= minimum:
            return level
    return 0


def _week_start(d: date) -> date:
    """Sunday on or before d."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


# =====================================================================
# HEATMAP
# =====================================================================


def heatmap(
    deltas: Iterable[DailyDelta], today: date, config: EngineConfig | None = None
) -> list[HeatmapDay]:
    """
    One cell per day from the start of the week (heatmap_weeks - 1) weeks ago
    through today.

    A session is one item with a positive delta on that day.
    """
    config = config or get_config()
    start = _week_start(today - timedelta(weeks=config.heatmap_weeks - 1))

    sessions: dict[date, set[str]] = defaultdict(set)
    for d in deltas:
        if d.delta > 0 and start <= d.date <= today:
            sessions[d.date].add(d.item_id)

    days = []
    day = start
    while day <= today:
        count = len(sessions.get(day, ()))
        days.append(
            HeatmapDay(
                date=day,
                day_of_week=(day.weekday() + 1) % 7,
                week_number=day.isocalendar()[1],
                session_count=count,
                intensity=intensity_for(count),
            )
        )
        day += timedelta(days=1)
    return days


def heatmap_has_enough_data(days: list[HeatmapDay], config: EngineConfig | None = None) -> bool:
    config = config or get_config()
    active = sum(1 for d in days if d.session_count > 0)
    return active >= config.heatmap_min_active_days


# =====================================================================
# TOTAL PROGRESS RING
# =====================================================================


def total_progress_ring(
    items: Iterable[TrackedItem], config: EngineConfig | None = None
) -> ProgressRing | None:
    """
    Overall completion across started items, in page-equivalents.

    Returns:
        None when no item has progress (the ring is hidden).
    """
    total_progress = 0.0
    total_target = 0.0
    count = 0
    for item in items:
        progress = current_progress(item)
        if progress <= 0:
            continue
        total_progress += to_page_equivalent(item.format, progress, config)
        total_target += to_page_equivalent(item.format, item.total_quantity, config)
        count += 1

    if count == 0 or total_target <= 0:
        return None

    percentage = round(total_progress / total_target * 100)
    return ProgressRing(
        total_progress=total_progress,
        total_target=total_target,
        percentage=percentage,
        remaining_percentage=100 - percentage,
        item_count=count,
    )


# =====================================================================
# FORMAT VELOCITY
# =====================================================================


def _velocity_display(format: BookFormat, avg_per_day: float) -> tuple[float, str, str]:
    """(rounded value, unit, display string) in the format's own unit."""
    if format == BookFormat.AUDIO:
        return round(avg_per_day, 1), "minutes/day", f"{format_audio_time(avg_per_day)}/day"
    if format == BookFormat.EBOOK:
        value = round(avg_per_day, 2)
        return value, "%/day", f"{value:g} %/day"
    value = round(avg_per_day, 1)
    return value, "pages/day", f"{value:g} pages/day"


def format_velocity(
    items: Iterable[TrackedItem], config: EngineConfig | None = None
) -> list[FormatVelocity]:
    """
    Progress per observed day, per format.

    Each item contributes its current progress and the inclusive day span
    between its first and last snapshot.
    """
    buckets = {f: {"progress": 0.0, "days": 0, "items": 0} for f in BookFormat}

    for item in items:
        snapshots = item.sorted_snapshots()
        if not snapshots:
            continue
        progress = current_progress(item)
        if progress <= 0:
            continue
        span = max(1, (snapshots[-1].utc_date - snapshots[0].utc_date).days + 1)
        bucket = buckets[item.format]
        bucket["progress"] += progress
        bucket["days"] += span
        bucket["items"] += 1

    velocities = []
    for fmt in BookFormat:
        bucket = buckets[fmt]
        if bucket["items"] == 0 or bucket["progress"] <= 0:
            continue
        avg = bucket["progress"] / bucket["days"]
        value, unit, display = _velocity_display(fmt, avg)
        velocities.append(
            FormatVelocity(
                format=fmt,
                label=FORMAT_LABELS[fmt],
                total_progress=bucket["progress"],
                total_days=bucket["days"],
                avg_per_day=value,
                page_equivalent_per_day=round(to_page_equivalent(fmt, avg, config), 2),
                unit=unit,
                item_count=bucket["items"],
                display_value=display,
            )
        )
    return velocities


# =====================================================================
# READING STATS
# =====================================================================


def reading_stats(
    items: Iterable[TrackedItem], today: date, config: EngineConfig | None = None
) -> ReadingStats | None:
    """
    Stat-card totals across active and archived items.

    Returns:
        None when there are no items at all.
    """
    items = list(items)
    if not items:
        return None

    total_pages = 0.0
    total_minutes = 0.0
    for item in items:
        progress = current_progress(item)
        if item.format == BookFormat.AUDIO:
            total_minutes += progress
            total_pages += round(to_page_equivalent(item.format, progress, config))
        else:
            total_pages += progress

    streaks = compute_streaks(active_dates_from_deltas(portfolio_deltas(items, config)), today)

    return ReadingStats(
        total_pages=int(round(total_pages)),
        total_audio_minutes=total_minutes,
        total_time_display=format_audio_time(total_minutes),
        current_streak=streaks.current_streak,
        longest_streak=streaks.longest_streak,
        has_data=total_pages > 0 or total_minutes > 0,
    )


# =====================================================================
# ACTIVE DEADLINE TOTALS
# =====================================================================


def format_distribution(items: Iterable[TrackedItem], now: datetime) -> list[FormatCount]:
    """How many active (not yet overdue) deadlines use each format."""
    active, _ = separate_deadlines(items, now)
    counts = {f: 0 for f in BookFormat}
    for item in active:
        counts[item.format] += 1

    total = len(active)
    return [
        FormatCount(
            format=fmt,
            label=FORMAT_LABELS[fmt],
            count=count,
            percentage=round(count / total * 100),
        )
        for fmt, count in counts.items()
        if count > 0
    ]


def total_minutes_per_day(
    items: Iterable[TrackedItem], now: datetime, config: EngineConfig | None = None
) -> float:
    """
    Daily time needed to finish every active deadline on time.

    Audio needs its native minutes per day; page formats are converted at
    the configured minutes-per-page.
    """
    config = config or get_config()
    active, _ = separate_deadlines(items, now)

    total = 0.0
    for item in active:
        needed = units_per_day(
            item.total_quantity, current_progress(item), days_left(item.deadline_date, now)
        )
        if item.format == BookFormat.AUDIO:
            total += needed
        else:
            total += needed * config.audio_minutes_per_page
    return total


def total_reading_time_per_day(
    items: Iterable[TrackedItem], now: datetime, config: EngineConfig | None = None
) -> str:
    """'1h 30m/day needed' across active deadlines, or 'No active deadlines'."""
    items = list(items)
    active, _ = separate_deadlines(items, now)
    if not active:
        return "No active deadlines"
    return format_minutes_per_day_needed(total_minutes_per_day(active, now, config))
