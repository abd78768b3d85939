"""
Pace Calculations: required and historical pace, and the pace-based status.

Two-tier historical pace:
- Tier 1: >= reliable_sample_days active days in the trailing window, use
  the average over those active days.
- Tier 2: fewer active days, fall back to a fixed default
  (25 pages/day, or 30 minutes/day for listening).

Required pace is expressed in page-equivalents so that it can be compared
with the user's historical pace across formats. units_per_day gives the
same figure in the item's own unit.
"""

import logging
import math
from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Iterable

from readpace.analytics.deltas import DateWindow, combine_daily_totals
from readpace.analytics.units import to_page_equivalent
from readpace.config import EngineConfig, get_config
from readpace.models import BookFormat, DailyDelta

logger = logging.getLogger(__name__)


class PaceMethod(Enum):
    RECENT_DATA = "recent_data"
    DEFAULT_FALLBACK = "default_fallback"

    def __str__(self) -> str:
        return self.value


class PaceLevel(Enum):
    """Pace-based status, worst first."""

    OVERDUE = "overdue"
    IMPOSSIBLE = "impossible"
    APPROACHING = "approaching"
    GOOD = "good"

    def __str__(self) -> str:
        return self.value


@dataclass
class HistoricalPace:
    """Average pace over recent active days."""

    value: float
    is_reliable: bool
    sample_size: int  # distinct active days in the window
    method: PaceMethod

    def to_dict(self) -> dict:
        data = asdict(self)
        data["value"] = round(self.value, 2)
        data["method"] = self.method.value
        return data


@dataclass
class PaceStatus:
    level: PaceLevel
    color: str  # 'green' | 'orange' | 'red'
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level.value, "color": self.color, "message": self.message}


# =====================================================================
# REQUIRED PACE
# =====================================================================


def _remaining_per_day(total_quantity: float, current_progress: float, days_left: int) -> int:
    remaining = max(0.0, total_quantity - current_progress)
    return math.ceil(remaining / max(1, days_left))


def required_daily_pace(
    total_quantity: float,
    current_progress: float,
    days_left: int,
    format: BookFormat,
    config: EngineConfig | None = None,
) -> int:
    """
    Page-equivalents per day needed to finish by the deadline.

    days_left is floored to 1, so an overdue item must be finished today.
    """
    return _remaining_per_day(
        to_page_equivalent(format, total_quantity, config),
        to_page_equivalent(format, current_progress, config),
        days_left,
    )


def units_per_day(total_quantity: float, current_progress: float, days_left: int) -> int:
    """Native units (pages, percent, minutes) per day needed to finish on time."""
    return _remaining_per_day(total_quantity, current_progress, days_left)


# =====================================================================
# HISTORICAL PACE
# =====================================================================


def _recent_active_days(
    daily_deltas: Iterable[DailyDelta], today: date, window_days: int
) -> dict[date, float]:
    window = DateWindow.trailing(window_days, today)
    totals = combine_daily_totals(d for d in daily_deltas if window.contains(d.date))
    return {day: total for day, total in totals.items() if total > 0}


def _average_pace(
    daily_deltas: Iterable[DailyDelta],
    today: date,
    window_days: int | None,
    default: float,
    config: EngineConfig,
) -> HistoricalPace:
    if window_days is None:
        window_days = config.pace_window_days
    active = _recent_active_days(daily_deltas, today, window_days)
    sample_size = len(active)

    if sample_size >= config.reliable_sample_days:
        return HistoricalPace(
            value=sum(active.values()) / sample_size,
            is_reliable=True,
            sample_size=sample_size,
            method=PaceMethod.RECENT_DATA,
        )

    logger.debug(
        "Only %d active day(s) in last %d days, using default pace %s",
        sample_size,
        window_days,
        default,
    )
    return HistoricalPace(
        value=default,
        is_reliable=False,
        sample_size=sample_size,
        method=PaceMethod.DEFAULT_FALLBACK,
    )


def average_historical_pace(
    daily_deltas: Iterable[DailyDelta],
    today: date,
    window_days: int | None = None,
    config: EngineConfig | None = None,
) -> HistoricalPace:
    """
    Average page-equivalents per active day over the trailing window.

    Deltas of several items on the same day are summed first, so the sample
    size is the number of distinct active days.
    """
    config = config or get_config()
    return _average_pace(daily_deltas, today, window_days, config.default_pages_per_day, config)


def average_listening_pace(
    daily_deltas: Iterable[DailyDelta],
    today: date,
    window_days: int | None = None,
    config: EngineConfig | None = None,
) -> HistoricalPace:
    """Same as average_historical_pace, over native audio-minute deltas."""
    config = config or get_config()
    return _average_pace(
        daily_deltas, today, window_days, config.default_listening_minutes_per_day, config
    )


# =====================================================================
# PACE-BASED STATUS
# =====================================================================


def pace_based_status(
    user_pace: float,
    required_pace: float,
    days_left: int,
    progress_percentage: float,
) -> PaceStatus:
    """
    Compare the user's pace with what a deadline needs.

    Red: overdue, not started with < 3 days left, or more than a 100%
    increase in pace needed. Orange: behind but within reach. Green: on track.
    """
    if days_left <= 0:
        return PaceStatus(PaceLevel.OVERDUE, "red", "Return or renew")

    if progress_percentage == 0 and days_left < 3:
        return PaceStatus(PaceLevel.IMPOSSIBLE, "red", "Start reading now")

    if user_pace < required_pace:
        if user_pace <= 0:
            return PaceStatus(PaceLevel.IMPOSSIBLE, "red", "Pace too slow")
        increase_needed = (required_pace - user_pace) / user_pace * 100
        if increase_needed > 100:
            return PaceStatus(PaceLevel.IMPOSSIBLE, "red", "Pace too slow")
        return PaceStatus(PaceLevel.APPROACHING, "orange", "Pick up the pace")

    return PaceStatus(PaceLevel.GOOD, "green", "You're on track")


def pace_status_message(
    historical: HistoricalPace, required_pace: float, status: PaceStatus
) -> str:
    """Longer status line shown under a deadline."""
    if status.level == PaceLevel.OVERDUE:
        return "Return or renew"

    if status.level == PaceLevel.IMPOSSIBLE:
        if historical.method == PaceMethod.DEFAULT_FALLBACK:
            return "Start reading to track pace"
        return "Pace too ambitious"

    if status.level == PaceLevel.GOOD:
        if historical.is_reliable:
            return f"On track at {round(historical.value)} pages/day"
        return "You're doing great"

    if status.level == PaceLevel.APPROACHING:
        increase = round(required_pace - historical.value)
        return f"Need {increase} more pages/day"

    return status.message
