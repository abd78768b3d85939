"""
Reading streaks across all tracked items.

A streak is a run of consecutive UTC days with at least one positive
reconstructed delta on any item. The current streak only counts if the last
active day is today or yesterday: reading yesterday keeps the streak alive
until the end of today.
"""

from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Iterable

from readpace.config import EngineConfig, get_config
from readpace.models import DailyDelta


@dataclass
class StreakSummary:
    current_streak: int
    longest_streak: int

    def to_dict(self) -> dict:
        return asdict(self)


def active_dates_from_deltas(deltas: Iterable[DailyDelta]) -> set[date]:
    """Union of days with positive activity."""
    return {d.date for d in deltas if d.delta > 0}


def _runs(sorted_dates: list[date]) -> list[tuple[date, int]]:
    """(last_day, length) for every run of consecutive days."""
    runs = []
    run_end = None
    length = 0
    for day in sorted_dates:
        if run_end is not None and day - run_end == timedelta(days=1):
            length += 1
        else:
            if run_end is not None:
                runs.append((run_end, length))
            length = 1
        run_end = day
    if run_end is not None:
        runs.append((run_end, length))
    return runs


def compute_streaks(active_dates: Iterable[date], today: date) -> StreakSummary:
    """
    Current and longest streak.

    Args:
        active_dates: Days with any activity, across all items.
        today: Reference day (explicit so results do not depend on the clock).
    """
    dates = sorted(set(active_dates))
    if not dates:
        return StreakSummary(current_streak=0, longest_streak=0)

    runs = _runs(dates)
    longest = max(length for _, length in runs)

    last_day, last_length = runs[-1]
    current = 0
    if last_day in (today, today - timedelta(days=1)):
        current = last_length

    return StreakSummary(current_streak=current, longest_streak=longest)


def has_enough_streak_data(active_dates: Iterable[date], config: EngineConfig | None = None) -> bool:
    config = config or get_config()
    return len(set(active_dates)) >= config.streak_min_distinct_dates


def streak_series(
    active_dates: Iterable[date],
    today: date,
    days: int | None = None,
    config: EngineConfig | None = None,
) -> list[dict]:
    """
    Running streak length for each of the last `days` days, for a line chart.

    Returns:
        [{"date": "YYYY-MM-DD", "streak_length": int, "is_active": bool}, ...]
    """
    config = config or get_config()
    if days is None:
        days = config.streak_chart_days
    active = set(active_dates)

    # Seed the run with activity before the chart starts
    start = today - timedelta(days=days - 1)
    running = 0
    probe = start - timedelta(days=1)
    while probe in active:
        running += 1
        probe -= timedelta(days=1)

    series = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        running = running + 1 if day in active else 0
        series.append({"date": day.isoformat(), "streak_length": running, "is_active": running > 0})
    return series
