"""
Daily Delta Reconstruction: turns cumulative snapshots into per-day activity.

Users log a new cumulative total each time they read. To know what happened
on a given day, snapshots are bucketed by UTC calendar date and each day's
representative value is diffed against the previous observed day.

Rules:
1. Snapshots are sorted by created_at (input order does not matter).
2. Within one UTC day only the maximum cumulative value counts; ties go to
   the latest snapshot.
3. The first observed day takes its whole cumulative value (bootstrap).
4. Later days take max(0, value - previous value); corrections clamp to 0.
5. A window filters the output only. Deltas at the window edge are still
   diffed against their real predecessor, even if it lies outside.

All charts use this one reconstruction, in page-equivalent or native mode.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from readpace.analytics.units import to_page_equivalent
from readpace.config import EngineConfig
from readpace.models import BookFormat, DailyDelta, DeltaUnit, ProgressSnapshot, to_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of UTC calendar days. Either bound may be open."""

    start: date | None = None
    end: date | None = None

    @classmethod
    def trailing(cls, days: int, today: date) -> "DateWindow":
        """The last `days` days ending on (and including) today."""
        return cls(start=today - timedelta(days=max(1, days) - 1), end=today)

    def contains(self, d: date) -> bool:
        if self.start is not None and d < self.start:
            return False
        if self.end is not None and d > self.end:
            return False
        return True


def representative_values(snapshots: Iterable[ProgressSnapshot]) -> list[tuple[date, float]]:
    """
    Collapse snapshots to one (day, cumulative) pair per UTC day.

    Returns:
        Pairs in chronological order, using each day's maximum value.
    """
    ordered = sorted(snapshots, key=lambda s: (to_utc(s.created_at), s.cumulative_progress))

    best: dict[date, ProgressSnapshot] = {}
    for snap in ordered:
        day = snap.utc_date
        current = best.get(day)
        # >= so that on a tie the later snapshot wins
        if current is None or snap.cumulative_progress >= current.cumulative_progress:
            best[day] = snap

    return [(day, best[day].cumulative_progress) for day in sorted(best)]


def reconstruct_daily_deltas(
    snapshots: Iterable[ProgressSnapshot],
    format: BookFormat,
    mode: DeltaUnit = DeltaUnit.PAGE_EQUIVALENT,
    window: DateWindow | None = None,
    item_id: str | None = None,
    config: EngineConfig | None = None,
) -> list[DailyDelta]:
    """
    Reconstruct one item's positive per-day progress.

    Args:
        snapshots: The item's snapshots, in any order.
        format: The item's format, used for page-equivalent normalization.
        mode: PAGE_EQUIVALENT for cross-format use, NATIVE for the item's unit.
        window: Optional output filter.
        item_id: Id stamped on the deltas. Defaults to the snapshots' item id.
        config: Engine constants.

    Returns:
        DailyDelta list sorted by date, positive deltas only.
    """
    snapshots = list(snapshots)
    if not snapshots:
        return []
    if item_id is None:
        item_id = snapshots[0].tracked_item_id

    deltas = []
    previous = None
    for day, value in representative_values(snapshots):
        raw = value if previous is None else max(0.0, value - previous)
        previous = value

        if window is not None and not window.contains(day):
            continue
        if raw <= 0:
            continue

        if mode == DeltaUnit.PAGE_EQUIVALENT:
            amount = to_page_equivalent(format, raw, config)
        else:
            amount = raw
        deltas.append(DailyDelta(date=day, item_id=item_id, delta=amount, unit=mode))

    logger.debug(
        "Reconstructed %d active day(s) from %d snapshot(s) for item %s",
        len(deltas),
        len(snapshots),
        item_id,
    )
    return deltas


def combine_daily_totals(deltas: Iterable[DailyDelta]) -> dict[date, float]:
    """Sum deltas of any number of items per day."""
    totals: dict[date, float] = defaultdict(float)
    for d in deltas:
        totals[d.date] += d.delta
    return dict(sorted(totals.items()))


def daily_series(deltas: Iterable[DailyDelta], start: date, end: date) -> list[dict]:
    """
    Dense, zero-filled chart series from start to end inclusive.

    Returns:
        [{"date": "YYYY-MM-DD", "value": float}, ...]
    """
    totals = combine_daily_totals(deltas)
    series = []
    day = start
    while day <= end:
        series.append({"date": day.isoformat(), "value": round(totals.get(day, 0.0), 2)})
        day += timedelta(days=1)
    return series
