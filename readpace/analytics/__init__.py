"""
Analytics engine: delta reconstruction and everything derived from it.

All functions are pure: same input, same output, no clock or I/O access.
"""

from .aggregation import (
    FormatCount,
    FormatVelocity,
    HeatmapDay,
    ProgressRing,
    ReadingStats,
    format_distribution,
    format_velocity,
    heatmap,
    heatmap_has_enough_data,
    portfolio_deltas,
    reading_stats,
    total_minutes_per_day,
    total_progress_ring,
    total_reading_time_per_day,
)
from .deadlines import (
    DeadlineSummary,
    current_progress,
    days_left,
    deadline_summary,
    progress_percentage,
    separate_deadlines,
    sort_deadlines,
)
from .deltas import (
    DateWindow,
    combine_daily_totals,
    daily_series,
    reconstruct_daily_deltas,
    representative_values,
)
from .history import FormatFilter, ReadingHistory, build_reading_history
from .pace import (
    HistoricalPace,
    PaceLevel,
    PaceMethod,
    PaceStatus,
    average_historical_pace,
    average_listening_pace,
    pace_based_status,
    pace_status_message,
    required_daily_pace,
    units_per_day,
)
from .streaks import (
    StreakSummary,
    active_dates_from_deltas,
    compute_streaks,
    has_enough_streak_data,
    streak_series,
)
from .units import from_page_equivalent, to_page_equivalent, unit_for_format
from .urgency import UrgencyLevel, classify

__all__ = [
    "DateWindow",
    "DeadlineSummary",
    "FormatFilter",
    "FormatCount",
    "FormatVelocity",
    "HeatmapDay",
    "HistoricalPace",
    "PaceLevel",
    "PaceMethod",
    "PaceStatus",
    "ProgressRing",
    "ReadingHistory",
    "ReadingStats",
    "StreakSummary",
    "UrgencyLevel",
    "active_dates_from_deltas",
    "average_historical_pace",
    "average_listening_pace",
    "build_reading_history",
    "classify",
    "combine_daily_totals",
    "compute_streaks",
    "current_progress",
    "daily_series",
    "days_left",
    "deadline_summary",
    "format_distribution",
    "format_velocity",
    "from_page_equivalent",
    "has_enough_streak_data",
    "heatmap",
    "heatmap_has_enough_data",
    "pace_based_status",
    "pace_status_message",
    "portfolio_deltas",
    "progress_percentage",
    "reading_stats",
    "reconstruct_daily_deltas",
    "representative_values",
    "required_daily_pace",
    "separate_deadlines",
    "sort_deadlines",
    "streak_series",
    "to_page_equivalent",
    "total_minutes_per_day",
    "total_progress_ring",
    "total_reading_time_per_day",
    "unit_for_format",
    "units_per_day",
]
