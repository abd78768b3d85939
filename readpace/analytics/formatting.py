"""
Display strings for paces and progress.
"""

import math

from readpace.analytics.units import from_page_equivalent, unit_for_format
from readpace.config import EngineConfig
from readpace.models import BookFormat


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_audio_time(minutes: float) -> str:
    """'1h 5m' or '45m'."""
    total = _round_half_up(minutes)
    hours, mins = divmod(total, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_pace_display(
    pace: float, format: BookFormat, config: EngineConfig | None = None
) -> str:
    """
    Page-equivalent pace shown in the format's unit.

    Audio is converted back to minutes: 20 page-equivalents -> '30m/day'.
    """
    if BookFormat(format) == BookFormat.AUDIO:
        minutes = _round_half_up(from_page_equivalent(BookFormat.AUDIO, pace, config))
        return f"{format_audio_time(minutes)}/day"
    return f"{_round_half_up(pace)} pages/day"


def format_combined_pace_display(pace: float, config: EngineConfig | None = None) -> str:
    """Pages and the listening time they correspond to: '40 pages/day ~1h/day'."""
    pages = _round_half_up(pace)
    minutes = _round_half_up(from_page_equivalent(BookFormat.AUDIO, pace, config))

    if minutes >= 60:
        hours, rest = divmod(minutes, 60)
        if rest > 0:
            return f"{pages} pages/day ~{hours}h{rest}m/day"
        return f"{pages} pages/day ~{hours}h/day"
    return f"{pages} pages/day ~{minutes}m/day"


def format_listening_pace_display(minutes_per_day: float) -> str:
    return f"{format_audio_time(minutes_per_day)}/day"


def format_units_per_day(units: int, format: BookFormat) -> str:
    """Native requirement: '23 pages/day needed' or '1h 5m/day needed'."""
    if BookFormat(format) == BookFormat.AUDIO:
        hours, mins = divmod(int(units), 60)
        if hours > 0:
            return f"{hours}h {mins}m/day needed"
        return f"{mins} minutes/day needed"
    return f"{units} {unit_for_format(format)}/day needed"


def format_progress_display(format: BookFormat, progress: float) -> str:
    if BookFormat(format) == BookFormat.AUDIO:
        return format_audio_time(progress)
    if float(progress).is_integer():
        return str(int(progress))
    return str(progress)


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _hours_minutes_words(minutes: int, joiner: str) -> str:
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        text = _plural(hours, "hour")
        if mins > 0:
            text += f"{joiner}{mins} minutes"
        return text
    return f"{mins} minutes"


def format_reading_estimate(
    format: BookFormat, remaining: float, config: EngineConfig | None = None
) -> str:
    """
    Time left to finish, '' when nothing remains.

    Pages are converted at the configured minutes-per-page (40 pages/hour by
    default) and rounded up to whole hours.
    """
    if remaining <= 0:
        return ""
    if BookFormat(format) == BookFormat.AUDIO:
        minutes = _round_half_up(remaining)
        return f"About {_hours_minutes_words(minutes, ' and ')} of listening time"
    minutes = from_page_equivalent(BookFormat.AUDIO, remaining, config)
    hours = math.ceil(minutes / 60)
    return f"About {_plural(hours, 'hour')} of reading time"


def format_pace_estimate(format: BookFormat, days_left: int, remaining: float) -> str:
    """Per-day pace sentence, '' when nothing remains."""
    if remaining <= 0:
        return ""
    if days_left <= 0:
        return "This deadline has already passed"

    units = math.ceil(remaining / days_left)
    if BookFormat(format) == BookFormat.AUDIO:
        return f"You'll need to listen {_hours_minutes_words(units, ' ')}/day to finish on time"
    return f"You'll need to read {units} pages/day to finish on time"


def format_minutes_per_day_needed(minutes: float) -> str:
    """Total daily time across deadlines: '1h 30m/day needed', '2h/day needed'."""
    hours, mins = divmod(_round_half_up(minutes), 60)
    if hours > 0:
        if mins > 0:
            return f"{hours}h {mins}m/day needed"
        return f"{hours}h/day needed"
    return f"{mins}m/day needed"
