"""
Unit normalization between pages, ebook percentage points and audio minutes.

Page-equivalent is the common unit for cross-format comparison. Physical
pages and ebook percentage points pass through unchanged; audio minutes are
divided by the configured minutes-per-page (1.5 by default).
"""

from readpace.config import EngineConfig, get_config
from readpace.models import BookFormat


def _minutes_per_page(config: EngineConfig | None) -> float:
    return (config or get_config()).audio_minutes_per_page


def to_page_equivalent(
    format: BookFormat, quantity: float, config: EngineConfig | None = None
) -> float:
    """Convert a native quantity to page-equivalents."""
    if BookFormat(format) == BookFormat.AUDIO:
        return quantity / _minutes_per_page(config)
    return quantity


def from_page_equivalent(
    format: BookFormat, value: float, config: EngineConfig | None = None
) -> float:
    """Convert page-equivalents back to the format's native unit."""
    if BookFormat(format) == BookFormat.AUDIO:
        return value * _minutes_per_page(config)
    return value


def unit_for_format(format: BookFormat) -> str:
    if BookFormat(format) == BookFormat.AUDIO:
        return "minutes"
    return "pages"
