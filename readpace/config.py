"""
Centralized configuration for readpace.

Every tunable constant of the analytics engine lives here. Values resolve in
this order:

1. READPACE_<NAME> environment variable (e.g. READPACE_URGENT_DAYS=5)
2. YAML config file (config/readpace.yaml, or the path in READPACE_CONFIG)
3. Hardcoded defaults below
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

APP_ENV_CONFIG = "READPACE_CONFIG"
ENV_PREFIX = "READPACE_"

# ============================================================
# Defaults
# ============================================================

AUDIO_MINUTES_PER_PAGE: float = 1.5
"""1.5 minutes of audio is treated as one page (40 pages/hour)."""

RELIABLE_SAMPLE_DAYS: int = 3
"""Minimum distinct active days before a historical pace is trusted."""

DEFAULT_PAGES_PER_DAY: float = 25.0
DEFAULT_LISTENING_MINUTES_PER_DAY: float = 30.0
PACE_WINDOW_DAYS: int = 7

URGENT_DAYS: int = 7
APPROACHING_DAYS: int = 14

HEATMAP_WEEKS: int = 12
HEATMAP_MIN_ACTIVE_DAYS: int = 14
STREAK_MIN_DISTINCT_DATES: int = 7
STREAK_CHART_DAYS: int = 30


def project_root() -> Path:
    """Repository root (contains readpace/, config/, tests/)."""
    return Path(__file__).parent.parent.resolve()


def default_config_path() -> Path:
    if os.environ.get(APP_ENV_CONFIG):
        return Path(os.environ[APP_ENV_CONFIG]).expanduser()
    return project_root() / "config" / "readpace.yaml"


@dataclass(frozen=True)
class EngineConfig:
    """Named, overridable engine constants."""

    audio_minutes_per_page: float = AUDIO_MINUTES_PER_PAGE
    reliable_sample_days: int = RELIABLE_SAMPLE_DAYS
    default_pages_per_day: float = DEFAULT_PAGES_PER_DAY
    default_listening_minutes_per_day: float = DEFAULT_LISTENING_MINUTES_PER_DAY
    pace_window_days: int = PACE_WINDOW_DAYS
    urgent_days: int = URGENT_DAYS
    approaching_days: int = APPROACHING_DAYS
    heatmap_weeks: int = HEATMAP_WEEKS
    heatmap_min_active_days: int = HEATMAP_MIN_ACTIVE_DAYS
    streak_min_distinct_dates: int = STREAK_MIN_DISTINCT_DATES
    streak_chart_days: int = STREAK_CHART_DAYS

    def with_overrides(self, **overrides) -> "EngineConfig":
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _load_yaml(config_path: Path) -> dict:
    """Load YAML config, return empty dict on failure."""
    if not config_path.exists():
        logger.debug("readpace config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load readpace config %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("readpace config %s is not a mapping, ignoring", config_path)
        return {}
    return data


def _coerce(name: str, raw, default):
    """Convert a raw YAML/env value to the type of the default."""
    try:
        value = float(raw)
        if isinstance(default, int) and not isinstance(default, bool):
            # Day counts must be whole: 7.9 is rejected, not truncated to 7
            if not value.is_integer():
                raise ValueError(f"{raw!r} is not a whole number")
            return int(value)
        return value
    except (TypeError, ValueError):
        logger.warning("Invalid value %r for %s, keeping %r", raw, name, default)
        return default


def load_config(config_path: Path | None = None, environ: dict | None = None) -> EngineConfig:
    """
    Build an EngineConfig from YAML and environment overrides.

    Args:
        config_path: YAML file to read. Defaults to default_config_path().
        environ: Mapping used for READPACE_* lookups. Defaults to os.environ.

    Returns:
        EngineConfig with all overrides applied.
    """
    if config_path is None:
        config_path = default_config_path()
    if environ is None:
        environ = os.environ

    base = EngineConfig()
    data = _load_yaml(Path(config_path))

    values = {}
    for f in fields(EngineConfig):
        default = getattr(base, f.name)
        value = default
        if f.name in data:
            value = _coerce(f.name, data[f.name], default)
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in environ:
            value = _coerce(env_key, environ[env_key], value)
        values[f.name] = value

    unknown = set(data) - set(values)
    if unknown:
        logger.warning("Unknown readpace config keys ignored: %s", ", ".join(sorted(unknown)))

    return EngineConfig(**values)


_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """Process-wide config, loaded once."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    global _config
    _config = None
