"""
Test configuration: ensures repo root is in sys.path + determinism guards.

This allows tests to import readpace without installing it.
Enforces determinism by isolating tests from READPACE_* environment
overrides and from any config cached by a previous test.
"""

import os
import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import readpace.* and tests.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from readpace.config import EngineConfig, reset_config  # noqa: E402

# =============================================================================
# DETERMINISM GUARD: Config isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch):
    """Strip READPACE_* env vars and drop the cached config around every test."""
    for key in list(os.environ):
        if key.startswith("READPACE_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


# =============================================================================
# SHARED FIXTURES
# =============================================================================

# 2026-02-20 is a Friday
TODAY = date(2026, 2, 20)
NOW = datetime(2026, 2, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def config():
    """Default engine constants, independent of config/readpace.yaml."""
    return EngineConfig()


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return NOW
