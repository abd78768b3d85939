"""
Tests for urgency classification.
"""

import pytest

from readpace.analytics.urgency import UrgencyLevel, classify
from readpace.config import EngineConfig


class TestBoundaries:
    @pytest.mark.parametrize(
        "days_left,expected",
        [
            (-5, UrgencyLevel.OVERDUE),
            (0, UrgencyLevel.OVERDUE),
            (1, UrgencyLevel.URGENT),
            (7, UrgencyLevel.URGENT),
            (8, UrgencyLevel.APPROACHING),
            (14, UrgencyLevel.APPROACHING),
            (15, UrgencyLevel.GOOD),
            (365, UrgencyLevel.GOOD),
        ],
    )
    def test_classify(self, days_left, expected, config):
        assert classify(days_left, config) == expected

    def test_custom_thresholds(self):
        cfg = EngineConfig(urgent_days=3, approaching_days=5)
        assert classify(4, cfg) == UrgencyLevel.APPROACHING
        assert classify(6, cfg) == UrgencyLevel.GOOD


class TestDisplay:
    def test_messages(self):
        assert UrgencyLevel.OVERDUE.message == "Return or renew"
        assert UrgencyLevel.URGENT.message == "Tough timeline"
        assert UrgencyLevel.APPROACHING.message == "A bit more daily"
        assert UrgencyLevel.GOOD.message == "You're doing great"

    def test_every_level_has_a_color(self):
        for level in UrgencyLevel:
            assert level.color.startswith("#")

    def test_to_dict(self):
        assert UrgencyLevel.URGENT.to_dict() == {
            "level": "urgent",
            "color": "#EF4444",
            "message": "Tough timeline",
        }
