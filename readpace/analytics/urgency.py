"""
Urgency classification by days remaining.

Ordered, first match wins:
    days_left <= 0              -> overdue
    days_left <= urgent_days    -> urgent      (7)
    days_left <= approaching    -> approaching (14)
    otherwise                   -> good
"""

from enum import Enum

from readpace.config import EngineConfig, get_config


class UrgencyLevel(Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    APPROACHING = "approaching"
    GOOD = "good"

    def __str__(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        return URGENCY_COLORS[self]

    @property
    def message(self) -> str:
        return URGENCY_MESSAGES[self]

    def to_dict(self) -> dict:
        return {"level": self.value, "color": self.color, "message": self.message}


URGENCY_COLORS = {
    UrgencyLevel.OVERDUE: "#F87171",
    UrgencyLevel.URGENT: "#EF4444",
    UrgencyLevel.APPROACHING: "#F97316",
    UrgencyLevel.GOOD: "#22C55E",
}

URGENCY_MESSAGES = {
    UrgencyLevel.OVERDUE: "Return or renew",
    UrgencyLevel.URGENT: "Tough timeline",
    UrgencyLevel.APPROACHING: "A bit more daily",
    UrgencyLevel.GOOD: "You're doing great",
}


def classify(days_left: int, config: EngineConfig | None = None) -> UrgencyLevel:
    """Map days remaining to an urgency level."""
    config = config or get_config()
    if days_left <= 0:
        return UrgencyLevel.OVERDUE
    if days_left <= config.urgent_days:
        return UrgencyLevel.URGENT
    if days_left <= config.approaching_days:
        return UrgencyLevel.APPROACHING
    return UrgencyLevel.GOOD
