"""Shared constants and enumerations for trades, checklists and analytics."""

from enum import Enum


class Direction(str, Enum):
    LONG = "Long"
    SHORT = "Short"


class ExitReason(str, Enum):
    SL_HIT = "SL Hit"
    TP_HIT = "TP Hit"
    MANUAL = "Manual"
    TIME_LIMIT = "Time Limit"


class EmotionalState(str, Enum):
    CALM = "Calm"
    GREEDY = "Greedy"
    FEARFUL = "Fearful"
    RUSHED = "Rushed"
    REVENGE = "Revenge"


class Volatility(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Trend(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    SIDEWAYS = "Sideways"


class VolumeProfile(str, Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


# Checklist keys used before strategies carried their own item lists
LEGACY_CHECKLIST_KEYS = (
    "H1_TrendAligned",
    "M15_TrendAligned",
    "M05_StructureMet",
    "ExitRuleFollowed",
)

# 0 = Sunday, matching the stored day_of_week convention
DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Realized R:R histogram buckets: (key, lower bound inclusive)
RR_BUCKETS: list[tuple[str, float]] = [
    ("<0", float("-inf")),
    ("0-1", 0.0),
    ("1-2", 1.0),
    ("2-3", 2.0),
    (">3", 3.0),
]

MISTAKE_DELIMITERS = r"[,;|\n]"
TOP_MISTAKES = 5
