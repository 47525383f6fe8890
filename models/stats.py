"""
models/stats.py
---------------
Aggregate counts over the location collection.
"""

from dataclasses import dataclass


@dataclass
class RateStats:
    """Locations per rating band: high (>4), medium (3-4), low (<3)."""
    high: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return {"high": self.high, "medium": self.medium, "low": self.low, "total": self.total}


@dataclass
class UpdateTimeStats:
    """Locations per time since their last update."""
    this_hour: int = 0
    past_day: int = 0
    past_week: int = 0
    never: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return {
            "thisHour": self.this_hour,
            "pastDay": self.past_day,
            "pastWeek": self.past_week,
            "never": self.never,
            "total": self.total,
        }
