"""
models/query.py
---------------
Filter, sort and paging options for querying locations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from config import LOC_PAGE_SIZE


class SortKey(str, Enum):
    """The single field a query is ordered by."""
    RATE = "rate"
    NAME = "name"
    DATE = "date"


# Priority used when a mapping names more than one key
_KEY_PRIORITY = (SortKey.RATE, SortKey.NAME, SortKey.DATE)


@dataclass
class FilterBy:
    """
    Attributes:
        text: Case-insensitive pattern searched in the location name ('' = any).
        min_rate: Inclusive lower bound on rate (0 = any).
    """
    text: str = ""
    min_rate: float = 0

    def to_dict(self) -> dict:
        return {"text": self.text, "minRate": self.min_rate}


@dataclass
class SortBy:
    """
    Attributes:
        key: Field to order by.
        direction: 1 for ascending, -1 for descending.
    """
    key: SortKey = SortKey.RATE
    direction: int = -1

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["SortBy"]:
        """
        Resolve a mapping such as ``{"rate": -1}`` or ``{"name": 1}``.

        If several keys are present, rate wins over name and name over date,
        so ``{"rate": -1, "date": -1}`` sorts by rate only.
        Returns None when no known key is present.

        Raises:
            ValueError: If the direction is not a number, e.g. ``"up"``.
        """
        data = data or {}
        for key in _KEY_PRIORITY:
            if data.get(key.value) is not None:
                try:
                    raw = float(data[key.value])
                except (TypeError, ValueError):
                    raise ValueError(f"Sort direction for {key.value!r} must be numeric, got {data[key.value]!r}")
                direction = -1 if raw < 0 else 1
                return cls(key=key, direction=direction)
        return None

    def to_dict(self) -> dict:
        return {self.key.value: self.direction}


@dataclass
class QueryOptions:
    """
    Everything a single query needs. page_idx None means no paging.
    """
    filter_by: FilterBy = field(default_factory=FilterBy)
    sort_by: Optional[SortBy] = field(default_factory=SortBy)
    page_idx: Optional[int] = None
    page_size: int = LOC_PAGE_SIZE
