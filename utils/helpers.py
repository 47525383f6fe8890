"""
utils/helpers.py
----------------
Small helpers shared by the storage and catalog services:
id generation, clock readings and raw collection bootstrap access.
"""

import random
import string
import time
from typing import Optional

from repositories.collection_repo import CollectionRepository, get_repository

_ID_CHARS = string.ascii_letters + string.digits

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS


def make_id(length: int = 5) -> str:
    """Random alphanumeric id, e.g. 'GEouN'."""
    return "".join(random.choice(_ID_CHARS) for _ in range(length))


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def random_past_time() -> int:
    """
    A timestamp between one hour and one week ago.
    Used only when seeding demo data. The range is chosen here, not derived
    from stored data: seeded locations therefore land in the pastDay or
    pastWeek buckets, never in thisHour or never.
    """
    return now_ms() - random.randint(HOUR_MS, WEEK_MS)


def load_from_storage(key: str, repo: Optional[CollectionRepository] = None) -> Optional[list[dict]]:
    """Raw read of a collection, bypassing the async storage service."""
    repo = repo or get_repository()
    return repo.load(key)


def save_to_storage(key: str, value: list[dict], repo: Optional[CollectionRepository] = None) -> None:
    """Raw write of a collection, bypassing the async storage service."""
    repo = repo or get_repository()
    repo.save(key, value)
