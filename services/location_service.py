"""
services/location_service.py
-----------------------------
Business logic for the location catalog: filtered and sorted queries,
CRUD, and aggregate counts by rating and by update time.
All persistence goes through the async StorageService.
"""

import copy
import locale
import math
import re
import unicodedata
from typing import Callable, Optional

from models.location import Geo, Location
from models.query import FilterBy, QueryOptions, SortBy, SortKey
from models.stats import RateStats, UpdateTimeStats
from services.storage_service import StorageService
from utils.helpers import (
    DAY_MS,
    HOUR_MS,
    WEEK_MS,
    load_from_storage,
    make_id,
    now_ms,
    random_past_time,
    save_to_storage,
)
from utils.logger import get_logger

logger = get_logger(__name__)

DB_KEY = "locs"

_DEMO_LOCS = [
    Location(
        name="Ben Gurion Airport",
        rate=2,
        geo=Geo(address="Ben Gurion Airport, 7015001, Israel", lat=32.0004465, lng=34.8706095, zoom=12),
    ),
    Location(
        name="Dekel Beach",
        rate=4,
        geo=Geo(address="Derekh Mitsrayim 1, Eilat, 88000, Israel", lat=29.5393848, lng=34.9457792, zoom=15),
    ),
    Location(
        name="Dahab, Egypt",
        rate=5,
        geo=Geo(address="Dahab, South Sinai, Egypt", lat=28.5096676, lng=34.5165187, zoom=11),
    ),
]


class LocationService:
    """
    Catalog of saved locations.

    The service keeps a current filter and sort, changed through
    set_filter_by() / set_sort_by() and used by query() when no explicit
    QueryOptions are given. That state belongs to this instance only.
    """

    def __init__(self, storage: Optional[StorageService] = None, clock: Callable[[], int] = now_ms):
        self.storage = storage or StorageService()
        self.clock = clock
        self.filter_by = FilterBy()
        self.sort_by: Optional[SortBy] = SortBy(SortKey.RATE, -1)

    # ── QUERY ─────────────────────────────────────────────

    async def query(self, options: Optional[QueryOptions] = None) -> list[Location]:
        """
        Fetch locations that pass the filter, in sort order.

        Args:
            options: Explicit filter/sort/paging. When omitted, the current
                filter and sort of this service are used, without paging.

        Returns:
            Matching locations; an empty list is a valid result.
        """
        if options is None:
            options = QueryOptions(filter_by=self.filter_by, sort_by=self.sort_by)

        locs = [Location.from_dict(d) for d in await self.storage.query(DB_KEY)]

        filter_by = options.filter_by
        if filter_by.text:
            pattern = self._compile_text(filter_by.text)
            locs = [loc for loc in locs if pattern.search(loc.name or "")]
        if filter_by.min_rate:
            locs = [loc for loc in locs if (loc.rate or 0) >= filter_by.min_rate]

        if options.sort_by is not None:
            locs = self._sort(locs, options.sort_by)

        if options.page_idx is not None:
            start = options.page_idx * options.page_size
            locs = locs[start:start + options.page_size]

        return locs

    async def get_by_id(self, loc_id: str) -> Location:
        """
        Fetch a single location.

        Raises:
            EntityNotFoundError: If no location has that id.
        """
        return Location.from_dict(await self.storage.get(DB_KEY, loc_id))

    # ── WRITE ─────────────────────────────────────────────

    async def remove(self, loc_id: str) -> None:
        """
        Delete a location.

        Raises:
            EntityNotFoundError: If no location has that id. Removing twice fails.
        """
        await self.storage.remove(DB_KEY, loc_id)

    async def save(self, loc: Location) -> Location:
        """
        Create or update a location.

        A location with an id is updated: updated_at moves to now and
        created_at is kept. If the caller left created_at empty, the stored
        value is carried over. A location without an id is created with both
        timestamps set to now and an id assigned by storage.

        Returns:
            The location as persisted.
        """
        now = self.clock()
        if loc.id:
            if loc.created_at is None:
                stored = await self.storage.get(DB_KEY, loc.id)
                loc.created_at = stored.get("createdAt")
            loc.updated_at = now
            saved = await self.storage.put(DB_KEY, loc.to_dict())
        else:
            loc.created_at = loc.updated_at = now
            saved = await self.storage.post(DB_KEY, loc.to_dict())
        return Location.from_dict(saved)

    # ── FILTER / SORT STATE ───────────────────────────────

    def set_filter_by(self, filter_by: Optional[dict] = None, **fields) -> FilterBy:
        """
        Merge new values into the current filter.

        Accepted keys: ``text`` (or ``txt``) and ``min_rate`` (or ``minRate``).
        Keys that are absent leave the current value alone. A min_rate that
        is not a finite number is ignored rather than rejected.

        Returns:
            A copy of the resulting filter.
        """
        changes = {**(filter_by or {}), **fields}

        text = changes.get("text", changes.get("txt"))
        if text is not None:
            self.filter_by.text = str(text)

        raw_rate = changes.get("min_rate", changes.get("minRate"))
        if raw_rate is not None:
            min_rate = self._parse_rate(raw_rate)
            if min_rate is None:
                logger.debug(f"Ignoring non-numeric min_rate {raw_rate!r}")
            else:
                self.filter_by.min_rate = min_rate

        return copy.copy(self.filter_by)

    def set_sort_by(self, sort_by: SortBy | dict | None = None) -> Optional[SortBy]:
        """
        Replace the current sort. A dict such as ``{"name": 1}`` is accepted;
        an empty one (or None) turns sorting off.
        """
        if isinstance(sort_by, dict):
            sort_by = SortBy.from_dict(sort_by)
        self.sort_by = sort_by
        return self.sort_by

    # ── STATS ─────────────────────────────────────────────

    async def get_loc_count_by_rate_map(self) -> RateStats:
        """Count locations per rating band: high (>4), medium (3-4), low (<3)."""
        locs = await self.storage.query(DB_KEY)
        stats = RateStats(total=len(locs))
        for loc in locs:
            rate = loc.get("rate") or 0
            if rate > 4:
                stats.high += 1
            elif rate >= 3:
                stats.medium += 1
            else:
                stats.low += 1
        return stats

    async def get_loc_count_by_update_time(self) -> UpdateTimeStats:
        """
        Count locations by how long ago they were last updated:
        this hour, past day, past week, or longer ("never").

        Raises:
            StorageError: Logged, then re-raised.
        """
        now = self.clock()
        try:
            locs = await self.storage.query(DB_KEY)
        except Exception as e:
            logger.error(f"Error fetching location data: {e}")
            raise

        stats = UpdateTimeStats(total=len(locs))
        for loc in locs:
            updated_at = loc.get("updatedAt")
            elapsed = now - updated_at if updated_at is not None else math.inf
            if elapsed < HOUR_MS:
                stats.this_hour += 1
            elif elapsed < DAY_MS:
                stats.past_day += 1
            elif elapsed < WEEK_MS:
                stats.past_week += 1
            else:
                stats.never += 1

        logger.info(f"Location count by update time: {stats.to_dict()}")
        return stats

    # ── BOOTSTRAP ─────────────────────────────────────────

    def ensure_demo_locs(self) -> int:
        """
        Seed the demo locations if the collection is empty or missing.

        Returns:
            How many locations were seeded (0 if the collection had data).
        """
        existing = load_from_storage(DB_KEY, self.storage.repo)
        if existing:
            return 0

        locs = [self._create_demo_loc(loc) for loc in _DEMO_LOCS]
        save_to_storage(DB_KEY, [loc.to_dict() for loc in locs], self.storage.repo)
        logger.info(f"Seeded {len(locs)} demo locations under '{DB_KEY}'")
        return len(locs)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _create_demo_loc(template: Location) -> Location:
        loc = copy.deepcopy(template)
        loc.id = make_id()
        loc.created_at = loc.updated_at = random_past_time()
        return loc

    @staticmethod
    def _compile_text(text: str) -> re.Pattern:
        """Case-insensitive pattern; text that is not a valid regex is matched literally."""
        try:
            return re.compile(text, re.IGNORECASE)
        except re.error:
            return re.compile(re.escape(text), re.IGNORECASE)

    @staticmethod
    def _parse_rate(value) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            rate = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(rate):
            return None
        return int(rate) if rate.is_integer() else rate

    @staticmethod
    def _sort(locs: list[Location], sort_by: SortBy) -> list[Location]:
        reverse = sort_by.direction < 0
        if sort_by.key is SortKey.RATE:
            key = lambda loc: loc.rate or 0
        elif sort_by.key is SortKey.NAME:
            key = lambda loc: _collation_key(loc.name or "")
        else:
            key = lambda loc: loc.updated_at or 0
        return sorted(locs, key=key, reverse=reverse)


def _collation_key(name: str) -> tuple[str, str]:
    """
    Sort key for names. Accents and case are ignored first, so "Éilat"
    sorts with the other E names, not after "Z", whatever LC_COLLATE is;
    ties fall back to the process collation.
    """
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, locale.strxfrm(name.casefold())
