"""
main.py
-------
Bootstrap for the location catalog.

Responsibilities:
    - Open the PostgreSQL pool and schema when that backend is selected.
    - Seed the demo locations into an empty collection.
    - Log a short summary of what the catalog holds.
"""

import asyncio
import locale

from config import STORAGE_BACKEND
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from services.location_service import LocationService
from utils.logger import get_logger

logger = get_logger(__name__)


async def log_summary(service: LocationService) -> None:
    """Log every location in the current sort order, then the aggregate counts."""
    locs = await service.query()
    for loc in locs:
        logger.info(f"  {loc}")

    by_rate = await service.get_loc_count_by_rate_map()
    logger.info(f"Locations by rate: {by_rate.to_dict()}")
    await service.get_loc_count_by_update_time()


def main() -> None:
    """Prepare storage and report on the catalog."""

    # ── 1. Locale and storage setup ───────────────────────
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Falling back to the C collation for name sorting: {e}")

    logger.info(f"Using '{STORAGE_BACKEND}' storage backend")
    if STORAGE_BACKEND == "postgres":
        init_pool()
        create_tables()

    try:
        # ── 2. Demo data ──────────────────────────────────
        service = LocationService()
        seeded = service.ensure_demo_locs()
        if seeded:
            logger.info(f"Collection was empty, added {seeded} demo locations")

        # ── 3. Summary ────────────────────────────────────
        asyncio.run(log_summary(service))
    finally:
        # ── 4. Cleanup ────────────────────────────────────
        close_pool()


if __name__ == "__main__":
    main()
