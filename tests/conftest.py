"""
Test configuration and fixtures
"""

import pytest

from repositories.collection_repo import JsonFileCollectionRepository
from services.location_service import DB_KEY, LocationService
from services.storage_service import StorageService
from utils.helpers import DAY_MS, HOUR_MS

NOW = 1_700_000_000_000


class FakeClock:
    """Callable clock returning a settable millisecond timestamp."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def repo(tmp_path):
    """JSON file repository rooted in a per-test directory"""
    return JsonFileCollectionRepository(tmp_path / "storage")


@pytest.fixture
def storage(repo):
    return StorageService(repo, delay_ms=0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(storage, clock):
    return LocationService(storage, clock=clock)


@pytest.fixture
def sample_locs():
    """Three stored locations, as the collection holds them"""
    return [
        {
            "id": "a1",
            "name": "Ben Gurion Airport",
            "rate": 2,
            "geo": {"address": "Ben Gurion Airport, Israel", "lat": 32.0, "lng": 34.87, "zoom": 12},
            "createdAt": NOW - 30 * DAY_MS,
            "updatedAt": NOW - 30 * DAY_MS,
        },
        {
            "id": "b2",
            "name": "Dekel Beach",
            "rate": 4,
            "geo": {"address": "Eilat, Israel", "lat": 29.53, "lng": 34.94, "zoom": 15},
            "createdAt": NOW - 10 * HOUR_MS,
            "updatedAt": NOW - 10 * HOUR_MS,
        },
        {
            "id": "c3",
            "name": "Dahab, Egypt",
            "rate": 5,
            "geo": {"address": "Dahab, South Sinai, Egypt", "lat": 28.5, "lng": 34.51, "zoom": 11},
            "createdAt": NOW - 3 * DAY_MS,
            "updatedAt": NOW - 30 * 60 * 1000,
        },
    ]


@pytest.fixture
def seeded_repo(repo, sample_locs):
    repo.save(DB_KEY, sample_locs)
    return repo
