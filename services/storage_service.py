"""
services/storage_service.py
----------------------------
Async entity storage over named collections.
Every call loads the whole collection from the repository, works on it in
memory and, for writes, saves it back. The blocking repository work runs in
a worker thread so callers can simply `await` it.
"""

import asyncio
from typing import Optional

from config import STORAGE_DELAY_MS
from repositories.collection_repo import CollectionRepository, get_repository
from utils.exceptions import EntityNotFoundError, StorageError
from utils.helpers import make_id
from utils.logger import get_logger

logger = get_logger(__name__)


class StorageService:
    """
    get / query / post / put / remove over collections of dict entities.

    Contract:
        - query() of an unknown collection returns [].
        - get(), put() and remove() raise EntityNotFoundError for an unknown id.
        - post() assigns a fresh id to the stored copy and returns it.
        - Any other backend failure surfaces as StorageError.
    """

    def __init__(self, repo: Optional[CollectionRepository] = None, delay_ms: int = STORAGE_DELAY_MS):
        self.repo = repo or get_repository()
        self.delay_ms = delay_ms

    # ── READ ──────────────────────────────────────────────

    async def query(self, collection: str) -> list[dict]:
        """Return every entity in `collection`."""
        return await self._load(collection)

    async def get(self, collection: str, entity_id: str) -> dict:
        """
        Return the entity with `entity_id`.

        Raises:
            EntityNotFoundError: If no entity has that id.
        """
        entities = await self._load(collection)
        for entity in entities:
            if entity.get("id") == entity_id:
                return entity
        raise EntityNotFoundError(collection, entity_id)

    # ── WRITE ─────────────────────────────────────────────

    async def post(self, collection: str, entity: dict) -> dict:
        """Append a copy of `entity` with a newly generated id."""
        new_entity = {**entity, "id": make_id()}
        entities = await self._load(collection)
        entities.append(new_entity)
        await self._save(collection, entities)
        logger.info(f"Added entity {new_entity['id']} to '{collection}'")
        return new_entity

    async def put(self, collection: str, entity: dict) -> dict:
        """
        Replace the stored entity that has the same id as `entity`.

        Raises:
            EntityNotFoundError: If no stored entity has that id.
        """
        entities = await self._load(collection)
        idx = self._index_of(entities, entity.get("id"))
        if idx is None:
            raise EntityNotFoundError(collection, entity.get("id"))
        entities[idx] = dict(entity)
        await self._save(collection, entities)
        logger.info(f"Updated entity {entity['id']} in '{collection}'")
        return entities[idx]

    async def remove(self, collection: str, entity_id: str) -> None:
        """
        Delete the entity with `entity_id`.

        Raises:
            EntityNotFoundError: If no entity has that id.
        """
        entities = await self._load(collection)
        idx = self._index_of(entities, entity_id)
        if idx is None:
            raise EntityNotFoundError(collection, entity_id)
        del entities[idx]
        await self._save(collection, entities)
        logger.info(f"Removed entity {entity_id} from '{collection}'")

    # ── HELPERS ───────────────────────────────────────────

    async def _load(self, collection: str) -> list[dict]:
        await self._delay()
        try:
            entities = await asyncio.to_thread(self.repo.load, collection)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to load collection '{collection}': {e}")
            raise StorageError(f"Cannot load collection '{collection}'") from e
        return list(entities or [])

    async def _save(self, collection: str, entities: list[dict]) -> None:
        try:
            await asyncio.to_thread(self.repo.save, collection, entities)
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to save collection '{collection}': {e}")
            raise StorageError(f"Cannot save collection '{collection}'") from e

    async def _delay(self) -> None:
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)

    @staticmethod
    def _index_of(entities: list[dict], entity_id: Optional[str]) -> Optional[int]:
        for idx, entity in enumerate(entities):
            if entity.get("id") == entity_id:
                return idx
        return None
