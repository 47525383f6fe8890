"""
repositories/collection_repo.py
--------------------------------
Key-value backends for entity collections.
A collection is a JSON array of objects stored under a single key, the
way a browser's localStorage holds it. Two backends exist:

    - JsonFileCollectionRepository: one `<key>.json` file per key (default).
    - PostgresCollectionRepository: one row per key in the `kv_store` table.

Both are synchronous; services/storage_service.py runs them off the event loop.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from psycopg2.extras import Json

from config import STORAGE_BACKEND, STORAGE_DIR
from db.connection import get_connection, release_connection
from utils.exceptions import StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


class CollectionRepository(Protocol):
    """Anything that can load and save a whole collection by key."""

    def load(self, key: str) -> Optional[list[dict]]:
        ...

    def save(self, key: str, entities: list[dict]) -> None:
        ...


class JsonFileCollectionRepository:
    """Stores each collection as a JSON file inside `base_dir`."""

    def __init__(self, base_dir: str | os.PathLike = STORAGE_DIR):
        self.base_dir = Path(base_dir)

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def load(self, key: str) -> Optional[list[dict]]:
        """
        Read the collection stored under `key`.

        Returns:
            The decoded list, or None if nothing was ever saved under `key`.

        Raises:
            StorageError: If the file cannot be read or is not valid JSON.
        """
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read collection '{key}' from {path}: {e}")
            raise StorageError(f"Cannot read collection '{key}'") from e

    def save(self, key: str, entities: list[dict]) -> None:
        """
        Replace the collection stored under `key`.
        The file is written next to the target and moved into place.
        """
        path = self._path(key)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.base_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(entities, fh, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Failed to write collection '{key}' to {path}: {e}")
            raise StorageError(f"Cannot write collection '{key}'") from e
        logger.debug(f"Saved {len(entities)} entities under '{key}'")


class PostgresCollectionRepository:
    """Stores each collection as a JSONB value in the kv_store table."""

    def load(self, key: str) -> Optional[list[dict]]:
        """
        Fetch the collection stored under `key`.

        Returns:
            The decoded list, or None if the key has no row.
        """
        sql = "SELECT value FROM kv_store WHERE key = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (key,))
                row = cur.fetchone()
                return row[0] if row else None
        finally:
            release_connection(conn)

    def save(self, key: str, entities: list[dict]) -> None:
        """Insert or overwrite the collection stored under `key`."""
        sql = """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (key)
            DO UPDATE SET value = EXCLUDED.value, updated_at = NOW();
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (key, Json(entities)))
            conn.commit()
            logger.debug(f"Saved {len(entities)} entities under '{key}'")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to save collection '{key}': {e}")
            raise
        finally:
            release_connection(conn)


def get_repository(backend: str = STORAGE_BACKEND) -> CollectionRepository:
    """
    Build the repository selected by STORAGE_BACKEND.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if backend == "json":
        return JsonFileCollectionRepository()
    if backend == "postgres":
        return PostgresCollectionRepository()
    raise ValueError(f"Unknown storage backend: {backend!r}")
