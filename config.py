"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Storage ───────────────────────────────────────────────
# 'json' keeps every collection in a local file, 'postgres' in the kv_store table
STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "json").strip().lower()
STORAGE_DIR: str = os.getenv("STORAGE_DIR", ".storage")
STORAGE_DELAY_MS: int = int(os.getenv("STORAGE_DELAY_MS", "0"))

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "loc_catalog")
DB_USER: str = os.getenv("DB_USER", "loc_catalog_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Catalog ───────────────────────────────────────────────
LOC_PAGE_SIZE: int = int(os.getenv("LOC_PAGE_SIZE", "5"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
