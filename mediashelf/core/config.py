"""
Configuration for the media catalog, read from the environment.
"""

import os
from pathlib import Path

# Database path configuration
DB_PATH = os.getenv("DB_PATH", "./data/mediashelf.db")

# Key the whole collection is persisted under
COLLECTION_KEY = os.getenv("COLLECTION_KEY", "media-reviews")

# API server binding (used by scripts/run_api.py)
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Closed rating scale, inclusive on both ends
RATING_MIN = 1
RATING_MAX = 5

MEDIA_TYPES = ("movie", "book", "podcast")
TYPE_SELECTOR_ALL = "all"
SORT_MODES = ("recent", "rating", "title")

# Version string
VERSION = "1.0.0"


def get_db_path() -> str:
    """Current database path; re-read so tests can point DB_PATH elsewhere."""
    return os.getenv("DB_PATH", DB_PATH)


def get_collection_key() -> str:
    return os.getenv("COLLECTION_KEY", COLLECTION_KEY)


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def ensure_db_directory(db_path: str = None):
    """Ensure the database directory exists."""
    Path(db_path or get_db_path()).parent.mkdir(parents=True, exist_ok=True)
