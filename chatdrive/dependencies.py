"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from chatdrive.config import get_settings
from chatdrive.db import DbClient, InMemoryDbClient, MongoDbClient

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton store client; it is created on first use and kept for
    the lifetime of the process.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_store:
        logger.warning(
            "CHATDRIVE_USE_IN_MEMORY_STORE is set; using in-memory document store"
        )
        _db_client = InMemoryDbClient()
    elif not settings.mongo_uri:
        logger.warning("MONGO_URI not configured; using in-memory document store")
        _db_client = InMemoryDbClient()
    else:
        _db_client = MongoDbClient(settings.mongo_uri, db_name=settings.mongo_db_name)
    return _db_client
