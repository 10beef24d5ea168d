"""
Store Factory

Provides a single entry point for obtaining the store instance.
The factory pattern keeps the services and routes agnostic about which
backend is being used.

Usage:
    from sabor.services.storage import get_store

    # Returns MemoryStore or SqlStore based on STORAGE_BACKEND
    store = get_store()
    orders = await store.list_orders()

Backend Switching:
    - STORAGE_BACKEND=memory → MemoryStore (seeded, lost on restart)
    - STORAGE_BACKEND=database → SqlStore (DATABASE_URL)
"""

import logging
from functools import lru_cache

from sabor.core.config import get_settings
from sabor.services.storage.base import BaseStore
from sabor.services.storage.memory import MemoryStore
from sabor.services.storage.sql import SqlStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_store() -> BaseStore:
    """
    Get the configured store instance.

    The instance is cached so every request in the process shares the
    same collections and the same mutation lock.

    Returns:
        BaseStore: MemoryStore or SqlStore
    """
    settings = get_settings()

    if settings.uses_database:
        logger.info("Store: Using SqlStore")
        return SqlStore()

    logger.info("Store: Using MemoryStore")
    return MemoryStore()


def reset_store() -> None:
    """
    Clear the cached store instance.

    The next call to get_store() builds a fresh store.
    """
    get_store.cache_clear()
    logger.debug("Store cache cleared")


__all__ = [
    "get_store",
    "reset_store",
    "BaseStore",
    "MemoryStore",
    "SqlStore",
]
