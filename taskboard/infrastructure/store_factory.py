"""Store Factory — builds the configured TaskBoardStore backend.

Invariants:
    - Exactly one store per application instance, created in the lifespan
    - SQL tables auto-created only when settings.database_auto_create is true
"""

import logging

from taskboard.config import Settings
from taskboard.core.domain_types import StorageBackend
from taskboard.core.repository_protocols import TaskBoardStore
from taskboard.infrastructure.json_store import JsonFileStore
from taskboard.infrastructure.memory_store import MemoryStore
from taskboard.infrastructure.sql_store import SqlStore

logger = logging.getLogger(__name__)


async def build_store(settings: Settings) -> TaskBoardStore:
    """Instantiate the backend named by settings.storage_backend."""
    backend = settings.storage_backend
    if backend == StorageBackend.MEMORY:
        store: TaskBoardStore = MemoryStore()
    elif backend == StorageBackend.JSON:
        store = JsonFileStore(settings.data_dir)
    else:
        sql_store = SqlStore(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_auto_create:
            await sql_store.create_all()
        store = sql_store
    logger.info(f"Storage backend ready: {backend.value}", extra={"backend": backend.value})
    return store
