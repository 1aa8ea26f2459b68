"""Memory Store — process-lifetime collections behind the TaskBoardStore protocol.

Invariants:
    - State lives on the instance (never module-level): each store is independent
    - _read hands out copies; callers cannot mutate stored documents in place
    - Nothing survives process restart

Design Decisions:
    - Explicitly constructed and injected via app.state: tests build a fresh one per case
"""

from taskboard.core.domain_types import Collection
from taskboard.infrastructure.document_store import DocumentStore


class MemoryStore(DocumentStore):
    """In-memory backend. Useful for tests and throwaway demos."""

    backend_name = "memory"

    def __init__(self) -> None:
        super().__init__()
        self._collections: dict[Collection, list[dict]] = {c: [] for c in Collection}

    async def _read(self, collection: Collection) -> list[dict]:
        return [dict(d) for d in self._collections[collection]]

    async def _write(self, collection: Collection, docs: list[dict]) -> None:
        self._collections[collection] = [dict(d) for d in docs]
