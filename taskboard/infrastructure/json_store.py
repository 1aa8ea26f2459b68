"""JSON File Store — one JSON array per collection under a data directory.

Invariants:
    - Layout: <data_dir>/users.json, boards.json, tasks.json (each a JSON array)
    - Missing file reads as []; the directory is created on first write
    - Writes are atomic (temp file in the same directory + os.replace)
    - OSError / JSONDecodeError / non-array content → StorageError

Design Decisions:
    - Blocking file IO pushed to a worker thread (asyncio.to_thread): event loop stays free
    - Pretty-printed output: files stay diffable and hand-editable
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from taskboard.core.domain_types import Collection
from taskboard.core.errors import StorageError
from taskboard.infrastructure.document_store import DocumentStore

logger = logging.getLogger(__name__)


class JsonFileStore(DocumentStore):
    """File-backed backend. Survives restarts; single process only."""

    backend_name = "json"

    def __init__(self, data_dir: str | Path) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)

    def path_for(self, collection: Collection) -> Path:
        return self.data_dir / f"{collection.value}.json"

    async def _read(self, collection: Collection) -> list[dict]:
        return await asyncio.to_thread(self._read_file, self.path_for(collection))

    async def _write(self, collection: Collection, docs: list[dict]) -> None:
        await asyncio.to_thread(self._write_file, self.path_for(collection), docs)

    def _read_file(self, path: Path) -> list[dict]:
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(
                f"Failed to read {path}: {e}",
                extra={"operation": "read", "backend": self.backend_name},
            )
            raise StorageError("read", str(e))
        if not isinstance(data, list):
            logger.error(
                f"{path} does not contain a JSON array",
                extra={"operation": "read", "backend": self.backend_name},
            )
            raise StorageError("read", f"{path.name} is not a JSON array")
        return data

    def _write_file(self, path: Path, docs: list[dict]) -> None:
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(docs, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(
                f"Failed to write {path}: {e}",
                extra={"operation": "write", "backend": self.backend_name},
            )
            raise StorageError("write", str(e))

    async def health_check(self) -> bool:
        """Data directory exists (or can be created) and is writable."""
        try:
            await asyncio.to_thread(self.data_dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"JSON store health check failed: {e}")
            return False
        return os.access(self.data_dir, os.W_OK)
