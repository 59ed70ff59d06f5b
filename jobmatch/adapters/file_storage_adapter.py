"""
Concrete implementation of StoragePort backed by a single JSON file on disk.

Blocking file I/O is offloaded to a threadpool via asyncio.to_thread().
Writes go to a sibling temp file first and are swapped in with os.replace(),
so a crash mid-write never leaves a truncated store behind.
"""

import asyncio
import json
import logging
import os
from pathlib import Path

from jobmatch.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


class FileStorageAdapter(StoragePort):
    """Keeps every slot as a string value inside one JSON object file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        # Serializes read-modify-write cycles between the debounced slots
        self._lock = asyncio.Lock()

    async def load(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read_all)
        value = data.get(key)
        return value if isinstance(value, str) else None

    async def save(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            await asyncio.to_thread(self._write_all, data)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Ignoring unreadable store {self._path}: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self._path}: top level is not an object")
            return {}
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self._path)
