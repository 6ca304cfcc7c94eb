# app/adapters/persistence/filesystem_store.py
import asyncio
import json
import os
import aiofiles
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote, unquote
import structlog

from app.core.ports.key_value_store import IKeyValueStore
from app.core.domain.exceptions import StorageError

logger = structlog.get_logger()

class FileSystemKeyValueStore(IKeyValueStore):
    """
    Concrete implementation of the Key-Value Store using local JSON files.

    Layout: <base_path>/<url-quoted key>.json, one file per key.
    """

    def __init__(self, base_path: str):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        # Serializes file writes and deletes
        self._lock = asyncio.Lock()
        # One lock per key around read-modify-write in `update`
        self._key_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _get_file_path(self, key: str) -> Path:
        return self.base_path / f"{quote(key, safe='')}.json"

    # --- Interface Implementation ---

    async def get(self, key: str) -> Optional[Any]:
        path = self._get_file_path(key)
        if not path.exists():
            return None

        try:
            async with aiofiles.open(path, mode='r', encoding='utf-8') as f:
                content = await f.read()
        except OSError as e:
            logger.error("store_read_failed", key=key, error=str(e))
            raise StorageError(key, str(e))

        if not content:
            return None
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            # A corrupt file behaves like a missing key
            logger.error("store_corrupt_value", key=key, error=str(e))
            return None

    async def set(self, key: str, value: Any) -> None:
        path = self._get_file_path(key)
        tmp_path = path.with_suffix(".json.tmp")

        async with self._lock:
            try:
                async with aiofiles.open(tmp_path, mode='w', encoding='utf-8') as f:
                    await f.write(json.dumps(value, indent=2, ensure_ascii=False))
                os.replace(tmp_path, path)
            except (OSError, TypeError, ValueError) as e:
                logger.error("store_write_failed", key=key, error=str(e))
                raise StorageError(key, str(e))

    async def update(self, key: str, fn: Callable[[Optional[Any]], Any]) -> Any:
        async with self._key_locks[key]:
            value = fn(await self.get(key))
            await self.set(key, value)
            return value

    async def delete(self, key: str) -> None:
        path = self._get_file_path(key)
        async with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.error("store_delete_failed", key=key, error=str(e))
                raise StorageError(key, str(e))

    async def keys(self, prefix: str = "") -> List[str]:
        found = [unquote(p.stem) for p in self.base_path.glob("*.json")]
        return sorted(k for k in found if k.startswith(prefix))

    async def health_check(self) -> bool:
        """Checks if the data directory is accessible."""
        return self.base_path.exists() and os.access(self.base_path, os.W_OK)
