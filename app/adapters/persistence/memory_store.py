# app/adapters/persistence/memory_store.py
import asyncio
import copy
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from app.core.ports.key_value_store import IKeyValueStore

class InMemoryKeyValueStore(IKeyValueStore):
    """
    Key-value store living in a dict. Values are deep-copied in and out so
    callers never share mutable state with the store.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._key_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get(self, key: str) -> Optional[Any]:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def update(self, key: str, fn: Callable[[Optional[Any]], Any]) -> Any:
        async with self._key_locks[key]:
            value = fn(await self.get(key))
            await self.set(key, value)
            return value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self, prefix: str = "") -> List[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    async def health_check(self) -> bool:
        return True
