# app\core\ports\key_value_store.py
from typing import Any, Callable, List, Optional, Protocol

class IKeyValueStore(Protocol):
    """
    Port for the app's simple persistent storage.
    Implementations keep one JSON document per key (folder or memory).

    Values must be JSON-compatible (dicts, lists, strings, numbers).
    """

    async def get(self, key: str) -> Optional[Any]:
        """
        Reads a value.

        Returns:
            The stored value, or None when the key is absent.
        """
        ...

    async def set(self, key: str, value: Any) -> None:
        """
        Writes (overwrites) a value.

        Raises:
            StorageError: the value could not be persisted.
        """
        ...

    async def update(self, key: str, fn: Callable[[Optional[Any]], Any]) -> Any:
        """
        Atomic read-modify-write: stores `fn(current value)` and returns it.

        Concurrent updates of the same key run one after another, so none
        of them works on a stale read.
        """
        ...

    async def delete(self, key: str) -> None:
        """Removes a key. Missing keys are ignored."""
        ...

    async def keys(self, prefix: str = "") -> List[str]:
        """Lists stored keys starting with `prefix`."""
        ...

    async def health_check(self) -> bool:
        """Returns True if the underlying storage is accessible."""
        ...
