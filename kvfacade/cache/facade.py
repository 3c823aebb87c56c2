"""
Convenience facade returning plain values and sentinels.

Each method delegates to ``KeyValueStore`` and collapses its result: a
failed call looks the same as a missing or empty value (``False``,
``None``, ``-1``, ``[]``, ``{}``). Callers that need to tell the two apart
should use ``facade.store`` directly.
"""
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Union

import redis

from kvfacade.cache.results import TimeUnit
from kvfacade.cache.store import KeyValueStore
from kvfacade.monitoring.metrics import CacheMetrics


class KeyValueFacade:
    """Sentinel-returning string, list and hash helpers over Redis."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    @classmethod
    def from_client(
        cls,
        client: redis.Redis,
        logger=None,
        metrics: Optional[CacheMetrics] = None,
    ) -> "KeyValueFacade":
        """Build a facade, and its store, around an existing Redis client."""
        return cls(KeyValueStore(client, logger=logger, metrics=metrics))

    # Strings
    def set(
        self,
        key: str,
        value: str,
        expire: Optional[Union[int, float, timedelta]] = None,
        unit: TimeUnit = TimeUnit.SECONDS,
    ) -> bool:
        """Set a string value, with optional expiry. False on failure."""
        return self.store.set(key, value, expire, unit).unwrap_or(False)

    def get(self, key: str) -> Optional[str]:
        """String value, or None when missing or on failure."""
        return self.store.get(key).unwrap_or(None)

    # Lists
    def left_push(self, key: str, value: str) -> int:
        """Push to the head of a list. New length, or -1 on failure."""
        return self.store.left_push(key, value).unwrap_or(-1)

    def range(self, key: str, start: int, end: int) -> List[str]:
        """
        List elements from ``start`` to ``end`` inclusive.

        ``0`` is the first element, ``-1`` the last, ``-2`` the one before
        it. Empty on failure.
        """
        return self.store.range(key, start, end).unwrap_or([])

    # Hashes
    def hash_set_all(self, key: str, fields: Mapping[Any, Any]) -> bool:
        return self.store.hash_set_all(key, fields).unwrap_or(False)

    def hash_get_all(self, key: str) -> Dict[str, str]:
        return self.store.hash_get_all(key).unwrap_or({})

    # Keys
    def exists(self, key: str) -> bool:
        return self.store.exists(key).unwrap_or(False)

    def delete(self, key: str) -> bool:
        """Delete a key. True if it was removed or never existed."""
        return self.store.delete(key).unwrap_or(False)
