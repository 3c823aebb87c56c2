"""
Key-value store operations over a Redis client with explicit results.

Every operation makes exactly one attempt against the client. Client
failures never propagate: they come back as a FAILED ``StoreResult``
carrying the classified error, and are reported with one error-level log
record.
"""
import time
from datetime import timedelta
from typing import Any, Callable, Dict, Mapping, Optional, Union

import redis

from kvfacade.cache.results import (
    InvalidArgumentError, StoreResult, TimeUnit, classify_error
)
from kvfacade.logging_config import get_logger
from kvfacade.monitoring.metrics import CacheMetrics


def _decode(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode('utf-8')
    return value


class KeyValueStore:
    """String, list and hash operations returning ``StoreResult`` values."""

    def __init__(
        self,
        client: redis.Redis,
        logger=None,
        metrics: Optional[CacheMetrics] = None,
    ):
        """
        Args:
            client: Configured Redis client, see ``create_redis_client``
            logger: structlog logger for failure diagnostics
            metrics: Optional metrics sink for operation counts and timings
        """
        self.client = client
        self.logger = logger or get_logger(__name__, component="kv_store")
        self.metrics = metrics

    def _run(
        self,
        operation: str,
        key: Optional[str],
        command: Callable[[], StoreResult],
        check_key: bool = True,
        **params: Any
    ) -> StoreResult:
        start_time = time.perf_counter()
        try:
            if check_key and not key:
                raise InvalidArgumentError("key must be a non-empty string")
            result = command()
        except Exception as e:
            error = classify_error(e)
            self.logger.error(
                "Store operation failed",
                operation=operation,
                key=key,
                error=str(error),
                error_type=type(error).__name__,
                exc_info=True,
                **params
            )
            result = StoreResult.failure(operation, key, error)

        if self.metrics is not None:
            self.metrics.record_operation(
                operation, result.status.value, time.perf_counter() - start_time
            )
        return result

    # Strings
    def set(
        self,
        key: str,
        value: str,
        expire: Optional[Union[int, float, timedelta]] = None,
        unit: TimeUnit = TimeUnit.SECONDS,
    ) -> StoreResult:
        """
        Set a string value, optionally expiring after ``expire`` units.

        ``expire`` may also be a ``timedelta``, in which case ``unit`` is
        ignored.
        """
        def command() -> StoreResult:
            if expire is None:
                self.client.set(key, value)
            else:
                if isinstance(expire, timedelta):
                    milliseconds = int(expire.total_seconds() * 1000)
                else:
                    milliseconds = unit.to_milliseconds(expire)
                if milliseconds <= 0:
                    raise InvalidArgumentError(f"expire must be positive, got {expire!r}")
                self.client.set(key, value, px=milliseconds)
            return StoreResult.ok('set', key, True)

        params: Dict[str, Any] = {'value': value}
        if expire is not None:
            params.update(expire=str(expire), unit=getattr(unit, 'name', str(unit)))
        return self._run('set', key, command, **params)

    def get(self, key: str) -> StoreResult:
        """Get a string value; MISSING when the key does not exist."""
        def command() -> StoreResult:
            value = self.client.get(key)
            if value is None:
                return StoreResult.missing('get', key)
            return StoreResult.ok('get', key, _decode(value))

        return self._run('get', key, command)

    # Lists
    def left_push(self, key: str, value: str) -> StoreResult:
        """Insert at the head of a list, creating it if needed. Value is the new length."""
        def command() -> StoreResult:
            length = self.client.lpush(key, value)
            return StoreResult.ok('left_push', key, int(length))

        return self._run('left_push', key, command, value=value)

    def range(self, key: str, start: int, end: int) -> StoreResult:
        """
        Elements between ``start`` and ``end`` inclusive.

        Indices are zero-based; negative ones count from the tail, so
        ``range(key, 0, -1)`` is the whole list. A missing key is an empty list.
        """
        def command() -> StoreResult:
            items = self.client.lrange(key, start, end)
            return StoreResult.ok('range', key, [_decode(item) for item in items])

        return self._run('range', key, command, start=start, end=end)

    # Hashes
    def hash_set_all(self, key: str, fields: Mapping[Any, Any]) -> StoreResult:
        """Write several hash fields with a single HSET."""
        def command() -> StoreResult:
            if fields is None:
                raise InvalidArgumentError("fields must be a mapping, got None")
            if fields:
                self.client.hset(key, mapping=dict(fields))
            return StoreResult.ok('hash_set_all', key, True)

        return self._run('hash_set_all', key, command, fields=fields)

    def hash_get_all(self, key: str) -> StoreResult:
        """All fields of a hash; MISSING when the key does not exist."""
        def command() -> StoreResult:
            data = self.client.hgetall(key)
            if not data:
                return StoreResult.missing('hash_get_all', key)
            return StoreResult.ok(
                'hash_get_all', key,
                {_decode(field): _decode(value) for field, value in data.items()}
            )

        return self._run('hash_get_all', key, command)

    # Keys
    def exists(self, key: str) -> StoreResult:
        def command() -> StoreResult:
            return StoreResult.ok('exists', key, bool(self.client.exists(key)))

        return self._run('exists', key, command)

    def delete(self, key: str) -> StoreResult:
        """Delete a key. Deleting a key that does not exist succeeds."""
        def command() -> StoreResult:
            if not self.client.exists(key):
                return StoreResult.ok('delete', key, True)
            if not self.client.delete(key):
                # Removed by someone else between EXISTS and DEL
                self.logger.debug("Key already gone on delete", key=key)
            return StoreResult.ok('delete', key, True)

        return self._run('delete', key, command)

    def ping(self) -> StoreResult:
        def command() -> StoreResult:
            return StoreResult.ok('ping', None, bool(self.client.ping()))

        return self._run('ping', None, command, check_key=False)
