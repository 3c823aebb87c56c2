"""
Shared fixtures for key-value facade tests.
"""
import pytest
from unittest.mock import Mock
from structlog.testing import capture_logs
from prometheus_client import CollectorRegistry
from redis.exceptions import ConnectionError as RedisConnectionError

from kvfacade.cache.store import KeyValueStore
from kvfacade.cache.facade import KeyValueFacade
from kvfacade.monitoring.metrics import CacheMetrics


class FakeClock:
    """Manually advanced monotonic clock in seconds."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class InMemoryRedis:
    """Dict-backed test double covering the commands the store issues."""

    def __init__(self, clock):
        self._clock = clock
        self._data = {}
        self._expires_at = {}

    def _purge(self, key):
        deadline = self._expires_at.get(key)
        if deadline is not None and self._clock() >= deadline:
            self._data.pop(key, None)
            self._expires_at.pop(key, None)

    def ping(self):
        return True

    def set(self, key, value, px=None):
        self._data[key] = str(value)
        self._expires_at.pop(key, None)
        if px is not None:
            self._expires_at[key] = self._clock() + px / 1000.0
        return True

    def get(self, key):
        self._purge(key)
        return self._data.get(key)

    def lpush(self, key, *values):
        items = self._data.setdefault(key, [])
        for value in values:
            items.insert(0, str(value))
        return len(items)

    def lrange(self, key, start, end):
        self._purge(key)
        items = self._data.get(key, [])
        size = len(items)
        if start < 0:
            start = max(start + size, 0)
        if end < 0:
            end += size
        end = min(end, size - 1)
        if start > end:
            return []
        return list(items[start:end + 1])

    def hset(self, key, mapping=None):
        fields = self._data.setdefault(key, {})
        added = sum(1 for field in mapping if field not in fields)
        fields.update({str(k): str(v) for k, v in mapping.items()})
        return added

    def hgetall(self, key):
        self._purge(key)
        return dict(self._data.get(key, {}))

    def exists(self, *keys):
        for key in keys:
            self._purge(key)
        return sum(1 for key in keys if key in self._data)

    def delete(self, *keys):
        removed = 0
        for key in keys:
            self._purge(key)
            if key in self._data:
                del self._data[key]
                self._expires_at.pop(key, None)
                removed += 1
        return removed


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_redis(clock):
    return InMemoryRedis(clock)


@pytest.fixture
def log_entries():
    """Captured structlog event dicts."""
    with capture_logs() as entries:
        yield entries


@pytest.fixture
def metrics():
    return CacheMetrics(registry=CollectorRegistry())


@pytest.fixture
def store(fake_redis, log_entries, metrics):
    return KeyValueStore(fake_redis, metrics=metrics)


@pytest.fixture
def facade(store):
    return KeyValueFacade(store)


@pytest.fixture
def broken_redis():
    """Mock client whose every command fails with a connection error."""
    client = Mock()
    error = RedisConnectionError("Connection refused")
    for command in ('ping', 'set', 'get', 'lpush', 'lrange', 'hset', 'hgetall', 'exists', 'delete'):
        getattr(client, command).side_effect = error
    return client


@pytest.fixture
def broken_store(broken_redis, log_entries, metrics):
    return KeyValueStore(broken_redis, metrics=metrics)


@pytest.fixture
def broken_facade(broken_store):
    return KeyValueFacade(broken_store)
