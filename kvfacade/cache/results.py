"""
Result and error types returned by the key-value store.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError


class StoreStatus(Enum):
    """Outcome of a single store operation."""
    OK = "ok"
    MISSING = "missing"
    FAILED = "failed"


class TimeUnit(Enum):
    """Units accepted for expiry times, valued in milliseconds."""
    MILLISECONDS = 1
    SECONDS = 1000
    MINUTES = 60 * 1000
    HOURS = 60 * 60 * 1000
    DAYS = 24 * 60 * 60 * 1000

    def to_milliseconds(self, duration: int) -> int:
        return int(duration * self.value)


class StoreError(Exception):
    """Base error for a failed store operation."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class StoreUnavailableError(StoreError):
    """The store could not be reached or did not answer in time."""
    pass


class InvalidArgumentError(StoreError):
    """Caller input was rejected before contacting the store."""
    pass


def classify_error(exc: BaseException) -> StoreError:
    """Wrap a client exception in the matching StoreError subclass."""
    if isinstance(exc, StoreError):
        return exc
    if isinstance(exc, (RedisConnectionError, RedisTimeoutError)):
        return StoreUnavailableError(f"store unavailable: {exc}", cause=exc)
    if isinstance(exc, RedisError):
        return StoreError(f"store error: {exc}", cause=exc)
    return StoreError(f"unexpected client error: {exc!r}", cause=exc)


@dataclass(frozen=True)
class StoreResult:
    """Discriminated result of a store operation."""
    operation: str
    key: Optional[str]
    status: StoreStatus
    value: Any = None
    error: Optional[StoreError] = None

    @classmethod
    def ok(cls, operation: str, key: Optional[str], value: Any = None) -> "StoreResult":
        return cls(operation=operation, key=key, status=StoreStatus.OK, value=value)

    @classmethod
    def missing(cls, operation: str, key: Optional[str]) -> "StoreResult":
        return cls(operation=operation, key=key, status=StoreStatus.MISSING)

    @classmethod
    def failure(cls, operation: str, key: Optional[str], error: StoreError) -> "StoreResult":
        return cls(operation=operation, key=key, status=StoreStatus.FAILED, error=error)

    @property
    def succeeded(self) -> bool:
        return self.status is StoreStatus.OK

    @property
    def failed(self) -> bool:
        return self.status is StoreStatus.FAILED

    def unwrap_or(self, default: Any) -> Any:
        """Return the value on success, otherwise ``default``."""
        return self.value if self.succeeded else default
