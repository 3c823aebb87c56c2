"""
Health check for the key-value store.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Dict, Any
from dataclasses import dataclass
from enum import Enum

import structlog

from kvfacade.cache.store import KeyValueStore

logger = structlog.get_logger(__name__)

SLOW_RESPONSE_MS = 1000


class HealthStatus(Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Result of a health check."""
    name: str
    status: HealthStatus
    message: str
    details: Dict[str, Any]
    duration_ms: float
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'name': self.name,
            'status': self.status.value,
            'message': self.message,
            'details': self.details,
            'duration_ms': self.duration_ms,
            'timestamp': self.timestamp.isoformat(),
        }


def check_store_health(store: KeyValueStore, name: str = 'redis') -> HealthCheckResult:
    """Ping the store and round-trip a short-lived probe key."""
    start_time = time.time()
    probe_key = f"health_check:{uuid.uuid4().hex}"
    probe_value = datetime.now(timezone.utc).isoformat()

    steps = {
        'ping': store.ping(),
        'set': store.set(probe_key, probe_value, expire=60),
        'get': store.get(probe_key),
        'delete': store.delete(probe_key),
    }
    duration_ms = (time.time() - start_time) * 1000

    failed = [step for step, result in steps.items() if not result.succeeded]
    read_back = steps['get'].value == probe_value

    if failed or not read_back:
        status = HealthStatus.UNHEALTHY
        message = "Store health check failed"
    elif duration_ms > SLOW_RESPONSE_MS:
        status = HealthStatus.DEGRADED
        message = "Store responding slowly"
    else:
        status = HealthStatus.HEALTHY
        message = "Store is healthy"

    result = HealthCheckResult(
        name=name,
        status=status,
        message=message,
        details={
            'failed_steps': failed,
            'read_back': read_back,
            'errors': {
                step: str(res.error) for step, res in steps.items() if res.error is not None
            },
        },
        duration_ms=duration_ms,
        timestamp=datetime.now(timezone.utc),
    )
    if status is not HealthStatus.HEALTHY:
        logger.warning("Store health check", name=name, status=status.value, failed_steps=failed)
    return result
