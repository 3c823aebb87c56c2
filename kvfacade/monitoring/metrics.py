"""
Prometheus metrics for key-value store operations.
"""

from typing import Optional

from prometheus_client import (
    Counter, Histogram, Info,
    CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST
)
import structlog

logger = structlog.get_logger(__name__)


class CacheMetrics:
    """Counters and timings for store operations."""

    def __init__(self, registry: Optional[CollectorRegistry] = None, namespace: str = 'kv'):
        """
        Initialize the metrics.

        Args:
            registry: Prometheus registry, a private one is created if None
            namespace: Prefix for every metric name
        """
        self.registry = registry or CollectorRegistry()
        self.namespace = namespace
        self._setup_metrics()
        logger.debug("Cache metrics initialized", namespace=namespace)

    def _setup_metrics(self):
        self.info = Info(
            f'{self.namespace}_facade',
            'Key-value facade information',
            registry=self.registry
        )
        self.info.info({'component': 'kv_store'})

        self.operations_total = Counter(
            f'{self.namespace}_operations_total',
            'Total number of store operations',
            ['operation', 'status'],
            registry=self.registry
        )

        self.operation_duration_seconds = Histogram(
            f'{self.namespace}_operation_duration_seconds',
            'Time spent waiting on the store',
            ['operation'],
            buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0],
            registry=self.registry
        )

    def record_operation(self, operation: str, status: str, duration: Optional[float] = None):
        """Record one store operation and, if known, how long it took."""
        self.operations_total.labels(operation=operation, status=status).inc()
        if duration is not None:
            self.operation_duration_seconds.labels(operation=operation).observe(duration)

    def operation_count(self, operation: str, status: str) -> float:
        """Current counter value for an operation/status pair."""
        value = self.registry.get_sample_value(
            f'{self.namespace}_operations_total',
            {'operation': operation, 'status': status}
        )
        return value or 0.0

    def hit_ratio(self) -> float:
        """Share of ``get`` calls that found a value."""
        hits = self.operation_count('get', 'ok')
        misses = self.operation_count('get', 'missing')
        total = hits + misses
        return hits / total if total > 0 else 0.0

    def get_metrics(self) -> str:
        """Metrics in Prometheus exposition format."""
        return generate_latest(self.registry).decode('utf-8')

    def get_content_type(self) -> str:
        return CONTENT_TYPE_LATEST
