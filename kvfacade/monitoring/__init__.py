"""
Monitoring package: Prometheus metrics and store health checks.
"""

from .metrics import CacheMetrics

__all__ = [
    'CacheMetrics',
]
