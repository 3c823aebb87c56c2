"""
kvfacade: convenience facade over a Redis client.
"""
from kvfacade.cache import (
    KeyValueFacade, KeyValueStore, RedisConfig, StoreResult, StoreStatus, TimeUnit,
    create_redis_client
)
from kvfacade.monitoring.metrics import CacheMetrics
from kvfacade.monitoring.health_checks import check_store_health, HealthStatus

__all__ = [
    'KeyValueFacade',
    'KeyValueStore',
    'RedisConfig',
    'StoreResult',
    'StoreStatus',
    'TimeUnit',
    'create_redis_client',
    'CacheMetrics',
    'check_store_health',
    'HealthStatus',
]

__version__ = '1.0.0'
