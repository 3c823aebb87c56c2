"""
Redis-backed key-value store and its sentinel-returning facade.
"""
from kvfacade.cache.results import (
    StoreStatus, StoreResult, TimeUnit,
    StoreError, StoreUnavailableError, InvalidArgumentError
)
from kvfacade.cache.redis_client import RedisConfig, create_redis_client, close_redis_client
from kvfacade.cache.store import KeyValueStore
from kvfacade.cache.facade import KeyValueFacade

__all__ = [
    'StoreStatus',
    'StoreResult',
    'TimeUnit',
    'StoreError',
    'StoreUnavailableError',
    'InvalidArgumentError',
    'RedisConfig',
    'create_redis_client',
    'close_redis_client',
    'KeyValueStore',
    'KeyValueFacade',
]
