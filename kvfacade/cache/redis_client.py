"""
Redis client configuration and connection management.
"""
import os
from typing import Optional

import redis
from redis.exceptions import RedisError

from kvfacade.logging_config import get_logger

logger = get_logger(__name__, component="redis_client")


class RedisConfig:
    """Connection settings for the Redis client, read from the environment."""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        max_connections: Optional[int] = None,
        socket_timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        health_check_interval: Optional[int] = None,
    ):
        self.redis_url = redis_url or os.getenv('REDIS_URL', 'redis://localhost:6379/0')
        self.max_connections = max_connections or int(os.getenv('REDIS_MAX_CONNECTIONS', '20'))
        self.socket_timeout = socket_timeout or float(os.getenv('REDIS_SOCKET_TIMEOUT', '5'))
        self.connect_timeout = connect_timeout or float(os.getenv('REDIS_CONNECT_TIMEOUT', '5'))
        self.health_check_interval = health_check_interval or int(
            os.getenv('REDIS_HEALTH_CHECK_INTERVAL', '30')
        )


def create_redis_client(config: Optional[RedisConfig] = None, verify: bool = False) -> redis.Redis:
    """
    Build a Redis client backed by its own connection pool.

    Args:
        config: Connection settings, read from the environment if None
        verify: Ping the server once and raise if it is unreachable

    Returns:
        A ``redis.Redis`` instance that decodes responses to ``str``
    """
    config = config or RedisConfig()

    pool = redis.ConnectionPool.from_url(
        config.redis_url,
        max_connections=config.max_connections,
        socket_timeout=config.socket_timeout,
        socket_connect_timeout=config.connect_timeout,
        socket_keepalive=True,
        health_check_interval=config.health_check_interval,
        decode_responses=True,
    )
    client = redis.Redis(connection_pool=pool)

    if verify:
        try:
            client.ping()
        except RedisError as e:
            logger.error("Failed to connect to Redis", error=str(e))
            pool.disconnect()
            raise
        logger.info("Redis connection established")

    return client


def close_redis_client(client: redis.Redis) -> None:
    """Close a client created by ``create_redis_client``."""
    try:
        client.connection_pool.disconnect()
        logger.info("Redis connection closed")
    except RedisError as e:
        logger.error("Error closing Redis connection", error=str(e))
